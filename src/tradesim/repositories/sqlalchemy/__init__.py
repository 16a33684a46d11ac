"""SQLAlchemy repository implementations."""

from tradesim.repositories.sqlalchemy.database import (
    Base,
    create_db_engine,
    create_session_factory,
    init_db,
)
from tradesim.repositories.sqlalchemy.snapshot_repo import SqlAlchemySnapshotRepository

__all__ = [
    "Base",
    "create_db_engine",
    "create_session_factory",
    "init_db",
    "SqlAlchemySnapshotRepository",
]
