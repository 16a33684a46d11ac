"""SQLAlchemy implementation of SnapshotRepository."""

from typing import Optional

from sqlalchemy.orm import sessionmaker

from tradesim.repositories.sqlalchemy.orm_models import KeyValueORM


class SqlAlchemySnapshotRepository:
    """SQLAlchemy-backed key-value slot. Each call uses its own session."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def read(self, key: str) -> Optional[str]:
        """Return the stored text for key, or None when absent."""
        with self._session_factory() as db:
            row = db.get(KeyValueORM, key)
            return row.value if row else None

    def write(self, key: str, value: str) -> None:
        """Insert or replace the text stored under key."""
        with self._session_factory() as db:
            row = db.get(KeyValueORM, key)
            if row:
                row.value = value
            else:
                db.add(KeyValueORM(key=key, value=value))
            db.commit()

    def delete(self, key: str) -> None:
        """Remove key (no-op when absent)."""
        with self._session_factory() as db:
            db.query(KeyValueORM).filter(KeyValueORM.key == key).delete()
            db.commit()
