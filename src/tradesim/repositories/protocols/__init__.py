"""Repository protocol definitions (interfaces)."""

from tradesim.repositories.protocols.snapshot_repo import SnapshotRepository

__all__ = [
    "SnapshotRepository",
]
