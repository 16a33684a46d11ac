"""Repository layer - persistence of the ledger snapshot."""

from tradesim.repositories.protocols import SnapshotRepository
from tradesim.repositories.snapshot_codec import dump_snapshot, parse_snapshot
from tradesim.repositories.snapshot_store import SnapshotStore

__all__ = [
    "SnapshotRepository",
    "dump_snapshot",
    "parse_snapshot",
    "SnapshotStore",
]
