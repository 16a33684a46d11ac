"""Key-value snapshot repository protocol."""

from typing import Protocol, Optional


class SnapshotRepository(Protocol):
    """Interface for the local key-value slot holding serialized state."""

    def read(self, key: str) -> Optional[str]:
        """Return the stored text for key, or None when absent."""
        ...

    def write(self, key: str, value: str) -> None:
        """Insert or replace the text stored under key."""
        ...

    def delete(self, key: str) -> None:
        """Remove key (no-op when absent)."""
        ...
