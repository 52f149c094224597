"""Key-value blob storage interface."""

from typing import Protocol


class BlobStore(Protocol):
    """Opaque string storage addressed by key."""

    def get(self, key: str) -> str | None:
        """Read the value stored under key. Returns None if not found."""
        ...

    def set(self, key: str, value: str) -> None:
        """Write/overwrite the value stored under key."""
        ...
