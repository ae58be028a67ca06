"""Storage contract for roster snapshots."""

from typing import Optional, Protocol


class Storage(Protocol):
    """Key-value collaborator holding whole serialized snapshots.

    Both calls are synchronous. Failures surface as PersistenceError.
    """

    def read(self, key: str) -> Optional[bytes]:
        """Return the stored bytes for key, or None if nothing was written."""

    def write(self, key: str, value: bytes) -> None:
        """Replace the value stored under key."""
