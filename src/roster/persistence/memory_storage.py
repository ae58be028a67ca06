from typing import Dict, Optional


class MemoryStorage:
    """Dict-backed storage. Contents last as long as the object."""

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._values: Dict[str, bytes] = dict(initial or {})
        self.writes = 0

    def read(self, key: str) -> Optional[bytes]:
        return self._values.get(key)

    def write(self, key: str, value: bytes) -> None:
        self._values[key] = bytes(value)
        self.writes += 1
