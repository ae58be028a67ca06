"""Directory-backed storage: one file per key."""

import re
from pathlib import Path
from typing import Optional

from roster.errors import PersistenceError
from roster.utils.logging import get_logger

logger = get_logger(__name__)

_SAFE_KEY = re.compile(r"[A-Za-z0-9_-][A-Za-z0-9_.-]*")


class FileStorage:
    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY.fullmatch(key):
            raise ValueError(f"Unsafe storage key for file backend: {key!r}")
        return self.directory / f"{key}.json"

    def read(self, key: str) -> Optional[bytes]:
        path = self._path_for(key)
        if not path.exists():
            logger.debug(f"No stored file for key {key} at {path}")
            return None
        try:
            return path.read_bytes()
        except OSError as e:
            raise PersistenceError(f"Failed to read {path}: {e}") from e

    def write(self, key: str, value: bytes) -> None:
        """Write to a temporary sibling, then rename over the target."""
        path = self._path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(value)
            tmp_path.replace(path)
        except OSError as e:
            raise PersistenceError(f"Failed to write {path}: {e}") from e
        logger.debug(f"Wrote {len(value)} bytes to {path}")
