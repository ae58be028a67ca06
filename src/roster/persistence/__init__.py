from typing import Any, Dict

from .file_storage import FileStorage
from .memory_storage import MemoryStorage
from .port import Storage
from .sqlite_storage import SqliteStorage


def build_storage(settings: Dict[str, Any]) -> Storage:
    """Construct the backend named by normalized storage settings."""
    backend = settings.get("backend", "sqlite")
    if backend == "sqlite":
        return SqliteStorage(settings["sqlite_path"])
    if backend == "file":
        return FileStorage(settings["file_dir"])
    if backend == "memory":
        return MemoryStorage()
    raise ValueError(f"Unknown storage backend: {backend}")


__all__ = [
    "FileStorage",
    "MemoryStorage",
    "SqliteStorage",
    "Storage",
    "build_storage",
]
