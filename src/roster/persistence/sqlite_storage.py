"""SQLite-backed storage using the kv_entries table."""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from roster.database.kv_repo import read_value, write_value
from roster.database.sqlite_client import session_context
from roster.errors import PersistenceError


class SqliteStorage:
    def __init__(self, sqlite_path: str):
        self.sqlite_path = sqlite_path

    def read(self, key: str) -> Optional[bytes]:
        try:
            with session_context(self.sqlite_path) as session:
                return read_value(session, key)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to read key '{key}' from {self.sqlite_path}: {e}") from e

    def write(self, key: str, value: bytes) -> None:
        try:
            with session_context(self.sqlite_path) as session:
                write_value(session, key, value)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to write key '{key}' to {self.sqlite_path}: {e}") from e
