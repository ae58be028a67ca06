"""Exception taxonomy for roster operations."""

from typing import List, Optional


class RosterError(Exception):
    pass


class ValidationError(RosterError, ValueError):
    """A submitted record is missing one or more required fields."""

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.fields = list(fields or [])


class NotFoundError(RosterError, LookupError):
    def __init__(self, record_id: int):
        super().__init__(f"Record not found: {record_id}")
        self.record_id = record_id


class PersistenceError(RosterError):
    """Storage read or write failed. Not recovered by the store."""
