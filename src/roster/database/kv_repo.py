"""Repository functions for the kv_entries table."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from roster.database.schema import KeyValueEntry
from roster.utils.logging import get_logger

logger = get_logger(__name__)


def read_value(session: Session, key: str) -> Optional[bytes]:
    """
    Read the stored value for a key.
    
    Args:
        session: SQLAlchemy session
        key: Entry key
        
    Returns:
        Stored bytes, or None if the key has never been written
    """
    entry = session.get(KeyValueEntry, key)
    if entry is None:
        logger.debug(f"No stored value for key: {key}")
        return None
    return bytes(entry.value)


def write_value(session: Session, key: str, value: bytes) -> KeyValueEntry:
    """
    Insert or replace the value stored under a key, then commit.
    
    Args:
        session: SQLAlchemy session
        key: Entry key
        value: Full serialized value (replaces any previous value)
        
    Returns:
        The persisted KeyValueEntry row
    """
    entry = session.get(KeyValueEntry, key)
    now_iso = datetime.now(timezone.utc).isoformat()
    if entry is None:
        entry = KeyValueEntry(key=key, value=value, updated_at_utc=now_iso)
        session.add(entry)
        logger.debug(f"Created kv entry: {key} ({len(value)} bytes)")
    else:
        entry.value = value
        entry.updated_at_utc = now_iso
        logger.debug(f"Replaced kv entry: {key} ({len(value)} bytes)")
    session.commit()
    return entry