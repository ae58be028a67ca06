"""Snapshot encoding for the record collection."""

import json
from typing import List, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from roster.records.record_models import Record
from roster.utils.logging import get_logger

logger = get_logger(__name__)


def encode_records(records: Sequence[Record]) -> bytes:
    """Serialize the full collection as a UTF-8 JSON array of flat objects."""
    payload = [record.to_payload() for record in records]
    return json.dumps(payload, ensure_ascii=False).encode("utf-8")


def decode_records(raw: Optional[bytes]) -> Optional[List[Record]]:
    """
    Parse a stored snapshot.
    
    Returns:
        List of records in stored order, or None when the snapshot is
        absent or malformed (bad JSON, wrong shape, invalid entries or
        duplicate ids).
    """
    if raw is None:
        return None
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Ignoring unreadable roster snapshot: {e}")
        return None
    
    if not isinstance(data, list):
        logger.warning(f"Ignoring roster snapshot: expected a list, got {type(data).__name__}")
        return None
    
    records: List[Record] = []
    seen_ids = set()
    for entry in data:
        try:
            record = Record.model_validate(entry)
        except PydanticValidationError as e:
            logger.warning(f"Ignoring roster snapshot with invalid entry {entry!r}: {e}")
            return None
        if record.id in seen_ids:
            logger.warning(f"Ignoring roster snapshot with duplicate id {record.id}")
            return None
        seen_ids.add(record.id)
        records.append(record)
    return records
