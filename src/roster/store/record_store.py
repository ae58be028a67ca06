"""Record store: canonical ordered collection with write-through persistence."""

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from roster.errors import NotFoundError, ValidationError
from roster.persistence.port import Storage
from roster.records.record_models import Record, RecordInput
from roster.store.codec import decode_records, encode_records
from roster.utils.id_generator import new_record_id
from roster.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_STORAGE_KEY = "students"

InputLike = Union[RecordInput, Mapping[str, Any]]


def _invalid_fields_error(error: PydanticValidationError) -> ValidationError:
    bad_fields = []
    for detail in error.errors():
        loc = detail.get("loc") or ()
        if loc:
            label = "class" if loc[0] == "school_class" else str(loc[0])
            if label not in bad_fields:
                bad_fields.append(label)
    return ValidationError(
        f"Invalid value for: {', '.join(bad_fields) or 'record'}",
        fields=bad_fields,
    )


def _coerce_input(values: InputLike) -> RecordInput:
    if isinstance(values, RecordInput):
        return values
    try:
        return RecordInput.model_validate(dict(values))
    except PydanticValidationError as e:
        raise _invalid_fields_error(e) from e


def _validated_fields(values: InputLike) -> Dict[str, Any]:
    """
    Check required fields and coerce them into Record field values.

    Raises:
        ValidationError: If any field is empty/unset or cannot be coerced
    """
    record_input = _coerce_input(values)
    missing = record_input.missing_fields()
    if missing:
        raise ValidationError(
            f"Please fill all fields (missing: {', '.join(missing)})",
            fields=missing,
        )

    fields = {
        "name": record_input.name,
        "age": record_input.age,
        "class": record_input.school_class,
        "grade": record_input.grade,
    }
    try:
        # Validate against a throwaway id so coercion errors surface before any mutation
        probe = Record.model_validate({"id": 0, **fields})
    except PydanticValidationError as e:
        raise _invalid_fields_error(e) from e
    return {
        "name": probe.name,
        "age": probe.age,
        "school_class": probe.school_class,
        "grade": probe.grade,
    }


class RecordStore:
    """
    Owns the roster collection and keeps it synchronized with a Storage.

    Every mutation re-serializes the whole collection and writes it under
    a single key. Validation runs before any change; storage failures
    propagate after the in-memory change has been applied.
    """

    def __init__(
        self,
        storage: Storage,
        key: str = DEFAULT_STORAGE_KEY,
        id_factory: Optional[Callable[[Iterable[int]], int]] = None,
    ):
        self.storage = storage
        self.key = key
        self._id_factory = id_factory or new_record_id
        self._records: List[Record] = []

    def load(self) -> List[Record]:
        """Initialize the collection from storage. Absent or malformed state loads as empty."""
        records = decode_records(self.storage.read(self.key))
        self._records = records or []
        logger.info(f"Loaded {len(self._records)} records from key '{self.key}'")
        return self.all()

    def all(self) -> List[Record]:
        """Full collection in current order, as copies."""
        return [record.model_copy() for record in self._records]

    def get(self, record_id: int) -> Record:
        index = self._index_of(record_id)
        if index is None:
            raise NotFoundError(record_id)
        return self._records[index].model_copy()

    def __len__(self) -> int:
        return len(self._records)

    def create(self, values: InputLike) -> Record:
        fields = _validated_fields(values)
        record_id = self._next_id()
        record = Record(id=record_id, **fields)
        self._records.append(record)
        logger.info(f"Created record {record_id} ({record.name})")
        self._write_through()
        return record.model_copy()

    def update(self, record_id: int, values: InputLike) -> Record:
        index = self._index_of(record_id)
        if index is None:
            raise NotFoundError(record_id)
        fields = _validated_fields(values)
        record = Record(id=record_id, **fields)
        self._records[index] = record
        logger.info(f"Updated record {record_id} ({record.name})")
        self._write_through()
        return record.model_copy()

    def delete(self, record_id: int) -> bool:
        """Remove the record if present. Absent ids are a no-op.

        Returns True if a record was removed.
        """
        before = len(self._records)
        self._records = [record for record in self._records if record.id != record_id]
        if len(self._records) == before:
            logger.debug(f"Delete skipped, record not found: {record_id}")
        else:
            logger.info(f"Deleted record {record_id}")
        self._write_through()
        return len(self._records) < before

    def submit(self, values: InputLike, editing_id: Optional[int] = None) -> Record:
        """Create when there is no edit target, otherwise update the target."""
        if editing_id is None:
            return self.create(values)
        return self.update(editing_id, values)

    def _index_of(self, record_id: int) -> Optional[int]:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None

    def _next_id(self) -> int:
        existing = {record.id for record in self._records}
        record_id = self._id_factory(existing)
        while record_id in existing:
            record_id += 1
        return record_id

    def _write_through(self) -> None:
        self.storage.write(self.key, encode_records(self._records))
