"""Form state for adding and editing roster records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from roster.records.record_models import Record
from roster.store.record_store import RecordStore


@dataclass
class RosterForm:
    """Raw field text plus an optional edit target.

    The edit target is an explicit Optional, so a record with id 0 can
    still be edited.
    """

    name: str = ""
    age: str = ""
    school_class: str = ""
    grade: str = ""
    editing_id: Optional[int] = None

    @property
    def mode(self) -> str:
        return "add" if self.editing_id is None else "edit"

    def values(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "age": self.age,
            "class": self.school_class,
            "grade": self.grade,
        }

    def begin_edit(self, record: Record) -> None:
        """Prefill from a record and target it for the next submit."""
        self.name = record.name
        self.age = str(record.age)
        self.school_class = record.school_class.value
        self.grade = record.grade.value
        self.editing_id = record.id

    def cancel_edit(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.name = ""
        self.age = ""
        self.school_class = ""
        self.grade = ""
        self.editing_id = None

    def submit(self, store: RecordStore) -> Record:
        """
        Create or update through the store, then clear the form.

        On ValidationError (or NotFoundError) the form is left untouched
        so the user can correct it and resubmit.
        """
        record = store.submit(self.values(), editing_id=self.editing_id)
        self.reset()
        return record
