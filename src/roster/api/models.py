"""DTOs for the API layer.

These compose the existing Record model rather than copying its fields.
"""

from typing import List

from pydantic import BaseModel, Field

from ..records.record_models import Record


class FilterCriteria(BaseModel):
    """Live filter inputs, kept as the raw strings a form would supply."""
    search: str = ""
    grade: str = ""
    age: str = ""

    def is_empty(self) -> bool:
        return not (self.search or self.grade or self.age.strip())


class RosterView(BaseModel):
    """Visible records plus the counts a list header needs."""
    records: List[Record] = Field(default_factory=list)
    visible_count: int = 0
    total_count: int = 0
    criteria: FilterCriteria = Field(default_factory=FilterCriteria)
