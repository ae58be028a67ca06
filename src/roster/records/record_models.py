"""Pydantic models for roster records."""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SchoolClass(str, Enum):
    TENTH = "10th"
    ELEVENTH = "11th"
    TWELFTH = "12th"
    UNDERGRADUATE = "Undergraduate"
    POSTGRADUATE = "Postgraduate"
    OTHER = "Other"


class Grade(str, Enum):
    A_PLUS = "A+"
    A = "A"
    B_PLUS = "B+"
    B = "B"
    C_PLUS = "C+"
    C = "C"
    D = "D"
    F = "F"


REQUIRED_FIELDS = ("name", "age", "class", "grade")


class RecordInput(BaseModel):
    """Field values submitted for create or update.

    Values arrive as raw form text; empty strings count as unset.
    `class` is a reserved word, so the attribute is `school_class`
    with `class` as its alias.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    age: Optional[Union[int, float, str]] = None
    school_class: Optional[Union[SchoolClass, str]] = Field(default=None, alias="class")
    grade: Optional[Union[Grade, str]] = None

    def missing_fields(self) -> List[str]:
        """Names of required fields that are empty or unset, in form order."""
        values = {
            "name": self.name,
            "age": self.age,
            "class": self.school_class,
            "grade": self.grade,
        }
        missing = []
        for field_name in REQUIRED_FIELDS:
            value = values[field_name]
            if value is None:
                missing.append(field_name)
            elif isinstance(value, str) and not value.strip():
                missing.append(field_name)
        return missing


class Record(BaseModel):
    """One roster entry.

    Serialized flat as {id, name, age, class, grade}.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str = Field(..., min_length=1)
    age: int
    school_class: SchoolClass = Field(..., alias="class")
    grade: Grade

    @field_validator("age", mode="before")
    @classmethod
    def _coerce_age(cls, value: Any) -> Any:
        if isinstance(value, (str, float)):
            try:
                return int(float(value.strip() if isinstance(value, str) else value))
            except OverflowError as e:
                raise ValueError(f"age out of range: {value!r}") from e
        return value

    def to_payload(self) -> Dict[str, Any]:
        """Flat dict with enum labels, as stored and exported."""
        return {
            "id": self.id,
            "name": self.name,
            "age": self.age,
            "class": self.school_class.value,
            "grade": self.grade.value,
        }
