"""View filter: pure selection of the records currently visible."""

from typing import List, Optional, Sequence, Union

from roster.records.record_models import Grade, Record


def _label(value: Union[Grade, str, None]) -> str:
    if value is None:
        return ""
    if isinstance(value, Grade):
        return value.value
    return str(value)


def _parse_age_filter(age_filter: Union[int, str, None]) -> Optional[int]:
    """Numeric value of the age filter, or None if it is not a whole number."""
    if isinstance(age_filter, int):
        return age_filter
    text = str(age_filter).strip()
    try:
        value = float(text)
    except ValueError:
        return None
    if not value.is_integer():
        return None
    return int(value)


def matches_search(record: Record, search_text: str) -> bool:
    """Case-insensitive substring match on name or class label."""
    if not search_text:
        return True
    needle = search_text.lower()
    return needle in record.name.lower() or needle in record.school_class.value.lower()


def matches_grade(record: Record, grade_filter: Union[Grade, str, None]) -> bool:
    label = _label(grade_filter)
    if not label:
        return True
    return record.grade.value == label


def matches_age(record: Record, age_filter: Union[int, str, None]) -> bool:
    if age_filter is None or (isinstance(age_filter, str) and not age_filter.strip()):
        return True
    wanted = _parse_age_filter(age_filter)
    if wanted is None:
        return False
    return record.age == wanted


def filter_records(
    records: Sequence[Record],
    search_text: str = "",
    grade_filter: Union[Grade, str, None] = "",
    age_filter: Union[int, str, None] = "",
) -> List[Record]:
    """
    Select records matching all three criteria, in collection order.

    Args:
        records: Source collection (not modified)
        search_text: Substring of name or class, case-insensitive; empty matches all
        grade_filter: Exact grade label; empty matches all
        age_filter: Age as number or numeric text; empty matches all

    Returns:
        New list of matching records (copies); empty list if none match
    """
    return [
        record.model_copy()
        for record in records
        if matches_search(record, search_text)
        and matches_grade(record, grade_filter)
        and matches_age(record, age_filter)
    ]
