"""Roster API: filtered listing over a RecordStore."""

from typing import Optional

from ..filtering.view_filter import filter_records
from ..store.record_store import RecordStore
from .models import FilterCriteria, RosterView


def list_records(store: RecordStore, criteria: Optional[FilterCriteria] = None) -> RosterView:
    """
    Compute the visible subset of the roster.
    
    Args:
        store: Loaded record store
        criteria: Filter inputs (defaults to no filtering)
        
    Returns:
        RosterView with matching records in collection order
    """
    criteria = criteria or FilterCriteria()
    all_records = store.all()
    visible = filter_records(
        all_records,
        search_text=criteria.search,
        grade_filter=criteria.grade,
        age_filter=criteria.age,
    )
    return RosterView(
        records=visible,
        visible_count=len(visible),
        total_count=len(all_records),
        criteria=criteria,
    )
