"""
Filter stage of the visitor list engine
"""
from datetime import datetime, tzinfo
from typing import Collection, Iterable, Optional

from visitorlog.engine.timestamps import parse_in_time
from visitorlog.schemas.view_state import ViewState
from visitorlog.schemas.visitor import VisitorRecord


def matches_search(record: VisitorRecord, search: str) -> bool:
    """Case-insensitive substring match on name or mobile number"""
    if not search:
        return True
    needle = search.lower()
    return needle in record.name.lower() or needle in record.mobile_number.lower()


def matches_colleges(record: VisitorRecord, colleges: Collection[str]) -> bool:
    if not colleges:
        return True
    return (record.college or "") in colleges


def matches_date_range(record: VisitorRecord, date_from: Optional[datetime],
                       date_to: Optional[datetime], tz: Optional[tzinfo] = None) -> bool:
    """Inclusive range check; applies only when both bounds are set"""
    if date_from is None or date_to is None:
        return True
    visited_at = parse_in_time(record.in_time, tz)
    if visited_at is None:
        return False
    return date_from <= visited_at <= date_to


def filter_records(records: Iterable[VisitorRecord], state: ViewState,
                   tz: Optional[tzinfo] = None) -> list[VisitorRecord]:
    colleges = set(state.colleges)
    return [
        record for record in records
        if matches_search(record, state.search)
        and matches_colleges(record, colleges)
        and matches_date_range(record, state.date_from, state.date_to, tz)
    ]


def distinct_colleges(records: Iterable[VisitorRecord]) -> list[str]:
    """Colleges for the filter picklist, first-seen order, empty values skipped"""
    seen: dict[str, None] = {}
    for record in records:
        if record.college:
            seen.setdefault(record.college, None)
    return list(seen)
