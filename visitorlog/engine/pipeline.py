"""
Visitor list engine: filter -> sort -> paginate, plus export of the full view
"""
from datetime import tzinfo
from typing import Optional, Sequence

from pydantic import BaseModel

from visitorlog.engine.export import build_csv
from visitorlog.engine.filters import filter_records
from visitorlog.engine.pagination import DEFAULT_PAGE_SIZE, PageWindow, paginate
from visitorlog.engine.sorting import sort_records
from visitorlog.schemas.view_state import ViewState
from visitorlog.schemas.visitor import VisitorRecord


class VisitorPage(BaseModel):
    """Visible rows plus the counts needed for page controls"""
    rows: list[VisitorRecord]
    window: PageWindow

    @property
    def total(self) -> int:
        return self.window.total

    @property
    def page(self) -> int:
        return self.window.page

    @property
    def page_count(self) -> int:
        return self.window.page_count


def select_records(records: Sequence[VisitorRecord], state: ViewState,
                   tz: Optional[tzinfo] = None) -> list[VisitorRecord]:
    """Filtered and sorted view of the full record set, naive times read in ``tz``"""
    return sort_records(filter_records(records, state, tz), state.sort_key, state.sort_direction, tz)


def build_page(records: Sequence[VisitorRecord], state: ViewState,
               page_size: int = DEFAULT_PAGE_SIZE, tz: Optional[tzinfo] = None) -> VisitorPage:
    rows, window = paginate(select_records(records, state, tz), state.page, page_size)
    return VisitorPage(rows=rows, window=window)


def export_csv(records: Sequence[VisitorRecord], state: ViewState, tz: Optional[tzinfo] = None) -> str:
    """CSV of every filtered and sorted record, not just the current page"""
    return build_csv(select_records(records, state, tz), tz)
