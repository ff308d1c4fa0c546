"""
Dashboard view state (search, college filters, date range, sort, page)
"""
from datetime import datetime
from typing import Optional
from urllib.parse import urlencode

from pydantic import BaseModel, field_validator

from visitorlog.engine.sorting import SortDirection, SortKey


class ViewState(BaseModel):
    """
    User-controlled parameters driving the visitor list.

    Transitions return a new state. Toggling or clearing filters goes back to
    page 1; changing the sort only does so when asked to. The search and date
    forms never carry the page, so submitting them also starts at page 1.
    """
    search: str = ""
    colleges: tuple[str, ...] = ()
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    sort_key: SortKey = SortKey.IN_TIME
    sort_direction: SortDirection = SortDirection.DESC
    page: int = 1

    @field_validator("colleges", mode="before")
    @classmethod
    def dedupe_colleges(cls, v):
        if v is None:
            return ()
        seen = []
        for college in v:
            if college and college not in seen:
                seen.append(college)
        return tuple(seen)

    @field_validator("page")
    @classmethod
    def first_page_at_least(cls, v: int) -> int:
        # Pages below 1 land on the first page; the upper bound is clamped by the engine
        return max(1, v)

    @field_validator("date_from", "date_to")
    @classmethod
    def aware_bound(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is not None and v.tzinfo is None:
            return v.astimezone()
        return v

    class Config:
        frozen = True

    @property
    def has_date_range(self) -> bool:
        return self.date_from is not None and self.date_to is not None

    @property
    def has_filters(self) -> bool:
        return bool(self.colleges) or self.date_from is not None or self.date_to is not None

    def toggle_college(self, college: str) -> "ViewState":
        """Add the college tag if absent, remove it if present"""
        if college in self.colleges:
            colleges = tuple(c for c in self.colleges if c != college)
        else:
            colleges = self.colleges + (college,)
        return self.model_copy(update={"colleges": colleges, "page": 1})

    def clear_filters(self) -> "ViewState":
        """Drop college tags and the date range, keep the search text"""
        return self.model_copy(update={"colleges": (), "date_from": None, "date_to": None, "page": 1})

    def with_sort(self, key: SortKey, direction: SortDirection, resets_page: bool = False) -> "ViewState":
        update = {"sort_key": key, "sort_direction": direction}
        if resets_page:
            update["page"] = 1
        return self.model_copy(update=update)

    def go_to_page(self, page: int, page_count: int) -> "ViewState":
        """Move to a page; out of range targets leave the state unchanged"""
        if page < 1 or page > page_count:
            return self
        return self.model_copy(update={"page": page})

    def to_query(self) -> list[tuple[str, str]]:
        """Query parameters for this state, defaults omitted"""
        params = []
        if self.search:
            params.append(("search", self.search))
        for college in self.colleges:
            params.append(("college", college))
        if self.date_from is not None:
            params.append(("date_from", self.date_from.isoformat()))
        if self.date_to is not None:
            params.append(("date_to", self.date_to.isoformat()))
        if self.sort_key != SortKey.IN_TIME:
            params.append(("sort", self.sort_key.value))
        if self.sort_direction != SortDirection.DESC:
            params.append(("direction", self.sort_direction.value))
        if self.page != 1:
            params.append(("page", str(self.page)))
        return params

    def query_string(self) -> str:
        return urlencode(self.to_query())
