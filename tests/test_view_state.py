"""Tests for dashboard view state transitions."""

from datetime import datetime, timezone
from urllib.parse import parse_qsl

from visitorlog.engine.sorting import SortDirection, SortKey
from visitorlog.schemas.view_state import ViewState

SIT = "Symbiosis Institute of Technology (SIT)"
SIBM = "Symbiosis Institute of Business Management (SIBM)"


def test_defaults():
    state = ViewState()
    assert state.sort_key is SortKey.IN_TIME
    assert state.sort_direction is SortDirection.DESC
    assert state.page == 1
    assert not state.has_filters
    assert state.to_query() == []


def test_toggle_college_adds_then_removes():
    state = ViewState(page=4)
    added = state.toggle_college(SIT)
    assert added.colleges == (SIT,)
    assert added.page == 1
    both = added.toggle_college(SIBM)
    assert both.colleges == (SIT, SIBM)
    removed = both.toggle_college(SIT)
    assert removed.colleges == (SIBM,)
    assert state.colleges == ()


def test_colleges_are_deduplicated():
    assert ViewState(colleges=[SIT, SIT, "", SIBM]).colleges == (SIT, SIBM)


def test_page_below_one_lands_on_first_page():
    """Test that page 0 and negative pages are accepted and clamped to 1."""
    assert ViewState(page=0).page == 1
    assert ViewState(page=-5).page == 1
    assert ViewState(page=7).page == 7


def test_date_range_needs_both_bounds():
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert ViewState(date_from=start, date_to=start).has_date_range
    assert not ViewState(date_from=start).has_date_range
    assert ViewState(date_from=start).has_filters


def test_naive_date_bounds_become_aware():
    state = ViewState(date_from=datetime(2024, 1, 1))
    assert state.date_from.tzinfo is not None


def test_clear_filters_keeps_search():
    state = ViewState(
        search="amy",
        colleges=[SIT],
        date_from=datetime(2024, 1, 1, tzinfo=timezone.utc),
        date_to=datetime(2024, 1, 2, tzinfo=timezone.utc),
        page=2,
    )
    cleared = state.clear_filters()
    assert cleared.search == "amy"
    assert cleared.colleges == ()
    assert cleared.date_from is None and cleared.date_to is None
    assert cleared.page == 1


def test_sort_change_keeps_page_unless_asked():
    state = ViewState(page=3)
    kept = state.with_sort(SortKey.NAME, SortDirection.ASC)
    assert (kept.sort_key, kept.sort_direction, kept.page) == (SortKey.NAME, SortDirection.ASC, 3)
    assert state.with_sort(SortKey.NAME, SortDirection.ASC, resets_page=True).page == 1


def test_go_to_page_ignores_out_of_range():
    state = ViewState(page=2)
    assert state.go_to_page(3, 3).page == 3
    assert state.go_to_page(0, 3) is state
    assert state.go_to_page(4, 3) is state


def test_query_round_trip_through_params():
    state = ViewState(
        search="amy",
        colleges=[SIT, SIBM],
        sort_key=SortKey.NAME,
        sort_direction=SortDirection.ASC,
        page=2,
    )
    params = parse_qsl(state.query_string())
    assert params == [
        ("search", "amy"),
        ("college", SIT),
        ("college", SIBM),
        ("sort", "name"),
        ("direction", "asc"),
        ("page", "2"),
    ]
