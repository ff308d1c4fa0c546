"""Tests for the filter -> sort -> paginate pipeline."""

import csv
import io

import pytz

from conftest import make_record
from visitorlog.engine.pipeline import build_page, export_csv, select_records
from visitorlog.engine.sorting import SortDirection, SortKey
from visitorlog.schemas.view_state import ViewState

SIT = "Symbiosis Institute of Technology (SIT)"
SIBM = "Symbiosis Institute of Business Management (SIBM)"


def _visitors(count, **extra):
    return [
        make_record(id=str(i), name=f"Visitor {i:02d}", in_time=f"2024-01-01T10:{i:02d}:00+00:00", **extra)
        for i in range(1, count + 1)
    ]


def test_filter_runs_before_pagination():
    """Test that a filtered-out record does not hold a slot on page 1."""
    records = _visitors(11)
    # Newest first: Visitor 11 .. Visitor 02 fill page 1 without a filter
    records[5] = make_record(id="6", name="Excluded", college=SIBM, in_time="2024-01-01T10:06:00+00:00")
    state = ViewState(colleges=[SIT])
    page = build_page(records, state, 10)
    assert page.total == 10
    assert page.page_count == 1
    assert "Excluded" not in [r.name for r in page.rows]
    assert page.rows[-1].name == "Visitor 01"


def test_sort_runs_before_pagination():
    """Test that page 1 holds the first rows of the whole sorted set."""
    records = _visitors(15)
    state = ViewState(sort_key=SortKey.IN_TIME, sort_direction=SortDirection.ASC)
    page = build_page(records, state, 10)
    assert [r.name for r in page.rows][:2] == ["Visitor 01", "Visitor 02"]
    newest = build_page(records, ViewState(), 10)
    assert newest.rows[0].name == "Visitor 15"


def test_twenty_five_records_page_three():
    records = _visitors(25)
    page = build_page(records, ViewState(page=3), 10)
    assert len(page.rows) == 5
    assert page.page == 3
    clamped = build_page(records, ViewState(page=4), 10)
    assert clamped.page == 3
    assert len(clamped.rows) == 5
    first = build_page(records, ViewState(page=0), 10)
    assert first.page == 1
    assert [r.name for r in first.rows][0] == "Visitor 25"


def test_empty_view_is_page_one_of_one():
    page = build_page(_visitors(3), ViewState(search="nobody"), 10)
    assert page.rows == []
    assert (page.page, page.page_count, page.total) == (1, 1, 0)


def test_select_records_does_not_mutate_input():
    records = _visitors(3)
    original = list(records)
    select_records(records, ViewState(sort_key=SortKey.NAME, sort_direction=SortDirection.ASC))
    assert records == original


def test_export_covers_full_filtered_set_not_one_page():
    records = _visitors(25)
    document = export_csv(records, ViewState(page=2), pytz.utc)
    rows = list(csv.reader(io.StringIO(document)))
    assert len(rows) == 26
    assert rows[1][0] == "Visitor 25"
    assert rows[-1][0] == "Visitor 01"


def test_export_applies_filters_and_sort():
    records = _visitors(3) + [make_record(id="x", name="Outsider", college=None)]
    state = ViewState(colleges=[SIT], sort_key=SortKey.NAME, sort_direction=SortDirection.ASC)
    rows = list(csv.reader(io.StringIO(export_csv(records, state, pytz.utc))))
    assert [row[0] for row in rows[1:]] == ["Visitor 01", "Visitor 02", "Visitor 03"]
