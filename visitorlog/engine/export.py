"""
CSV export stage of the visitor list engine

Every field is quoted with internal quotes doubled, except the mobile number,
which is written as a ="..." literal so spreadsheets keep it as text (leading
zeros, no scientific notation).
"""
from datetime import datetime, tzinfo
from typing import Any, Iterable, Optional

from visitorlog.engine.timestamps import split_in_time
from visitorlog.schemas.visitor import VisitorRecord

CSV_HEADER = ("Name", "Mobile", "College", "Person to Meet", "Purpose", "Date", "Time")
CSV_MEDIA_TYPE = "text/csv; charset=utf-8"


def csv_escape(value: Any) -> str:
    """Quote a field, doubling internal quotes; None becomes an empty field"""
    if value is None:
        return '""'
    return '"' + str(value).replace('"', '""') + '"'


def spreadsheet_text(mobile: Optional[str]) -> str:
    """Formula-style text literal for spreadsheet apps"""
    if not mobile:
        return '""'
    # Quotes would break the literal's structure
    return '="' + str(mobile).replace('"', "") + '"'


def export_row(record: VisitorRecord, tz: Optional[tzinfo] = None) -> str:
    visit_date, visit_time = split_in_time(record.in_time, tz)
    return ",".join([
        csv_escape(record.name),
        spreadsheet_text(record.mobile_number),
        csv_escape(record.college or ""),
        csv_escape(record.person_to_meet),
        csv_escape(record.purpose_of_visit),
        csv_escape(visit_date),
        csv_escape(visit_time),
    ])


def build_csv(records: Iterable[VisitorRecord], tz: Optional[tzinfo] = None) -> str:
    lines = [",".join(csv_escape(column) for column in CSV_HEADER)]
    lines.extend(export_row(record, tz) for record in records)
    return "\n".join(lines)


def encode_csv(document: str) -> bytes:
    """UTF-8 without a byte-order mark"""
    return document.encode("utf-8")


def export_filename(now: datetime) -> str:
    return f"visitor_logs_{now:%Y%m%d_%H%M%S}.csv"
