"""
Sort stage of the visitor list engine
"""
import unicodedata
from datetime import tzinfo
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from visitorlog.engine.timestamps import sort_timestamp
from visitorlog.schemas.visitor import VisitorRecord


class SortDirection(str, Enum):
    """Sort direction"""
    ASC = "asc"
    DESC = "desc"


def collation_key(value: Any) -> tuple[str, str, str]:
    """
    Human ordering for text: letters compare without accents or case first,
    then by accents, then lowercase before uppercase. None sorts as "".
    """
    text = "" if value is None else str(value)
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), decomposed.casefold(), text.swapcase()


class SortKey(str, Enum):
    """Sortable columns, each carrying its own sort value"""
    IN_TIME = "in_time"
    NAME = "name"
    COLLEGE = "college"
    MOBILE_NUMBER = "mobile_number"

    def sort_value(self, tz: Optional[tzinfo] = None) -> Callable[[VisitorRecord], Any]:
        """Key function for this column; naive check-in times are read in ``tz``"""
        value = _SORT_VALUES[self]
        return lambda record: value(record, tz)


_SORT_VALUES: dict[SortKey, Callable[[VisitorRecord, Optional[tzinfo]], Any]] = {
    SortKey.IN_TIME: lambda record, tz: sort_timestamp(record.in_time, tz),
    SortKey.NAME: lambda record, tz: collation_key(record.name),
    SortKey.COLLEGE: lambda record, tz: collation_key(record.college),
    SortKey.MOBILE_NUMBER: lambda record, tz: collation_key(record.mobile_number),
}


def sort_records(records: Iterable[VisitorRecord], key: SortKey,
                 direction: SortDirection = SortDirection.ASC,
                 tz: Optional[tzinfo] = None) -> list[VisitorRecord]:
    """Stable sort; descending mirrors ascending and keeps ties in input order"""
    return sorted(records, key=key.sort_value(tz), reverse=direction == SortDirection.DESC)
