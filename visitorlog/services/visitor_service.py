"""
Visitor check-in service
Business logic layer
"""
import logging
from typing import Optional, Sequence
from visitorlog.schemas.visitor import VisitorCreate
from visitorlog.store.base import RecordStore
from visitorlog.utils.exceptions import ValidationException

logger = logging.getLogger(__name__)


class VisitorService:
    """Visitor check-in service"""

    @staticmethod
    def submit_visitor(store: RecordStore, visitor_data: VisitorCreate,
                       colleges: Optional[Sequence[str]] = None) -> None:
        """Record a visitor check-in"""
        # Colleges come from a fixed picklist on the form
        if colleges and visitor_data.college not in colleges:
            raise ValidationException(detail="Please select a college")

        store.insert_record(visitor_data)
        logger.info("Visitor checked in for %s", visitor_data.college)
