"""
Visitor log view controller
Owns the record snapshot, the record store session subscription and the list engine calls
"""
import asyncio
import logging
from datetime import datetime, tzinfo
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from visitorlog.engine.export import export_filename
from visitorlog.engine.filters import distinct_colleges
from visitorlog.engine.pagination import DEFAULT_PAGE_SIZE
from visitorlog.engine.pipeline import VisitorPage, build_page, export_csv
from visitorlog.schemas.auth import AuthSession
from visitorlog.schemas.view_state import ViewState
from visitorlog.schemas.visitor import VisitorRecord
from visitorlog.store.base import RecordStore, SessionEvent
from visitorlog.utils.exceptions import RecordStoreError, UnauthorizedException

logger = logging.getLogger(__name__)


class CsvExport:
    """Rendered CSV document and its download name"""

    def __init__(self, content: str, filename: str):
        self.content = content
        self.filename = filename


class VisitorLogController:
    """
    Dashboard controller.

    Every fetch takes a new token and its response is applied only while that
    token is still the latest, so a slow stale response never overwrites a
    newer one. A session change also advances the token.
    """

    def __init__(self, store: RecordStore, page_size: int = DEFAULT_PAGE_SIZE,
                 tz: Optional[tzinfo] = None):
        self._store = store
        self._page_size = page_size
        self._tz = tz
        self._records: list[VisitorRecord] = []
        self._latest_token = 0
        self._fetch_lock = asyncio.Lock()
        self._subscription = store.on_session_change(self._on_session_change)

    @property
    def records(self) -> list[VisitorRecord]:
        return list(self._records)

    def begin_fetch(self) -> int:
        self._latest_token += 1
        return self._latest_token

    def apply_fetch(self, token: int, records: list[VisitorRecord]) -> bool:
        """Store a fetch result unless a newer fetch has started since"""
        if token != self._latest_token:
            logger.debug("Discarding stale visitor fetch %s (latest %s)", token, self._latest_token)
            return False
        self._records = list(records)
        return True

    async def refresh(self) -> list[VisitorRecord]:
        """Fetch records from the store; on failure keep the current snapshot"""
        # At most one fetch in flight; overlapping requests queue behind it
        async with self._fetch_lock:
            token = self.begin_fetch()
            try:
                records = await run_in_threadpool(self._store.list_records)
            except RecordStoreError as e:
                logger.error("Visitor fetch failed: %s", e)
                return self.records
            self.apply_fetch(token, records)
            return self.records

    def page(self, session: Optional[AuthSession], state: ViewState) -> VisitorPage:
        self._require(session)
        return build_page(self._records, state, self._page_size, self._tz)

    def colleges(self, session: Optional[AuthSession]) -> list[str]:
        self._require(session)
        return distinct_colleges(self._records)

    def export(self, session: Optional[AuthSession], state: ViewState,
               now: Optional[datetime] = None) -> CsvExport:
        self._require(session)
        if now is None:
            now = datetime.now(self._tz) if self._tz is not None else datetime.now()
        return CsvExport(export_csv(self._records, state, self._tz), export_filename(now))

    def close(self) -> None:
        """Tear down the session subscription"""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _require(self, session: Optional[AuthSession]) -> None:
        if session is None:
            raise UnauthorizedException(detail="Sign in to view visitor logs")

    def _on_session_change(self, event: SessionEvent, session: Optional[AuthSession]) -> None:
        # Responses requested under the previous session are stale now
        self._latest_token += 1
        if event == SessionEvent.SIGNED_OUT:
            self._records = []
        logger.info("Session changed: %s", event.value)
