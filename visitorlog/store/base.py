"""
Record store interface
The hosted data/auth service that owns visitor records and admin sessions
"""
from enum import Enum
from typing import Callable, Optional, Protocol

from visitorlog.schemas.auth import AuthSession
from visitorlog.schemas.visitor import VisitorCreate, VisitorRecord


class SessionEvent(str, Enum):
    """Session change notifications"""
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


SessionCallback = Callable[[SessionEvent, Optional[AuthSession]], None]


class Subscription(Protocol):
    def unsubscribe(self) -> None: ...


class RecordStore(Protocol):
    def list_records(self) -> list[VisitorRecord]:
        """All records, newest check-in first. Raises RecordStoreError."""
        ...

    def insert_record(self, visitor_data: VisitorCreate) -> None:
        """Store a new record; id and in_time are assigned by the store. Raises SubmissionError."""
        ...

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Raises AuthenticationError."""
        ...

    def sign_out(self, access_token: Optional[str]) -> None: ...

    def current_session(self, access_token: Optional[str]) -> Optional[AuthSession]: ...

    def on_session_change(self, callback: SessionCallback) -> Subscription: ...


class CallbackSubscription:
    """Listener registration that removes itself on unsubscribe"""

    def __init__(self, listeners: list, callback: SessionCallback):
        self._listeners = listeners
        self._callback = callback
        listeners.append(callback)

    def unsubscribe(self) -> None:
        if self._callback in self._listeners:
            self._listeners.remove(self._callback)
