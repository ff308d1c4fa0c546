"""
Supabase record store
The hosted database/auth service behind the public form and the dashboard
"""
import logging
from typing import Any, Optional

from supabase import Client, create_client

from visitorlog.schemas.auth import AuthSession
from visitorlog.schemas.visitor import VisitorCreate, VisitorRecord
from visitorlog.store.base import SessionCallback, SessionEvent
from visitorlog.utils.exceptions import AuthenticationError, RecordStoreError, SubmissionError

logger = logging.getLogger(__name__)

VISITORS_TABLE = "visitors"


def _to_session(session: Any) -> Optional[AuthSession]:
    if session is None or not getattr(session, "access_token", None):
        return None
    user = getattr(session, "user", None)
    return AuthSession(
        access_token=session.access_token,
        email=getattr(user, "email", None),
        user_id=str(user.id) if getattr(user, "id", None) is not None else None,
    )


class SupabaseRecordStore:
    """Record store on top of the supabase client"""

    def __init__(self, client: Client):
        self._client = client

    @classmethod
    def from_credentials(cls, url: str, key: str) -> "SupabaseRecordStore":
        return cls(create_client(url, key))

    def list_records(self) -> list[VisitorRecord]:
        try:
            response = (
                self._client.table(VISITORS_TABLE)
                .select("*")
                .order("in_time", desc=True)
                .execute()
            )
        except Exception as e:
            raise RecordStoreError(f"Could not load visitor records: {e}") from e

        records = []
        for row in response.data or []:
            try:
                records.append(VisitorRecord.model_validate(row))
            except ValueError as e:
                # A row without an id cannot be listed
                logger.warning("Skipping malformed visitor row: %s", e)
        return records

    def insert_record(self, visitor_data: VisitorCreate) -> None:
        try:
            self._client.table(VISITORS_TABLE).insert(visitor_data.model_dump()).execute()
        except Exception as e:
            raise SubmissionError(f"Could not save the visitor entry: {e}") from e

    def sign_in(self, email: str, password: str) -> AuthSession:
        try:
            response = self._client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            raise AuthenticationError(str(e) or "Invalid email or password") from e

        session = _to_session(response.session)
        if session is None:
            raise AuthenticationError("Invalid email or password")
        return session

    def sign_out(self, access_token: Optional[str]) -> None:
        try:
            self._client.auth.sign_out()
        except Exception as e:
            # The local session is dropped either way
            logger.warning("Sign-out request failed: %s", e)

    def current_session(self, access_token: Optional[str]) -> Optional[AuthSession]:
        if not access_token:
            return None
        try:
            response = self._client.auth.get_user(access_token)
        except Exception as e:
            logger.info("Rejected session token: %s", e)
            return None
        user = getattr(response, "user", None)
        if user is None:
            return None
        return AuthSession(access_token=access_token, email=user.email, user_id=str(user.id))

    def on_session_change(self, callback: SessionCallback):
        def relay(event: Any, session: Any) -> None:
            name = getattr(event, "value", event)
            if name == SessionEvent.SIGNED_OUT.value:
                callback(SessionEvent.SIGNED_OUT, None)
            elif name == SessionEvent.SIGNED_IN.value:
                callback(SessionEvent.SIGNED_IN, _to_session(session))

        return self._client.auth.on_auth_state_change(relay)
