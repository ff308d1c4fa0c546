"""
SQLAlchemy record store
Local stand-in for the hosted service: visitors table, admins table, JWT sessions
"""
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from visitorlog.models.admin import Admin
from visitorlog.models.visitor import Visitor
from visitorlog.schemas.auth import AuthSession
from visitorlog.schemas.visitor import VisitorCreate, VisitorRecord
from visitorlog.security.auth import create_access_token, hash_password, verify_password, verify_token
from visitorlog.store.base import CallbackSubscription, SessionCallback, SessionEvent
from visitorlog.utils.exceptions import (
    AuthenticationError,
    DuplicateException,
    RecordStoreError,
    SubmissionError,
)

logger = logging.getLogger(__name__)


def _to_record(visitor: Visitor) -> VisitorRecord:
    in_time = visitor.in_time
    # SQLite drops the offset; stored values are UTC
    if in_time is not None and in_time.tzinfo is None:
        in_time = in_time.isoformat() + "+00:00"
    return VisitorRecord(
        id=visitor.id,
        name=visitor.name,
        mobile_number=visitor.mobile_number,
        college=visitor.college,
        person_to_meet=visitor.person_to_meet,
        purpose_of_visit=visitor.purpose_of_visit,
        comment_feedback=visitor.comment_feedback,
        latitude=visitor.latitude,
        longitude=visitor.longitude,
        in_time=in_time,
    )


class SqlRecordStore:
    """Record store backed by a SQL database"""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._listeners: list[SessionCallback] = []

    def list_records(self) -> list[VisitorRecord]:
        try:
            with self._session_factory() as db:
                visitors = db.query(Visitor).order_by(Visitor.in_time.desc()).all()
                return [_to_record(v) for v in visitors]
        except SQLAlchemyError as e:
            raise RecordStoreError(f"Could not load visitor records: {e}") from e

    def insert_record(self, visitor_data: VisitorCreate) -> None:
        with self._session_factory() as db:
            try:
                db.add(Visitor(**visitor_data.model_dump()))
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                raise SubmissionError(f"Could not save the visitor entry: {e}") from e

    def create_admin(self, email: str, password: str) -> Admin:
        """Register a dashboard administrator"""
        with self._session_factory() as db:
            if db.query(Admin).filter(Admin.email == email).first():
                raise DuplicateException(detail="Email already exists")
            admin = Admin(email=email, password_hash=hash_password(password))
            db.add(admin)
            db.commit()
            db.refresh(admin)
            return admin

    def sign_in(self, email: str, password: str) -> AuthSession:
        with self._session_factory() as db:
            admin = db.query(Admin).filter(Admin.email == email).first()

        # Unknown admin or wrong password
        if not admin or not verify_password(password, admin.password_hash):
            raise AuthenticationError("Invalid email or password")
        if not admin.is_active:
            raise AuthenticationError("Admin account is inactive")

        session = AuthSession(
            access_token=create_access_token(str(admin.id), admin.email),
            email=admin.email,
            user_id=str(admin.id),
        )
        self._notify(SessionEvent.SIGNED_IN, session)
        return session

    def sign_out(self, access_token: Optional[str]) -> None:
        if self.current_session(access_token) is not None:
            self._notify(SessionEvent.SIGNED_OUT, None)

    def current_session(self, access_token: Optional[str]) -> Optional[AuthSession]:
        if not access_token:
            return None
        payload = verify_token(access_token)
        if payload is None or not payload.sub.isdigit():
            return None
        with self._session_factory() as db:
            admin = db.query(Admin).filter(Admin.id == int(payload.sub)).first()
        if not admin or not admin.is_active:
            return None
        return AuthSession(access_token=access_token, email=admin.email, user_id=payload.sub)

    def on_session_change(self, callback: SessionCallback) -> CallbackSubscription:
        return CallbackSubscription(self._listeners, callback)

    def _notify(self, event: SessionEvent, session: Optional[AuthSession]) -> None:
        for callback in list(self._listeners):
            callback(event, session)
