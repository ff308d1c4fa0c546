"""
Authentication and view-state dependencies
FastAPI dependency injection pattern
"""
from fastapi import Depends, Header, Query, Request
from typing import Optional
from visitorlog.config import settings
from visitorlog.controller import VisitorLogController
from visitorlog.engine.sorting import SortDirection, SortKey
from visitorlog.engine.timestamps import parse_range_bound, resolve_timezone
from visitorlog.schemas.auth import AuthSession
from visitorlog.schemas.view_state import ViewState
from visitorlog.store.base import RecordStore
from visitorlog.utils.exceptions import UnauthorizedException, ValidationException

SESSION_TOKEN_KEY = "access_token"


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.record_store


def get_controller(request: Request) -> VisitorLogController:
    return request.app.state.controller


def get_current_session(
        store: RecordStore = Depends(get_record_store),
        authorization: Optional[str] = Header(None)
) -> AuthSession:
    """
    Current authenticated session
    - Extracts and verifies the Bearer token from the Authorization header.
    """
    if not authorization:
        raise UnauthorizedException(detail="Missing authorization header")

    # Split scheme and token
    try:
        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            raise UnauthorizedException(detail="Invalid authentication scheme")
    except ValueError:
        raise UnauthorizedException(detail="Invalid authorization header format")

    session = store.current_session(token)
    if session is None:
        raise UnauthorizedException(detail="Invalid or expired token")
    return session


def get_browser_session(
        request: Request,
        store: RecordStore = Depends(get_record_store)
) -> Optional[AuthSession]:
    """Session stored in the browser cookie, None when signed out"""
    session = store.current_session(request.session.get(SESSION_TOKEN_KEY))
    if session is None:
        request.session.pop(SESSION_TOKEN_KEY, None)
    return session


def get_view_state(
        search: str = Query(""),
        college: list[str] = Query([]),
        date_from: Optional[str] = Query(None),
        date_to: Optional[str] = Query(None),
        sort: SortKey = Query(SortKey.IN_TIME),
        direction: SortDirection = Query(SortDirection.DESC),
        page: int = Query(1)
) -> ViewState:
    """Dashboard view state from query parameters"""
    tz = resolve_timezone(settings.display_timezone)
    try:
        start = parse_range_bound(date_from, tz=tz)
        end = parse_range_bound(date_to, end_of_day=True, tz=tz)
    except ValueError:
        raise ValidationException(detail="Invalid date range")

    return ViewState(
        search=search,
        colleges=college,
        date_from=start,
        date_to=end,
        sort_key=sort,
        sort_direction=direction,
        page=page,
    )
