"""
Admin authentication API routes
"""
from fastapi import APIRouter, Depends, status
from visitorlog.dependencies import get_current_session, get_record_store
from visitorlog.schemas.auth import AdminLogin, AuthSession, SessionResponse, TokenResponse
from visitorlog.store.base import RecordStore

router = APIRouter(
    prefix="/api/auth",
    tags=["Authentication"]
)


@router.post("/login", response_model=TokenResponse)
def login(
        admin_login: AdminLogin,
        store: RecordStore = Depends(get_record_store)
):
    """Admin sign-in and token issue"""
    session = store.sign_in(admin_login.email, admin_login.password)
    return {
        "access_token": session.access_token,
        "token_type": "bearer",
        "email": session.email
    }


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
        session: AuthSession = Depends(get_current_session),
        store: RecordStore = Depends(get_record_store)
):
    """Admin sign-out"""
    store.sign_out(session.access_token)
    return None


@router.get("/me", response_model=SessionResponse)
def get_current_session_info(
        session: AuthSession = Depends(get_current_session)
):
    """Current signed-in admin (token based)"""
    return {"email": session.email, "user_id": session.user_id}
