"""
Authentication Pydantic schemas (API requests/responses)
"""
from pydantic import BaseModel, field_validator
from typing import Optional
import re


_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class AdminLogin(BaseModel):
    """Admin login request"""
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip()
        if not _EMAIL_RE.match(v):
            raise ValueError("Invalid email format")
        return v


class AuthSession(BaseModel):
    """Authenticated admin context issued by the record store"""
    access_token: str
    email: Optional[str] = None
    user_id: Optional[str] = None

    class Config:
        frozen = True


class SessionResponse(BaseModel):
    """Current session info"""
    email: Optional[str]
    user_id: Optional[str]


class TokenResponse(BaseModel):
    """Token response"""
    access_token: str
    token_type: str = "bearer"
    email: Optional[str] = None


class TokenPayload(BaseModel):
    """Token payload"""
    sub: str
    email: str
    exp: int
    iat: int
