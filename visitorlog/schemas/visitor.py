"""
Visitor Pydantic schemas (records, API requests/responses)
"""
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Any, Optional
import re


_MOBILE_RE = re.compile(r"^[0-9]{10}$")


class VisitorRecord(BaseModel):
    """A visitor record as stored by the record store

    Field names are the wire contract of the visitors table. ``in_time`` is
    kept as received so malformed values degrade instead of failing.
    """
    id: str
    name: str = ""
    mobile_number: str = ""
    college: Optional[str] = None
    person_to_meet: str = ""
    purpose_of_visit: str = ""
    comment_feedback: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    in_time: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        if v is None:
            raise ValueError("id is required")
        return str(v)

    @field_validator("name", "mobile_number", "person_to_meet", "purpose_of_visit", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("in_time", mode="before")
    @classmethod
    def coerce_in_time(cls, v: Any) -> Optional[str]:
        if isinstance(v, datetime):
            return v.isoformat()
        return None if v is None else str(v)

    class Config:
        frozen = True
        extra = "ignore"


class VisitorCreate(BaseModel):
    """Visitor check-in submission (id and in_time are assigned by the store)"""
    name: str = Field(..., min_length=1, max_length=100)
    mobile_number: str
    college: str = Field(..., min_length=1, max_length=200)
    person_to_meet: str = Field(..., min_length=1, max_length=100)
    purpose_of_visit: str = Field(..., min_length=1, max_length=2000)
    comment_feedback: Optional[str] = Field(None, max_length=2000)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)

    @field_validator("name", "college", "person_to_meet", "purpose_of_visit")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("This field is required")
        return v

    @field_validator("mobile_number")
    @classmethod
    def validate_mobile(cls, v: str) -> str:
        v = v.strip()
        if not _MOBILE_RE.match(v):
            raise ValueError("Mobile number must be exactly 10 digits")
        return v

    @field_validator("comment_feedback")
    @classmethod
    def blank_feedback(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v.strip() or None


class SubmissionResponse(BaseModel):
    """Check-in submission response"""
    message: str = "Visitor logged successfully!"


class VisitorRowResponse(BaseModel):
    """Dashboard row (write-only fields are never listed)"""
    id: str
    name: str
    mobile_number: str
    college: Optional[str]
    person_to_meet: str
    purpose_of_visit: str
    in_time: Optional[str]
    date: str
    time: str


class VisitorPageResponse(BaseModel):
    """One page of the filtered and sorted visitor list"""
    total: int
    page: int
    page_count: int
    page_size: int
    has_prev: bool
    has_next: bool
    items: list[VisitorRowResponse]
