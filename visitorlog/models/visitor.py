"""
Visitor model (database table)
Column names follow the hosted visitors table so both stores share one wire format
"""
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Float, DateTime, Text
from visitorlog.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Visitor(Base):
    """Visitors table"""
    __tablename__ = "visitors"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False, index=True)
    mobile_number = Column(String(20), nullable=False, index=True)
    college = Column(String(200), nullable=True, index=True)
    person_to_meet = Column(String(100), nullable=False)
    purpose_of_visit = Column(Text, nullable=False)
    comment_feedback = Column(Text, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    # Assigned by the store on insert, never by the caller
    in_time = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<Visitor(id={self.id}, name={self.name}, college={self.college})>"
