"""
Dashboard administrator model (database table)
"""
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime
from visitorlog.database import Base


class Admin(Base):
    """Administrators table"""
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(100), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Integer, default=1, nullable=False)  # SQLite compatibility
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    def __repr__(self):
        return f"<Admin(id={self.id}, email={self.email})>"
