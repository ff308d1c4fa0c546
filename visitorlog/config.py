"""
Application settings
Managed through environment variables and the project .env file
"""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from typing import Literal, Optional
from pathlib import Path

import pytz


DEFAULT_COLLEGES = [
    "Symbiosis Institute of Media & Communication (SIMC)",
    "Symbiosis Institute of Business Management (SIBM)",
    "Symbiosis Institute of Digital and Telecom Management (SIDTM)",
    "Symbiosis Institute of Technology (SIT)",
    "Symbiosis School of Banking and Finance (SSBF)",
    "Symbiosis School of Biological Sciences (SSBS)",
    "Symbiosis School of Visual Arts and Photography (SSVAP)",
    "Symbiosis School of Culinary Arts and Nutritional Sciences (SSCANs)",
    "Symbiosis College of Nursing (SCON)",
    "Symbiosis School of Online and Digital Learning (SSODL)",
    "Symbiosis Centre for Health Skills (SCHS)",
    "Symbiosis School of Sports Sciences (SSSS)",
    "Symbiosis Institute of Health Sciences (SIHS)",
    "Symbiosis Medical College for Women (SMCW)",
    "Symbiosis Artificial Intelligence Institute (SAII)",
    "Symbiosis College of Physiotherapy",
    "Symbiosis Community Outreach Programme & Extension (SCOPE)",
    "Symbiosis Centre for Entrepreneurship and Innovation (SCEI)",
    "Symbiosis Centre for Research and Innovation (SCRI)",
    "Symbiosis Teaching Learning Resource Centre (STLRC)",
    "Symbiosis University Hospital and Research Centre (SUHRC)",
]


class Settings(BaseSettings):
    """Application settings"""

    # Hosted record store (required, startup fails without them)
    supabase_url: str = Field(..., min_length=1)
    supabase_anon_key: str = Field(..., min_length=1)

    # "supabase" talks to the hosted service, "sql" uses the local database below
    record_store: Literal["supabase", "sql"] = "supabase"
    database_url: str = "sqlite:///./visitor_log.db"

    # JWT settings (sql record store sessions)
    secret_key: str = "your-secret-key-here-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # Browser session cookie
    session_secret: str = "change-me-session-secret"

    # Application settings
    app_name: str = "ExploreIT Visitor Log"
    debug: bool = False
    log_level: str = "INFO"

    # Dashboard settings
    page_size: int = Field(10, ge=1, le=500)
    sort_resets_page: bool = False
    display_timezone: Optional[str] = None
    public_app_url: str = "http://localhost:8000/"
    colleges: list[str] = DEFAULT_COLLEGES

    # CORS settings
    allowed_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]

    @field_validator("supabase_url", "supabase_anon_key")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("display_timezone")
    @classmethod
    def known_timezone(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        v = v.strip()
        if v not in pytz.all_timezones_set:
            raise ValueError(f"unknown timezone: {v}")
        return v

    class Config:
        # Always resolve the .env at the project root, independent of the working directory
        env_file = str(Path(__file__).resolve().parents[1] / ".env")
        case_sensitive = False


settings = Settings()
