"""
Profile database configuration settings.

Selects between the in-memory document store and the SQLAlchemy
profile store.

Dependencies: pydantic, pydantic_settings
System role: Document store configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Candidate/job profile store configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROFILE_DB_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(
        default="",
        description="Async SQLAlchemy URL (e.g. postgresql+asyncpg://...); empty uses in-memory store",
    )
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")
