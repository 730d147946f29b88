"""
Resume object storage configuration settings.

Dependencies: pydantic, pydantic_settings
System role: S3 resume storage configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """S3 bucket holding uploaded resumes."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RESUME_STORAGE_",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(default="", description="S3 bucket for raw resume documents")
    region: str = Field(default="us-east-1", description="AWS region for the bucket")
