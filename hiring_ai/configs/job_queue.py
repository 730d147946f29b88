"""
Job queue configuration settings.

Manages worker pool size, queue capacity ceiling, retry policy,
and retention of finished jobs.

Dependencies: pydantic, pydantic_settings
System role: Background processing configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class QueueSettings(BaseSettings):
    """In-process priority job queue and worker pool configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="JOB_QUEUE_",
        case_sensitive=False,
        extra="ignore",
    )

    worker_count: int = Field(
        default=3,
        ge=1,
        le=32,
        description="Number of concurrent workers pulling from the queue",
    )
    capacity: int = Field(
        default=1000,
        ge=1,
        description="Maximum queued jobs before submit fails fast",
    )

    # Retry policy
    max_attempts: int = Field(
        default=3,
        ge=1,
        description="Maximum handler attempts per job (first run included)",
    )
    retry_backoff_seconds: float = Field(
        default=2.0,
        ge=0,
        description="Retry backoff base in seconds (doubles per attempt)",
    )
    retry_backoff_max_seconds: float = Field(
        default=30.0,
        ge=0,
        description="Maximum retry backoff in seconds",
    )

    retention_seconds: int = Field(
        default=3600,
        ge=0,
        description="How long finished jobs stay queryable",
    )
    shutdown_grace_seconds: float = Field(
        default=30.0,
        ge=0,
        description="Time allowed for draining jobs on shutdown",
    )
