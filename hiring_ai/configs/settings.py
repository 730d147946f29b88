"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from hiring_ai.configs.base import BaseSettings
from hiring_ai.configs.database import DatabaseSettings
from hiring_ai.configs.gateway import GatewaySettings
from hiring_ai.configs.job_queue import QueueSettings
from hiring_ai.configs.storage import StorageSettings
from hiring_ai.configs.vector_search import VectorSearchSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    gateway: GatewaySettings = Field(default_factory=GatewaySettings)
    job_queue: QueueSettings = Field(default_factory=QueueSettings)
    vector_search: VectorSearchSettings = Field(default_factory=VectorSearchSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from hiring_ai.configs import get_settings
        settings = get_settings()
    """
    return Settings()
