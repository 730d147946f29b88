"""
Vector search configuration settings.

Manages embedding dimensionality, result limits, search result caching,
and batch parallelism.

Dependencies: pydantic, pydantic_settings
System role: Semantic search configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorSearchSettings(BaseSettings):
    """Vector search engine and embedding store configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_SEARCH_",
        case_sensitive=False,
        extra="ignore",
    )

    embedding_dimension: int = Field(
        default=768,
        ge=1,
        description="Embedding vector dimension shared by queries and stored records",
    )

    default_limit: int = Field(default=20, ge=1, description="Default number of results")
    max_limit: int = Field(default=100, ge=1, description="Upper bound for requested results")

    # Search result cache
    cache_ttl_seconds: float = Field(
        default=60.0,
        ge=0,
        description="Search result cache TTL; embedding updates may be stale for this long",
    )
    cache_max_entries: int = Field(
        default=256,
        ge=1,
        description="Maximum cached search results (least recently used evicted first)",
    )

    batch_concurrency: int = Field(
        default=5,
        ge=1,
        description="Concurrent searches within one batch request",
    )
    stats_window_seconds: float = Field(
        default=300.0,
        gt=0,
        description="Window used for recent query counts",
    )

    snapshot_path: str = Field(
        default="",
        description="Optional JSON snapshot file for the in-memory embedding store",
    )
