"""
Search request and response models.

Dependencies: pydantic, hiring_ai.boundary.vdb
System role: Contract of the vector search engine
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from hiring_ai.boundary.vdb.vector_schemas import EmbeddingMetadata, EntityType


class SearchFilters(BaseModel):
    """
    Structured search filters.

    skills, location, and experience are applied to stored metadata before
    scoring; availability is free text and is applied to the ranked list,
    so it can return fewer results than requested.
    """

    entity_type: EntityType = Field(default=EntityType.CANDIDATE, description="What to search")
    skills: list[str] = Field(default_factory=list, description="Match any (case-insensitive)")
    require_all_skills: bool = Field(default=False, description="Match all skills instead of any")
    location: str | None = Field(default=None, description="Exact location, case-insensitive")
    experience: str | None = Field(default=None, description="Exact experience level, case-insensitive")
    availability: str | None = Field(default=None, description="Substring of free-text availability")
    exclude_ids: list[str] = Field(default_factory=list, description="Entity IDs never returned")


class SearchOptions(BaseModel):
    """Ranking and caching options."""

    threshold: float = Field(default=0.0, ge=0.0, le=1.0, description="Minimum score")
    use_cache: bool = Field(default=True, description="Serve identical searches from cache")
    include_metadata: bool = Field(default=True, description="Attach metadata to hits")


class SearchQuery(BaseModel):
    """Free-text search request."""

    text: str = Field(min_length=1, description="Query text to embed")
    filters: SearchFilters = Field(default_factory=SearchFilters)
    limit: int | None = Field(default=None, ge=1, description="Requested result count")
    options: SearchOptions = Field(default_factory=SearchOptions)


class SearchHit(BaseModel):
    """One ranked entity."""

    entity_id: str
    entity_type: EntityType
    score: float = Field(ge=0.0, le=1.0)
    match_reasons: list[str] = Field(default_factory=list)
    metadata: EmbeddingMetadata | None = None
    updated_at: datetime


class SearchResult(BaseModel):
    """Hits ordered by descending score."""

    hits: list[SearchHit] = Field(default_factory=list)
    limit: int
    candidates_scored: int = Field(default=0, description="Records that passed pre-filters")
    cached: bool = False
    search_time_ms: float = 0.0


class BatchSearchItem(BaseModel):
    """Per-query outcome of a batch search; exactly one of result or error is set."""

    index: int
    result: SearchResult | None = None
    error: dict[str, Any] | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class VectorQuery(BaseModel):
    """Search request with a precomputed query vector."""

    vector: list[float] = Field(min_length=1)
    filters: SearchFilters = Field(default_factory=SearchFilters)
    limit: int | None = Field(default=None, ge=1)
    options: SearchOptions = Field(default_factory=SearchOptions)
