"""
Search API schemas.

Single searches take SearchQuery directly; these wrap batch and
similar-entity requests.

Dependencies: pydantic, hiring_ai.core.search
System role: Search API contracts
"""

from pydantic import BaseModel, Field

from hiring_ai.boundary.vdb.vector_schemas import EntityType
from hiring_ai.core.search.models import BatchSearchItem, SearchFilters, SearchOptions, SearchQuery


class BatchSearchRequest(BaseModel):
    """Independent searches executed together."""

    queries: list[SearchQuery] = Field(min_length=1, max_length=50)


class BatchSearchResponse(BaseModel):
    """One item per query, in request order."""

    items: list[BatchSearchItem]


class SimilarSearchRequest(BaseModel):
    """Rank entities against a stored entity's embedding."""

    entity_id: str = Field(min_length=1)
    entity_type: EntityType = EntityType.CANDIDATE
    filters: SearchFilters | None = None
    limit: int | None = Field(default=None, ge=1)
    options: SearchOptions = Field(default_factory=SearchOptions)
