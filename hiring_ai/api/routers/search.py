"""
Search API endpoints.

Routes: POST /search, POST /search/batch, POST /search/similar, POST /search/cache/clear

Dependencies: hiring_ai.core.orchestrator, hiring_ai.core.search
System role: Semantic search HTTP API
"""

from fastapi import APIRouter, Depends, status

from hiring_ai.api.deps import get_orchestrator, to_http_exception
from hiring_ai.core.exceptions import HiringAIException
from hiring_ai.core.orchestrator import Orchestrator
from hiring_ai.core.search.models import SearchQuery, SearchResult
from hiring_ai.models.common import ErrorResponse
from hiring_ai.models.search import BatchSearchRequest, BatchSearchResponse, SimilarSearchRequest

router = APIRouter(prefix="/search", tags=["search"])


@router.post("", response_model=SearchResult, responses={422: {"model": ErrorResponse}})
async def search(
    query: SearchQuery,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> SearchResult:
    """
    Semantic search over stored candidate or job embeddings.

    Results are ordered by descending score in [0, 1]. Availability
    filtering happens after ranking, so fewer than `limit` hits is normal.

    Raises:
        HTTPException(422): Invalid query
        HTTPException(502): Query embedding failed
    """
    try:
        return await orchestrator.search(query)
    except HiringAIException as e:
        raise to_http_exception(e)


@router.post("/batch", response_model=BatchSearchResponse)
async def batch_search(
    request: BatchSearchRequest,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> BatchSearchResponse:
    """Run several searches; each item carries its own result or error."""
    items = await orchestrator.batch_search(request.queries)
    return BatchSearchResponse(items=items)


@router.post("/similar", response_model=SearchResult, responses={404: {"model": ErrorResponse}})
async def find_similar(
    request: SimilarSearchRequest,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> SearchResult:
    """
    Rank entities against a stored entity's embedding.

    Raises:
        HTTPException(404): No embedding stored for the entity
    """
    try:
        return await orchestrator.find_similar(
            request.entity_id,
            request.entity_type,
            request.filters,
            request.limit,
            request.options,
        )
    except HiringAIException as e:
        raise to_http_exception(e)


@router.post("/cache/clear", status_code=status.HTTP_204_NO_CONTENT)
async def clear_search_cache(
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> None:
    """Drop cached search results."""
    orchestrator.search_engine.clear_cache()
