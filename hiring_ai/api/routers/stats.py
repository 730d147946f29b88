"""
Statistics API endpoints.

Routes: GET /stats

Dependencies: hiring_ai.core.orchestrator
System role: Observability counters HTTP API
"""

from fastapi import APIRouter, Depends

from hiring_ai.api.deps import get_orchestrator
from hiring_ai.core.orchestrator import Orchestrator
from hiring_ai.models.common import StatsResponse

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=StatsResponse)
async def get_stats(
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> StatsResponse:
    """Processing counters, queue depth, and search cache statistics."""
    return StatsResponse(
        processing=await orchestrator.get_processing_stats(),
        search=orchestrator.get_search_stats(),
    )
