"""
Job API endpoints.

Routes: POST /jobs, GET /jobs/stats, GET /jobs/{job_id}, DELETE /jobs/{job_id}

Dependencies: hiring_ai.core.orchestrator, hiring_ai.models
System role: Job submission and status HTTP API
"""

from fastapi import APIRouter, Depends, status

from hiring_ai.api.deps import get_orchestrator, to_http_exception
from hiring_ai.core.exceptions import HiringAIException
from hiring_ai.core.job_queue.models import Job
from hiring_ai.core.orchestrator import Orchestrator
from hiring_ai.models.common import ErrorResponse
from hiring_ai.models.job import SubmitJobRequest, SubmitJobResponse

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post(
    "",
    response_model=SubmitJobResponse,
    status_code=status.HTTP_202_ACCEPTED,
    responses={503: {"model": ErrorResponse}},
)
async def submit_job(
    request: SubmitJobRequest,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> SubmitJobResponse:
    """
    Queue a job for background processing.

    Every priority is queued here, including high; interactive callers
    use POST /processing/sync instead. Poll GET /jobs/{job_id} for the result.

    Raises:
        HTTPException(422): Invalid payload
        HTTPException(503): Queue at capacity (Retry-After header set)
    """
    try:
        job_id = await orchestrator.enqueue_job(request.payload, request.priority, request.job_id)
    except HiringAIException as e:
        raise to_http_exception(e)
    return SubmitJobResponse(job_id=job_id)


@router.get("/stats")
async def get_queue_stats(
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> dict:
    """Queue depth per priority and job counts per status."""
    stats = await orchestrator.get_processing_stats()
    return stats["queue"]


@router.get("/{job_id}", response_model=Job, responses={404: {"model": ErrorResponse}})
async def get_job_status(
    job_id: str,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> Job:
    """
    Get job status for polling.

    Returns the job snapshot: status (queued, running, completed, failed,
    cancelled), attempts, timestamps, and result or structured error.

    Raises:
        HTTPException(404): Job not found or purged
    """
    try:
        return await orchestrator.get_job(job_id)
    except HiringAIException as e:
        raise to_http_exception(e)


@router.delete(
    "/{job_id}",
    response_model=Job,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def cancel_job(
    job_id: str,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> Job:
    """
    Cancel a queued job.

    Raises:
        HTTPException(404): Job not found
        HTTPException(409): Job already running or finished
    """
    try:
        return await orchestrator.cancel_job(job_id)
    except HiringAIException as e:
        raise to_http_exception(e)
