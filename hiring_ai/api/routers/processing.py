"""
Synchronous processing API endpoints.

Routes: POST /processing/sync, POST /processing/job-postings, POST /processing/interviews

Dependencies: hiring_ai.core.orchestrator
System role: Interactive (inline) pipeline HTTP API
"""

from fastapi import APIRouter, Depends

from hiring_ai.api.deps import get_orchestrator, to_http_exception
from hiring_ai.core.exceptions import HiringAIException
from hiring_ai.core.orchestrator import Orchestrator
from hiring_ai.core.processing.models import (
    InterviewAnalysisResult,
    JobPostingPayload,
    JobPostingResult,
    PipelineResult,
    ResumeProcessingPayload,
    VideoAnalysisPayload,
)

router = APIRouter(prefix="/processing", tags=["processing"])


@router.post("/sync", response_model=PipelineResult)
async def process_sync(
    payload: ResumeProcessingPayload,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> PipelineResult:
    """
    Process a resume inline and return the pipeline result.

    A hard failure (unreadable document, extraction failure) is returned
    as success=false with error and error_category rather than an HTTP
    error; optional step failures appear in warnings.
    """
    return await orchestrator.process_complete(payload)


@router.post("/job-postings", response_model=JobPostingResult)
async def index_job_posting(
    payload: JobPostingPayload,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> JobPostingResult:
    """Embed a job posting inline so candidates can be matched against it."""
    try:
        return await orchestrator.index_job_posting(payload)
    except HiringAIException as e:
        raise to_http_exception(e)


@router.post("/interviews", response_model=InterviewAnalysisResult)
async def analyze_interview(
    payload: VideoAnalysisPayload,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> InterviewAnalysisResult:
    """Analyze an interview transcript inline."""
    try:
        return await orchestrator.analyze_interview(payload)
    except HiringAIException as e:
        raise to_http_exception(e)
