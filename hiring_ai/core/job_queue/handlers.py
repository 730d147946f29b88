"""
Job handlers.

Binds each job type to the pipeline operation that executes it. A resume
run that ends unsuccessful is raised as a PipelineError so the worker pool
can apply the retry policy of its error category. Resume runs report each
pipeline stage as job progress; the single-step job types report one stage.

Dependencies: hiring_ai.core.processing
System role: Type-safe dispatch table from job type to pipeline operation
"""

from hiring_ai.core.exceptions import ErrorCategory, PipelineError
from hiring_ai.core.processing import ProcessingPipeline
from hiring_ai.core.processing.models import (
    JobPostingPayload,
    PipelineResult,
    ResumeProcessingPayload,
    VideoAnalysisPayload,
)

from .models import JobType
from .worker_pool import JobHandler, ProgressReporter


def build_handlers(pipeline: ProcessingPipeline) -> dict[JobType, JobHandler]:
    """
    Build the handler registry for a pipeline.

    Args:
        pipeline: Pipeline executing the work

    Returns:
        dict: Handler per job type
    """

    async def handle_resume(
        payload: ResumeProcessingPayload, report: ProgressReporter
    ) -> PipelineResult:
        result = await pipeline.process(payload, on_progress=report)
        if not result.success:
            raise PipelineError(
                result.error or "Resume processing failed",
                entity_id=result.entity_id,
                category=result.error_category or ErrorCategory.TRANSIENT,
                details={"result": result.model_dump(mode="json")},
            )
        return result

    async def handle_video(payload: VideoAnalysisPayload, report: ProgressReporter):
        await report("analyzing_interview", 10)
        return await pipeline.analyze_interview(payload)

    async def handle_job_posting(payload: JobPostingPayload, report: ProgressReporter):
        await report("indexing_job_posting", 10)
        return await pipeline.process_job_posting(payload)

    return {
        JobType.RESUME_PROCESSING: handle_resume,
        JobType.VIDEO_ANALYSIS: handle_video,
        JobType.JOB_POSTING_EMBEDDING: handle_job_posting,
    }
