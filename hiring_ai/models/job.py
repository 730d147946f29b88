"""
Job API schemas.

Request/response schemas for job submission. Job status responses use
the Job model directly.

Dependencies: pydantic, hiring_ai.core.job_queue
System role: Job API contracts
"""

from pydantic import BaseModel, ConfigDict, Field

from hiring_ai.core.job_queue.models import JobPriority, JobStatus
from hiring_ai.core.processing.models import JobPayload


class SubmitJobRequest(BaseModel):
    """Request schema for queueing a job."""

    payload: JobPayload
    priority: JobPriority = Field(default=JobPriority.MEDIUM)
    job_id: str | None = Field(default=None, min_length=1, description="Optional caller-supplied ID")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "priority": "medium",
                "payload": {
                    "type": "job_posting_embedding",
                    "job_id": "job-42",
                    "title": "Senior Go Engineer",
                    "description": "Build distributed systems in Go.",
                    "skills": ["Go", "Kubernetes"],
                    "location": "Berlin",
                },
            }
        }
    )


class SubmitJobResponse(BaseModel):
    """Response schema for a queued job."""

    job_id: str
    status: JobStatus = JobStatus.QUEUED
