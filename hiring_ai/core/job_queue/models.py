"""
Job domain model.

A Job is owned by the job queue and mutated only by the worker that
claimed it; callers only ever see snapshots.

Dependencies: pydantic, hiring_ai.core.processing.models
System role: Unit of asynchronous work
"""

import enum
import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, model_validator

from hiring_ai.core.processing.models import JobPayload


class JobType(str, enum.Enum):
    """Job type enum; values match the payload discriminator."""

    RESUME_PROCESSING = "resume_processing"
    VIDEO_ANALYSIS = "video_analysis"
    JOB_POSTING_EMBEDDING = "job_posting_embedding"


class JobStatus(str, enum.Enum):
    """
    Job status enum.

    QUEUED: Waiting for a worker (also while backing off before a retry)
    RUNNING: Claimed by a worker
    COMPLETED: Handler succeeded; result stored
    FAILED: Fatal error or attempts exhausted; error stored
    CANCELLED: Removed from the queue before a worker claimed it
    """

    QUEUED = "queued"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED, JobStatus.CANCELLED)


class JobPriority(str, enum.Enum):
    """Priority tier; high is always scheduled before medium, medium before low."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


PRIORITY_ORDER = (JobPriority.HIGH, JobPriority.MEDIUM, JobPriority.LOW)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Job(BaseModel):
    """
    Unit of asynchronous work.

    Attributes:
        id: Caller- or system-generated unique ID
        type: Job type, equal to payload.type
        priority: Scheduling tier
        payload: Typed payload variant for the job type
        status: Lifecycle status
        attempts: Handler runs started so far
        max_attempts: Attempt limit for transient failures
        progress: Percent complete of the current attempt (0-100)
        stage: Name of the step the handler is in, e.g. "generating_embedding"
        next_attempt_at: Earliest retry time while backing off
        result: Handler output on success
        error: Structured error on failure (type, category, message, details)
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    type: JobType
    priority: JobPriority = JobPriority.MEDIUM
    payload: JobPayload
    status: JobStatus = JobStatus.QUEUED

    created_at: datetime = Field(default_factory=_utc_now)
    started_at: datetime | None = None
    finished_at: datetime | None = None
    next_attempt_at: datetime | None = None

    attempts: int = 0
    max_attempts: int = 3

    progress: int = Field(default=0, ge=0, le=100)
    stage: str | None = None

    result: dict[str, Any] | None = None
    error: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _type_matches_payload(self) -> "Job":
        if self.payload.type != self.type.value:
            raise ValueError(
                f"Payload type {self.payload.type!r} does not match job type {self.type.value!r}"
            )
        return self
