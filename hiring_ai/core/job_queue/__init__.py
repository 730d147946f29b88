"""
Priority job queue and worker pool.

Exports: Job, JobType, JobStatus, JobPriority, JobQueue, InMemoryJobQueue,
WorkerPool, build_handlers
"""

from .handlers import build_handlers
from .models import PRIORITY_ORDER, Job, JobPriority, JobStatus, JobType
from .queue import InMemoryJobQueue, JobQueue
from .worker_pool import JobHandler, ProgressReporter, WorkerPool

__all__ = [
    "PRIORITY_ORDER",
    "Job",
    "JobPriority",
    "JobStatus",
    "JobType",
    "JobQueue",
    "InMemoryJobQueue",
    "JobHandler",
    "ProgressReporter",
    "WorkerPool",
    "build_handlers",
]
