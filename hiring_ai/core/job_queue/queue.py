"""
Priority job queue.

One FIFO deque per priority tier behind an asyncio.Condition. Workers claim
the oldest eligible job from the highest non-empty tier; a retried job goes
to the tail of its tier and stays ineligible until its backoff elapses, so
it runs behind the peers that were already waiting.

Dependencies: asyncio, hiring_ai.core.job_queue.models
System role: Shared scheduling state between submitters and the worker pool
"""

import asyncio
import logging
import time
from collections import deque
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol, runtime_checkable

from hiring_ai.core.exceptions import (
    ConfigurationError,
    JobNotFoundError,
    JobStateError,
    QueueCapacityError,
)
from hiring_ai.core.processing.models import JobPayload

from .models import PRIORITY_ORDER, Job, JobPriority, JobStatus, JobType

logger = logging.getLogger(__name__)


@runtime_checkable
class JobQueue(Protocol):
    """Queue operations used by the orchestrator and the worker pool."""

    async def submit(
        self,
        payload: JobPayload,
        priority: JobPriority = JobPriority.MEDIUM,
        job_id: str | None = None,
    ) -> str: ...

    async def get_status(self, job_id: str) -> Job | None: ...

    async def cancel(self, job_id: str) -> Job: ...

    async def claim(self) -> Job | None: ...

    async def update_progress(self, job_id: str, stage: str, progress: int) -> Job: ...

    async def complete(self, job_id: str, result: dict[str, Any]) -> Job: ...

    async def fail(self, job_id: str, error: dict[str, Any], retryable: bool) -> Job: ...

    async def wait_for(self, job_id: str, timeout: float | None = None) -> Job: ...

    async def stats(self) -> dict[str, Any]: ...

    async def purge_expired(self) -> int: ...

    async def close(self, drain: bool = True) -> None: ...


class InMemoryJobQueue:
    """
    In-process JobQueue.

    Contents do not survive a restart. All state changes happen under one
    condition lock that is never held across handler execution.
    """

    def __init__(
        self,
        capacity: int = 1000,
        max_attempts: int = 3,
        retry_backoff_seconds: float = 2.0,
        retry_backoff_max_seconds: float = 30.0,
        retention_seconds: float = 3600,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize queue.

        Args:
            capacity: Maximum queued jobs before submit fails fast
            max_attempts: Handler runs allowed per job (first run included)
            retry_backoff_seconds: Base retry delay, doubled per attempt
            retry_backoff_max_seconds: Retry delay ceiling
            retention_seconds: How long terminal jobs stay queryable
            clock: Monotonic time source (injectable for tests)
        """
        self._capacity = capacity
        self._max_attempts = max_attempts
        self._backoff_base = retry_backoff_seconds
        self._backoff_max = retry_backoff_max_seconds
        self._retention_seconds = retention_seconds
        self._clock = clock

        self._jobs: dict[str, Job] = {}
        self._tiers: dict[JobPriority, deque[str]] = {p: deque() for p in PRIORITY_ORDER}
        self._available_at: dict[str, float] = {}
        self._finished_at: dict[str, float] = {}
        self._done: dict[str, asyncio.Event] = {}
        self._condition = asyncio.Condition()
        self._closed = False
        self._draining = False

    @property
    def capacity(self) -> int:
        return self._capacity

    def _queued_count(self) -> int:
        return sum(len(tier) for tier in self._tiers.values())

    def backoff_seconds(self, attempts: int) -> float:
        """Capped exponential delay before the retry following attempt number `attempts`."""
        return min(self._backoff_base * 2 ** max(attempts - 1, 0), self._backoff_max)

    async def submit(
        self,
        payload: JobPayload,
        priority: JobPriority = JobPriority.MEDIUM,
        job_id: str | None = None,
    ) -> str:
        """
        Queue a job without waiting for execution.

        Args:
            payload: Typed payload; its `type` selects the handler
            priority: Scheduling tier
            job_id: Optional caller-supplied ID

        Returns:
            str: Job ID

        Raises:
            ConfigurationError: Queue is shut down
            QueueCapacityError: Queue is at capacity
            JobStateError: job_id belongs to an existing unfinished job
        """
        async with self._condition:
            if self._closed:
                raise ConfigurationError("Job queue is shut down; not accepting jobs")

            self._purge_expired_locked()

            if job_id is not None and job_id in self._jobs:
                existing = self._jobs[job_id]
                if not existing.status.is_terminal:
                    raise JobStateError(job_id, existing.status.value, "resubmit")
                self._forget(job_id)

            if self._queued_count() >= self._capacity:
                logger.warning(
                    f"{__name__}:submit - Rejected, queue full",
                    extra={"capacity": self._capacity},
                )
                raise QueueCapacityError(self._capacity)

            job = Job(
                type=JobType(payload.type),
                priority=priority,
                payload=payload,
                max_attempts=self._max_attempts,
                **({"id": job_id} if job_id else {}),
            )
            self._jobs[job.id] = job
            self._done[job.id] = asyncio.Event()
            self._tiers[priority].append(job.id)
            self._condition.notify()

        logger.info(
            f"{__name__}:submit - Job queued",
            extra={"job_id": job.id, "job_type": job.type.value, "priority": priority.value},
        )
        return job.id

    async def get_status(self, job_id: str) -> Job | None:
        """Snapshot of the job, or None when unknown or purged."""
        job = self._jobs.get(job_id)
        return job.model_copy(deep=True) if job else None

    async def cancel(self, job_id: str) -> Job:
        """
        Remove a queued job before any worker claims it.

        Raises:
            JobNotFoundError: Unknown job
            JobStateError: Job is running or already finished
        """
        async with self._condition:
            job = self._jobs.get(job_id)
            if job is None:
                raise JobNotFoundError(job_id)
            if job.status != JobStatus.QUEUED:
                raise JobStateError(job_id, job.status.value, "cancel")

            self._tiers[job.priority].remove(job_id)
            self._available_at.pop(job_id, None)
            job.next_attempt_at = None
            self._finish(job, JobStatus.CANCELLED)

        logger.info(f"{__name__}:cancel - Job cancelled", extra={"job_id": job_id})
        return job.model_copy(deep=True)

    async def claim(self) -> Job | None:
        """
        Wait for and claim the next eligible job.

        Returns:
            Job snapshot marked running, or None once the queue is closed
            (after draining remaining queued jobs when closed with drain=True)
        """
        async with self._condition:
            while True:
                job, wait_seconds = self._next_eligible()
                if job is not None:
                    job.status = JobStatus.RUNNING
                    job.attempts += 1
                    job.started_at = datetime.now(timezone.utc)
                    job.next_attempt_at = None
                    job.progress = 0
                    job.stage = None
                    if self._closed and self._queued_count() == 0:
                        # Release idle workers once a draining queue empties
                        self._condition.notify_all()
                    return job.model_copy(deep=True)

                if self._closed and (not self._draining or self._queued_count() == 0):
                    return None

                try:
                    await asyncio.wait_for(self._condition.wait(), timeout=wait_seconds)
                except asyncio.TimeoutError:
                    pass

    def _next_eligible(self) -> tuple[Job | None, float | None]:
        """Pop the oldest eligible job of the highest tier; else the time until one is."""
        now = self._clock()
        wait_seconds: float | None = None
        for priority in PRIORITY_ORDER:
            tier = self._tiers[priority]
            for index, job_id in enumerate(tier):
                available_at = self._available_at.get(job_id, 0.0)
                if available_at <= now:
                    del tier[index]
                    self._available_at.pop(job_id, None)
                    return self._jobs[job_id], None
                delay = available_at - now
                wait_seconds = delay if wait_seconds is None else min(wait_seconds, delay)
        return None, wait_seconds

    async def update_progress(self, job_id: str, stage: str, progress: int) -> Job:
        """
        Record the step a running job has reached.

        Progress is clamped to 0-100 and never moves backwards within one
        attempt; a retry starts again from 0 when it is claimed.

        Raises:
            JobNotFoundError: Unknown job
            JobStateError: Job is not running
        """
        async with self._condition:
            job = self._running_job(job_id, "update_progress")
            job.stage = stage
            job.progress = max(job.progress, min(max(progress, 0), 100))
            logger.debug(
                f"{__name__}:update_progress - Job progress",
                extra={"job_id": job_id, "stage": stage, "progress": job.progress},
            )
            return job.model_copy(deep=True)

    async def complete(self, job_id: str, result: dict[str, Any]) -> Job:
        """Record handler success."""
        async with self._condition:
            job = self._running_job(job_id, "complete")
            job.result = result
            job.error = None
            job.progress = 100
            job.stage = "completed"
            self._finish(job, JobStatus.COMPLETED)
            return job.model_copy(deep=True)

    async def fail(self, job_id: str, error: dict[str, Any], retryable: bool) -> Job:
        """
        Record handler failure.

        Retryable failures with attempts left go back to the tail of the same
        tier after a capped exponential backoff; everything else is terminal,
        including retryable failures once the queue is closed without draining.

        Args:
            job_id: Running job
            error: Structured error (type, category, message, details)
            retryable: Whether the error category allows a retry

        Returns:
            Job: Snapshot, status queued (retry scheduled) or failed
        """
        async with self._condition:
            job = self._running_job(job_id, "fail")
            job.error = error

            # A queue closed without draining hands out no further jobs
            accepting_retries = not self._closed or self._draining
            if retryable and accepting_retries and job.attempts < job.max_attempts:
                delay = self.backoff_seconds(job.attempts)
                job.status = JobStatus.QUEUED
                job.next_attempt_at = datetime.now(timezone.utc) + timedelta(seconds=delay)
                self._available_at[job_id] = self._clock() + delay
                self._tiers[job.priority].append(job_id)
                self._condition.notify()
                logger.warning(
                    f"{__name__}:fail - Job will be retried",
                    extra={"job_id": job_id, "attempts": job.attempts, "delay_seconds": delay},
                )
            else:
                self._finish(job, JobStatus.FAILED)
                logger.error(
                    f"{__name__}:fail - Job failed",
                    extra={
                        "job_id": job_id,
                        "attempts": job.attempts,
                        "error_category": error.get("category"),
                    },
                )
            return job.model_copy(deep=True)

    def _running_job(self, job_id: str, operation: str) -> Job:
        job = self._jobs.get(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        if job.status != JobStatus.RUNNING:
            raise JobStateError(job_id, job.status.value, operation)
        return job

    def _finish(self, job: Job, status: JobStatus) -> None:
        job.status = status
        job.finished_at = datetime.now(timezone.utc)
        self._finished_at[job.id] = self._clock()
        self._done[job.id].set()

    async def wait_for(self, job_id: str, timeout: float | None = None) -> Job:
        """
        Await a job's terminal state.

        Args:
            job_id: Job to wait for
            timeout: Seconds to wait (None waits indefinitely)

        Returns:
            Job: Terminal snapshot (completed, failed, or cancelled)

        Raises:
            JobNotFoundError: Unknown job
            asyncio.TimeoutError: Job not finished within timeout
        """
        event = self._done.get(job_id)
        if event is None:
            raise JobNotFoundError(job_id)
        await asyncio.wait_for(event.wait(), timeout=timeout)
        return self._jobs[job_id].model_copy(deep=True)

    async def stats(self) -> dict[str, Any]:
        """Queue depth per tier and job counts per status."""
        counts = {status.value: 0 for status in JobStatus}
        for job in self._jobs.values():
            counts[job.status.value] += 1
        return {
            "queued_by_priority": {p.value: len(self._tiers[p]) for p in PRIORITY_ORDER},
            "queued": counts[JobStatus.QUEUED.value],
            "running": counts[JobStatus.RUNNING.value],
            "completed": counts[JobStatus.COMPLETED.value],
            "failed": counts[JobStatus.FAILED.value],
            "cancelled": counts[JobStatus.CANCELLED.value],
            "capacity": self._capacity,
            "closed": self._closed,
        }

    async def purge_expired(self) -> int:
        """Drop terminal jobs older than the retention window."""
        async with self._condition:
            return self._purge_expired_locked()

    def _purge_expired_locked(self) -> int:
        cutoff = self._clock() - self._retention_seconds
        expired = [job_id for job_id, at in self._finished_at.items() if at <= cutoff]
        for job_id in expired:
            self._forget(job_id)
        if expired:
            logger.debug(f"{__name__}:purge_expired - Purged {len(expired)} jobs")
        return len(expired)

    def _forget(self, job_id: str) -> None:
        self._jobs.pop(job_id, None)
        self._done.pop(job_id, None)
        self._finished_at.pop(job_id, None)
        self._available_at.pop(job_id, None)

    async def close(self, drain: bool = True) -> None:
        """
        Stop accepting jobs and release waiting workers.

        Safe to call again; a later call with drain=False settles whatever a
        draining close left queued.

        Args:
            drain: Keep handing out queued jobs until the queue is empty;
                when False, queued jobs are settled immediately
        """
        async with self._condition:
            self._closed = True
            self._draining = drain
            settled = 0 if drain else self._settle_queued_locked()
            self._condition.notify_all()

        logger.info(
            f"{__name__}:close - Queue closed",
            extra={"drain": drain, "settled_jobs": settled},
        )

    def _settle_queued_locked(self) -> int:
        """
        Move every queued job to a terminal state.

        Jobs that never ran are cancelled; jobs waiting out a retry backoff
        fail and keep the error of their last attempt.
        """
        settled = 0
        for priority in PRIORITY_ORDER:
            tier = self._tiers[priority]
            while tier:
                job = self._jobs[tier.popleft()]
                self._available_at.pop(job.id, None)
                job.next_attempt_at = None
                if job.attempts > 0:
                    self._finish(job, JobStatus.FAILED)
                else:
                    job.error = {
                        "type": "Shutdown",
                        "category": "transient",
                        "message": "Queue shut down before the job started",
                        "details": {},
                    }
                    self._finish(job, JobStatus.CANCELLED)
                settled += 1
        return settled
