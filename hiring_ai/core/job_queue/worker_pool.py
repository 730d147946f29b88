"""
Worker pool for the job queue.

A fixed number of asyncio worker tasks pull from one shared queue and
dispatch each job to the handler registered for its type. Handler errors
are classified by category: transient errors are retried by the queue,
configuration and invalid-input errors fail the job immediately.

Dependencies: asyncio, hiring_ai.core.job_queue, hiring_ai.observability
System role: Bounded-concurrency execution of background jobs
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel

from hiring_ai.core.exceptions import ConfigurationError, HiringAIException
from hiring_ai.observability.correlation import clear_correlation_id, set_correlation_id
from hiring_ai.observability.log_utils import log_exception_with_context

from .models import Job, JobStatus, JobType
from .queue import JobQueue

logger = logging.getLogger(__name__)

# Called with (stage, percent) while a handler runs
ProgressReporter = Callable[[str, int], Awaitable[None]]

JobHandler = Callable[[Any, ProgressReporter], Awaitable[BaseModel | dict[str, Any]]]


class WorkerPool:
    """Run queued jobs with at most `worker_count` in flight."""

    def __init__(
        self,
        queue: JobQueue,
        handlers: dict[JobType, JobHandler],
        worker_count: int = 3,
        shutdown_grace_seconds: float = 30.0,
    ) -> None:
        """
        Initialize pool.

        Args:
            queue: Shared job queue
            handlers: Handler per job type, called with the typed payload and a
                progress reporter bound to the job
            worker_count: Number of concurrent workers
            shutdown_grace_seconds: Default drain timeout for shutdown
        """
        if worker_count < 1:
            raise ValueError("worker_count must be at least 1")
        self._queue = queue
        self._handlers = dict(handlers)
        self._worker_count = worker_count
        self._shutdown_grace_seconds = shutdown_grace_seconds
        self._workers: list[asyncio.Task] = []

        self.jobs_completed = 0
        self.jobs_failed = 0
        self.jobs_retried = 0
        self._total_latency_ms = 0.0

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._workers)

    def start(self) -> None:
        """Start worker tasks (no-op when already running)."""
        if self.running:
            return
        self._workers = [
            asyncio.create_task(self._worker_loop(index), name=f"job-worker-{index}")
            for index in range(self._worker_count)
        ]
        logger.info(
            f"{__name__}:start - Worker pool started",
            extra={"worker_count": self._worker_count},
        )

    async def shutdown(self, drain: bool = True, timeout: float | None = None) -> None:
        """
        Stop the pool.

        Args:
            drain: Let workers finish queued jobs before exiting; when False,
                queued jobs are cancelled and only in-flight jobs finish
            timeout: Seconds to wait before cancelling workers
                (defaults to shutdown_grace_seconds)

        Every job is terminal once this returns: jobs left queued when the
        workers stop are cancelled, or failed when they already ran.
        """
        timeout = self._shutdown_grace_seconds if timeout is None else timeout
        await self._queue.close(drain=drain)

        if self._workers:
            _, pending = await asyncio.wait(self._workers, timeout=timeout)
            for task in pending:
                task.cancel()
            await asyncio.gather(*self._workers, return_exceptions=True)
            if pending:
                logger.warning(
                    f"{__name__}:shutdown - Cancelled workers after grace period",
                    extra={"cancelled_workers": len(pending), "timeout_seconds": timeout},
                )
        self._workers = []
        # No worker is left to claim, so jobs still queued (e.g. backing off) must settle
        await self._queue.close(drain=False)
        logger.info(f"{__name__}:shutdown - Worker pool stopped")

    async def _worker_loop(self, index: int) -> None:
        while True:
            job = await self._queue.claim()
            if job is None:
                logger.debug(f"{__name__}:_worker_loop - Worker {index} exiting")
                return
            await self._run_job(job)

    async def _run_job(self, job: Job) -> None:
        set_correlation_id(job.id)
        start_time = time.perf_counter()
        try:
            handler = self._handlers.get(job.type)
            if handler is None:
                raise ConfigurationError(
                    f"No handler registered for job type {job.type.value}",
                    {"job_type": job.type.value},
                )

            logger.info(
                f"{__name__}:_run_job - START",
                extra={"job_id": job.id, "job_type": job.type.value, "attempt": job.attempts},
            )
            output = await handler(job.payload, self._progress_reporter(job.id))
            result = output.model_dump(mode="json") if isinstance(output, BaseModel) else output

            await self._queue.complete(job.id, result)
            self.jobs_completed += 1
            self._total_latency_ms += (time.perf_counter() - start_time) * 1000
            logger.info(f"{__name__}:_run_job - END", extra={"job_id": job.id})

        except asyncio.CancelledError:
            await self._queue.fail(
                job.id,
                {
                    "type": "Cancelled",
                    "category": "transient",
                    "message": "Worker stopped before the job finished",
                    "details": {},
                },
                retryable=False,
            )
            self.jobs_failed += 1
            raise
        except HiringAIException as e:
            await self._record_failure(job, e.to_dict(), e.retryable, start_time)
        except Exception as e:
            # Unclassified errors are treated as transient
            log_exception_with_context(
                logger,
                f"{__name__}:_run_job - Unexpected handler error",
                e,
                job_id=job.id,
            )
            error = {
                "type": type(e).__name__,
                "category": "transient",
                "message": str(e),
                "details": {},
            }
            await self._record_failure(job, error, True, start_time)
        finally:
            clear_correlation_id()

    def _progress_reporter(self, job_id: str) -> ProgressReporter:
        async def report(stage: str, progress: int) -> None:
            await self._queue.update_progress(job_id, stage, progress)

        return report

    async def _record_failure(
        self,
        job: Job,
        error: dict[str, Any],
        retryable: bool,
        start_time: float,
    ) -> None:
        updated = await self._queue.fail(job.id, error, retryable)
        if updated.status == JobStatus.QUEUED:
            self.jobs_retried += 1
        else:
            self.jobs_failed += 1
            self._total_latency_ms += (time.perf_counter() - start_time) * 1000

    def stats(self) -> dict[str, Any]:
        """Execution counters since start."""
        finished = self.jobs_completed + self.jobs_failed
        return {
            "worker_count": self._worker_count,
            "running": self.running,
            "jobs_completed": self.jobs_completed,
            "jobs_failed": self.jobs_failed,
            "jobs_retried": self.jobs_retried,
            "failure_rate": round(self.jobs_failed / finished, 4) if finished else 0.0,
            "average_latency_ms": round(self._total_latency_ms / finished, 2) if finished else 0.0,
        }
