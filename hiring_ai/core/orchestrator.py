"""
Processing orchestrator.

Single entry point for the background AI core: routes resume processing to
the synchronous pipeline (high priority) or the job queue (everything
else), generates query embeddings through the same gateway path the
pipeline uses, and exposes search and processing statistics.

Dependencies: hiring_ai.core.processing, hiring_ai.core.job_queue,
    hiring_ai.core.search, hiring_ai.boundary.ai
System role: Facade over pipeline, queue, and search
"""

import asyncio
import hashlib
import logging
import time
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field

from hiring_ai.boundary.ai.gateway import RETRIEVAL_DOCUMENT, RETRIEVAL_QUERY, AIGateway
from hiring_ai.boundary.ai.rate_limiter import AIRateLimiter
from hiring_ai.boundary.vdb.vector_schemas import EntityType
from hiring_ai.core.cache import TTLCache
from hiring_ai.core.concurrency import BackgroundTasks
from hiring_ai.core.exceptions import JobFailedError, JobNotFoundError, SearchError
from hiring_ai.core.job_queue import Job, JobPriority, JobQueue, JobStatus, WorkerPool
from hiring_ai.core.processing import ProcessingPipeline
from hiring_ai.core.processing.models import (
    InterviewAnalysisResult,
    JobPayload,
    JobPostingPayload,
    JobPostingResult,
    PipelineResult,
    ResumeProcessingPayload,
    VideoAnalysisPayload,
)
from hiring_ai.core.search import (
    BatchSearchItem,
    SearchFilters,
    SearchOptions,
    SearchQuery,
    SearchResult,
    VectorSearchEngine,
)

logger = logging.getLogger(__name__)


class SubmissionOutcome(BaseModel):
    """Outcome of submit: a job ID (queued) or a pipeline result (processed inline)."""

    mode: str = Field(description="sync or queued")
    job_id: str | None = None
    result: PipelineResult | None = None


class Orchestrator:
    """
    Facade combining ProcessingPipeline, JobQueue, and VectorSearchEngine.

    Constructed by the composition root; owns no global state.
    """

    def __init__(
        self,
        pipeline: ProcessingPipeline,
        queue: JobQueue,
        worker_pool: WorkerPool,
        search_engine: VectorSearchEngine,
        gateway: AIGateway,
        rate_limiter: AIRateLimiter | None = None,
        embedding_cache_ttl_seconds: float = 60.0,
        embedding_cache_max_entries: int = 256,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            pipeline: Resume processing pipeline (synchronous path)
            queue: Job queue (asynchronous path)
            worker_pool: Workers draining the queue
            search_engine: Vector search engine
            gateway: AI gateway used for query embeddings
            rate_limiter: Limiter in front of the gateway, reported in stats
            embedding_cache_ttl_seconds: Lifetime of cached embeddings
            embedding_cache_max_entries: Embedding cache size bound
        """
        self._pipeline = pipeline
        self._queue = queue
        self._worker_pool = worker_pool
        self._search_engine = search_engine
        self._gateway = gateway
        self._rate_limiter = rate_limiter
        self._embedding_cache: TTLCache[list[float]] = TTLCache(
            max_entries=embedding_cache_max_entries,
            ttl_seconds=embedding_cache_ttl_seconds,
        )
        self._background = BackgroundTasks()

        self._sync_runs = 0
        self._sync_failures = 0
        self._degraded_runs = 0
        self._sync_latency_ms = 0.0

    @property
    def search_engine(self) -> VectorSearchEngine:
        return self._search_engine

    async def start(self) -> None:
        """Start the worker pool."""
        self._worker_pool.start()

    async def shutdown(self, drain: bool = True, timeout: float | None = None) -> None:
        """
        Stop accepting work and drain in-flight jobs.

        Args:
            drain: Finish queued jobs before stopping
            timeout: Grace period before remaining work is cancelled
        """
        await self._worker_pool.shutdown(drain=drain, timeout=timeout)
        if not await self._background.wait(timeout):
            await self._background.cancel_all()

    # Processing

    async def process_complete(self, payload: ResumeProcessingPayload) -> PipelineResult:
        """
        Run the pipeline inline for an interactive caller.

        Returns:
            PipelineResult: success=False with error set on hard failure;
            warnings list the optional steps that failed
        """
        start_time = time.perf_counter()
        result = await self._pipeline.process(payload)

        self._sync_runs += 1
        self._sync_latency_ms += (time.perf_counter() - start_time) * 1000
        if not result.success:
            self._sync_failures += 1
        elif result.degraded:
            self._degraded_runs += 1
        return result

    async def enqueue(
        self,
        payload: ResumeProcessingPayload,
        priority: JobPriority = JobPriority.MEDIUM,
        job_id: str | None = None,
    ) -> str:
        """Queue resume processing. Returns the job ID."""
        return await self._queue.submit(payload, priority, job_id)

    async def enqueue_job(
        self,
        payload: JobPayload,
        priority: JobPriority = JobPriority.MEDIUM,
        job_id: str | None = None,
    ) -> str:
        """Queue any job payload variant. Returns the job ID."""
        return await self._queue.submit(payload, priority, job_id)

    async def submit(
        self,
        payload: ResumeProcessingPayload,
        priority: JobPriority = JobPriority.MEDIUM,
    ) -> SubmissionOutcome:
        """
        Route by priority: high runs inline, medium and low are queued.

        Returns:
            SubmissionOutcome: result for inline runs, job_id for queued ones
        """
        if priority == JobPriority.HIGH:
            return SubmissionOutcome(mode="sync", result=await self.process_complete(payload))
        return SubmissionOutcome(mode="queued", job_id=await self.enqueue(payload, priority))

    def process_in_background(self, payload: ResumeProcessingPayload) -> asyncio.Task:
        """
        Fire-and-forget inline processing.

        Failures and unsuccessful results are logged; the returned task can
        still be awaited by callers that change their mind.
        """

        async def run() -> PipelineResult:
            result = await self.process_complete(payload)
            if not result.success:
                logger.error(
                    f"{__name__}:process_in_background - Processing failed",
                    extra={"entity_id": result.entity_id, "error": result.error},
                )
            return result

        return self._background.spawn(run(), name=f"process-{payload.candidate_id}")

    async def get_job(self, job_id: str) -> Job:
        """
        Job snapshot.

        Raises:
            JobNotFoundError: Unknown or purged job
        """
        job = await self._queue.get_status(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        return job

    async def cancel_job(self, job_id: str) -> Job:
        """Cancel a queued job (running jobs cannot be cancelled)."""
        return await self._queue.cancel(job_id)

    async def wait_for_job(self, job_id: str, timeout: float | None = None) -> Job:
        """
        Await a queued job.

        Returns:
            Job: Completed or cancelled snapshot

        Raises:
            JobFailedError: Job ended failed
            asyncio.TimeoutError: Job did not finish within timeout
        """
        job = await self._queue.wait_for(job_id, timeout)
        if job.status == JobStatus.FAILED:
            raise JobFailedError(job.id, job.error)
        return job

    async def index_job_posting(self, payload: JobPostingPayload) -> JobPostingResult:
        """Embed and store a job posting inline."""
        return await self._pipeline.process_job_posting(payload)

    async def analyze_interview(self, payload: VideoAnalysisPayload) -> InterviewAnalysisResult:
        """Analyze an interview transcript inline."""
        return await self._pipeline.analyze_interview(payload)

    # Embeddings and search

    async def generate_embeddings(
        self,
        text: str,
        task_type: str = RETRIEVAL_DOCUMENT,
    ) -> list[float]:
        """
        Embed text through the same gateway path as the pipeline.

        Identical text and task type reuse the cached vector within the
        embedding cache TTL.
        """
        key = f"{task_type}:{hashlib.sha256(text.encode('utf-8')).hexdigest()}"
        cached = self._embedding_cache.get(key)
        if cached is not None:
            return list(cached)

        vector = await self._gateway.embed(text, task_type)
        self._embedding_cache.set(key, list(vector))
        return vector

    async def search(self, query: SearchQuery) -> SearchResult:
        """
        Embed the query text and rank stored embeddings.

        Raises:
            SearchError: Blank query text
            HiringAIException: Query embedding failed
        """
        if not query.text.strip():
            raise SearchError("Query text is empty")
        vector = await self.generate_embeddings(query.text, RETRIEVAL_QUERY)
        return await self._search_engine.search(vector, query.filters, query.limit, query.options)

    async def batch_search(self, queries: Sequence[SearchQuery]) -> list[BatchSearchItem]:
        """Run independent searches; a failing query is reported in its own item."""
        return await self._search_engine.run_batch(
            [(lambda q=q: self.search(q)) for q in queries]
        )

    async def find_similar(
        self,
        entity_id: str,
        entity_type: EntityType = EntityType.CANDIDATE,
        filters: SearchFilters | None = None,
        limit: int | None = None,
        options: SearchOptions | None = None,
    ) -> SearchResult:
        """Rank entities against a stored entity's embedding."""
        return await self._search_engine.find_similar(entity_id, entity_type, filters, limit, options)

    # Statistics

    async def get_processing_stats(self) -> dict[str, Any]:
        """Aggregate counters across inline runs and queued jobs."""
        pool = self._worker_pool.stats()
        sync_successes = self._sync_runs - self._sync_failures

        processed = pool["jobs_completed"] + sync_successes
        failed = pool["jobs_failed"] + self._sync_failures
        finished = processed + failed
        pool_latency_total = pool["average_latency_ms"] * (pool["jobs_completed"] + pool["jobs_failed"])

        return {
            "jobs_processed": processed,
            "jobs_failed": failed,
            "failure_rate": round(failed / finished, 4) if finished else 0.0,
            "average_latency_ms": (
                round((pool_latency_total + self._sync_latency_ms) / finished, 2) if finished else 0.0
            ),
            "sync_runs": self._sync_runs,
            "degraded_runs": self._degraded_runs,
            "jobs_retried": pool["jobs_retried"],
            "queue": await self._queue.stats(),
            "embedding_cache": self._embedding_cache.stats(),
            "background_tasks": self._background.active,
            "rate_limits": self._rate_limiter.status() if self._rate_limiter else {},
        }

    def get_search_stats(self) -> dict[str, Any]:
        return self._search_engine.get_search_stats()
