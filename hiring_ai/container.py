"""
Composition root.

Builds every collaborator explicitly from settings: stores, gateway,
pipeline, queue, worker pool, search engine, and orchestrator. Owned by
the process entry point (the FastAPI lifespan or a worker script), which
calls start() at startup and shutdown() at exit.

Dependencies: hiring_ai.configs, hiring_ai.boundary, hiring_ai.core
System role: Dependency wiring and lifecycle
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from hiring_ai.boundary.ai.gateway import AIGateway
from hiring_ai.boundary.ai.gemini_gateway import GeminiGateway
from hiring_ai.boundary.ai.rate_limiter import AIRateLimiter, RateLimitedGateway
from hiring_ai.boundary.db.connection import (
    create_tables,
    get_async_engine,
    get_async_session_factory,
)
from hiring_ai.boundary.db.document_store import (
    DocumentStore,
    InMemoryDocumentStore,
    SqlProfileStore,
)
from hiring_ai.boundary.storage.s3_blob_fetcher import S3BlobFetcher
from hiring_ai.boundary.vdb.embedding_store import EmbeddingStore, InMemoryEmbeddingStore
from hiring_ai.configs import Settings, get_settings
from hiring_ai.core.job_queue import InMemoryJobQueue, WorkerPool, build_handlers
from hiring_ai.core.orchestrator import Orchestrator
from hiring_ai.core.processing import PipelineSettings, ProcessingPipeline, get_pipeline_settings
from hiring_ai.core.search import VectorSearchEngine

logger = logging.getLogger(__name__)


class Container:
    """Explicitly constructed application object graph."""

    def __init__(
        self,
        settings: Settings | None = None,
        gateway: AIGateway | None = None,
        document_store: DocumentStore | None = None,
        embedding_store: EmbeddingStore | None = None,
        pipeline_settings: PipelineSettings | None = None,
        blob_fetcher: S3BlobFetcher | None = None,
    ) -> None:
        """
        Build the object graph.

        Any collaborator passed in replaces the one built from settings,
        which is how tests inject fakes.

        Args:
            settings: Application settings (defaults to environment)
            gateway: AI gateway (defaults to GeminiGateway); always wrapped
                in the rate limiter built from the gateway settings
            document_store: Profile store (SQL when PROFILE_DB_URL is set, else in-memory)
            embedding_store: Embedding store (defaults to in-memory)
            pipeline_settings: Pipeline limits (defaults to environment)
            blob_fetcher: S3 fetcher (built when RESUME_STORAGE_BUCKET is set)
        """
        self.settings = settings or get_settings()
        dimension = self.settings.vector_search.embedding_dimension
        self._db_engine: AsyncEngine | None = None

        self.rate_limiter = AIRateLimiter.from_settings(self.settings.gateway)
        self.gateway = RateLimitedGateway(
            gateway or GeminiGateway(self.settings.gateway, dimension),
            self.rate_limiter,
        )
        self.document_store = document_store or self._build_document_store()
        self.embedding_store = embedding_store or InMemoryEmbeddingStore(
            dimension=dimension,
            snapshot_path=self.settings.vector_search.snapshot_path or None,
        )
        if blob_fetcher is None and self.settings.storage.bucket:
            blob_fetcher = S3BlobFetcher(
                bucket=self.settings.storage.bucket,
                region=self.settings.storage.region,
            )

        self.pipeline = ProcessingPipeline(
            gateway=self.gateway,
            document_store=self.document_store,
            embedding_store=self.embedding_store,
            embedding_dimension=dimension,
            settings=pipeline_settings or get_pipeline_settings(),
            blob_fetcher=blob_fetcher,
        )

        queue_settings = self.settings.job_queue
        self.queue = InMemoryJobQueue(
            capacity=queue_settings.capacity,
            max_attempts=queue_settings.max_attempts,
            retry_backoff_seconds=queue_settings.retry_backoff_seconds,
            retry_backoff_max_seconds=queue_settings.retry_backoff_max_seconds,
            retention_seconds=queue_settings.retention_seconds,
        )
        self.worker_pool = WorkerPool(
            queue=self.queue,
            handlers=build_handlers(self.pipeline),
            worker_count=queue_settings.worker_count,
            shutdown_grace_seconds=queue_settings.shutdown_grace_seconds,
        )

        search_settings = self.settings.vector_search
        self.search_engine = VectorSearchEngine(
            store=self.embedding_store,
            dimension=dimension,
            cache_ttl_seconds=search_settings.cache_ttl_seconds,
            cache_max_entries=search_settings.cache_max_entries,
            default_limit=search_settings.default_limit,
            max_limit=search_settings.max_limit,
            batch_concurrency=search_settings.batch_concurrency,
            stats_window_seconds=search_settings.stats_window_seconds,
        )

        self.orchestrator = Orchestrator(
            pipeline=self.pipeline,
            queue=self.queue,
            worker_pool=self.worker_pool,
            search_engine=self.search_engine,
            gateway=self.gateway,
            rate_limiter=self.rate_limiter,
            embedding_cache_ttl_seconds=search_settings.cache_ttl_seconds,
            embedding_cache_max_entries=search_settings.cache_max_entries,
        )

    def _build_document_store(self) -> DocumentStore:
        db_settings = self.settings.database
        if not db_settings.url:
            return InMemoryDocumentStore()
        self._db_engine = get_async_engine(db_settings.url, echo_sql=db_settings.echo_sql)
        return SqlProfileStore(get_async_session_factory(self._db_engine))

    async def start(self) -> None:
        """Prepare storage and start the worker pool."""
        if self._db_engine is not None:
            await create_tables(self._db_engine)
        if isinstance(self.embedding_store, InMemoryEmbeddingStore):
            self.embedding_store.load_snapshot()
        await self.orchestrator.start()
        logger.info(f"{__name__}:start - Container started")

    async def shutdown(self, drain: bool = True) -> None:
        """Drain jobs, checkpoint embeddings, and release connections."""
        await self.orchestrator.shutdown(
            drain=drain,
            timeout=self.settings.job_queue.shutdown_grace_seconds,
        )
        if isinstance(self.embedding_store, InMemoryEmbeddingStore):
            self.embedding_store.save_snapshot()
        if self._db_engine is not None:
            await self._db_engine.dispose()
        logger.info(f"{__name__}:shutdown - Container stopped")
