"""
Vector search engine.

Ranks stored embeddings against a query vector with metadata filters,
a TTL result cache, and batch execution. Cached results are not
invalidated by embedding writes; a new or updated embedding can take up
to the cache TTL to appear in a repeated identical search.

Dependencies: numpy, hiring_ai.boundary.vdb, hiring_ai.core.cache
System role: Semantic candidate/job ranking
"""

import asyncio
import logging
import time
from collections import deque
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from hiring_ai.boundary.vdb.embedding_store import EmbeddingStore
from hiring_ai.boundary.vdb.vector_schemas import EmbeddingRecord, EntityType
from hiring_ai.core.cache import TTLCache, fingerprint
from hiring_ai.core.exceptions import EntityNotFoundError, HiringAIException, SearchError

from .filters import build_predicate, matched_skills, matches_availability
from .models import (
    BatchSearchItem,
    SearchFilters,
    SearchHit,
    SearchOptions,
    SearchResult,
    VectorQuery,
)
from .similarity import score_matrix

logger = logging.getLogger(__name__)

SCORE_BANDS = (
    (0.9, "Excellent overall match"),
    (0.8, "Strong profile alignment"),
    (0.7, "Good skill compatibility"),
)


def match_reasons(record: EmbeddingRecord, score: float, filters: SearchFilters) -> list[str]:
    """Human-readable reasons for a hit: score band, skills, experience, location."""
    reasons: list[str] = []
    for floor, label in SCORE_BANDS:
        if score > floor:
            reasons.append(label)
            break

    metadata = record.metadata
    matched = matched_skills(metadata, filters.skills) if filters.skills else []
    if matched:
        reasons.append(f"Matched skills: {', '.join(matched)}")
    elif metadata.skills:
        reasons.append(f"Skills: {', '.join(metadata.skills[:3])}")
    if metadata.experience:
        reasons.append(f"Experience: {metadata.experience}")
    if metadata.location:
        reasons.append(f"Location: {metadata.location}")
    return reasons


class VectorSearchEngine:
    """Similarity search over an EmbeddingStore."""

    def __init__(
        self,
        store: EmbeddingStore,
        dimension: int,
        cache_ttl_seconds: float = 60.0,
        cache_max_entries: int = 256,
        default_limit: int = 20,
        max_limit: int = 100,
        batch_concurrency: int = 5,
        stats_window_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize engine.

        Args:
            store: Embedding store (read-only here)
            dimension: Required query vector length
            cache_ttl_seconds: Result cache TTL (0 disables caching)
            cache_max_entries: Result cache size bound
            default_limit: Result count when none is requested
            max_limit: Upper bound for requested result counts
            batch_concurrency: Concurrent searches within one batch
            stats_window_seconds: Window for recent query counts
            clock: Monotonic time source (injectable for tests)
        """
        self._store = store
        self._dimension = dimension
        self._default_limit = default_limit
        self._max_limit = max_limit
        self._batch_concurrency = batch_concurrency
        self._stats_window_seconds = stats_window_seconds
        self._clock = clock
        self._cache: TTLCache[SearchResult] = TTLCache(
            max_entries=cache_max_entries,
            ttl_seconds=cache_ttl_seconds,
            clock=clock,
        )
        self._recent_queries: deque[float] = deque()
        self._total_queries = 0
        self._total_latency_ms = 0.0

    def _resolve_limit(self, limit: int | None) -> int:
        if limit is None:
            return self._default_limit
        if limit < 1:
            raise SearchError("limit must be at least 1", {"limit": limit})
        return min(limit, self._max_limit)

    async def search(
        self,
        query_vector: Sequence[float],
        filters: SearchFilters | None = None,
        limit: int | None = None,
        options: SearchOptions | None = None,
    ) -> SearchResult:
        """
        Rank stored embeddings against a query vector.

        Args:
            query_vector: Query embedding of the configured dimension
            filters: Structured filters (defaults to all candidates)
            limit: Maximum hits (defaults to default_limit, capped at max_limit)
            options: Threshold, caching, and metadata options

        Returns:
            SearchResult: At most `limit` hits, descending by score, ties broken
            by most recently updated record then entity ID

        Raises:
            SearchError: Empty or wrong-dimension query vector, invalid limit
        """
        filters = filters or SearchFilters()
        options = options or SearchOptions()
        limit = self._resolve_limit(limit)

        if len(query_vector) != self._dimension:
            raise SearchError(
                f"Query vector has dimension {len(query_vector)}, expected {self._dimension}",
                {"dimension": len(query_vector)},
            )

        start_time = time.perf_counter()
        cache_key = fingerprint(
            [round(float(v), 6) for v in query_vector],
            filters.model_dump(mode="json"),
            limit,
            options.threshold,
            options.include_metadata,
        )

        if options.use_cache:
            cached = self._cache.get(cache_key)
            if cached is not None:
                result = cached.model_copy(deep=True)
                result.cached = True
                result.search_time_ms = (time.perf_counter() - start_time) * 1000
                self._record_query(result.search_time_ms)
                return result

        records = await self._store.list_records(filters.entity_type, build_predicate(filters))
        usable = []
        for record in records:
            if len(record.vector) != self._dimension:
                logger.warning(
                    f"{__name__}:search - Skipping record with wrong dimension",
                    extra={"entity_id": record.entity_id, "dimension": len(record.vector)},
                )
                continue
            usable.append(record)

        scores = score_matrix(query_vector, [record.vector for record in usable])
        ranked = [
            (record, float(s))
            for record, s in zip(usable, scores)
            if float(s) >= options.threshold
        ]
        ranked.sort(key=lambda item: (-item[1], -item[0].updated_at.timestamp(), item[0].entity_id))

        hits: list[SearchHit] = []
        for record, s in ranked:
            if not matches_availability(record.metadata, filters.availability):
                continue
            hits.append(
                SearchHit(
                    entity_id=record.entity_id,
                    entity_type=record.entity_type,
                    score=s,
                    match_reasons=match_reasons(record, s, filters),
                    metadata=record.metadata if options.include_metadata else None,
                    updated_at=record.updated_at,
                )
            )
            if len(hits) >= limit:
                break

        result = SearchResult(
            hits=hits,
            limit=limit,
            candidates_scored=len(usable),
            search_time_ms=(time.perf_counter() - start_time) * 1000,
        )
        if options.use_cache:
            self._cache.set(cache_key, result.model_copy(deep=True))
        self._record_query(result.search_time_ms)

        logger.debug(
            f"{__name__}:search - Ranked embeddings",
            extra={
                "candidates_scored": len(usable),
                "hits": len(hits),
                "search_time_ms": round(result.search_time_ms, 2),
            },
        )
        return result

    async def batch_search(self, queries: Sequence[VectorQuery]) -> list[BatchSearchItem]:
        """
        Run independent vector searches.

        One failing query never aborts the others; results keep input order.

        Args:
            queries: Vector queries

        Returns:
            list[BatchSearchItem]: One item per query with result or error
        """
        return await self.run_batch(
            [
                (lambda q=q: self.search(q.vector, q.filters, q.limit, q.options))
                for q in queries
            ]
        )

    async def run_batch(
        self,
        searches: Sequence[Callable[[], Awaitable[SearchResult]]],
    ) -> list[BatchSearchItem]:
        """
        Execute search callables with bounded concurrency and per-item errors.

        Args:
            searches: Zero-argument callables producing a SearchResult

        Returns:
            list[BatchSearchItem]: One item per callable, in input order
        """
        semaphore = asyncio.Semaphore(self._batch_concurrency)

        async def run(index: int, search: Callable[[], Awaitable[SearchResult]]) -> BatchSearchItem:
            async with semaphore:
                try:
                    return BatchSearchItem(index=index, result=await search())
                except HiringAIException as e:
                    error = e.to_dict()
                except Exception as e:
                    error = {
                        "type": type(e).__name__,
                        "category": "transient",
                        "message": str(e),
                        "details": {},
                    }
                logger.warning(
                    f"{__name__}:run_batch - Batch item failed",
                    extra={"index": index, "error": error["message"]},
                )
                return BatchSearchItem(index=index, error=error)

        return list(await asyncio.gather(*(run(i, s) for i, s in enumerate(searches))))

    async def find_similar(
        self,
        entity_id: str,
        entity_type: EntityType = EntityType.CANDIDATE,
        filters: SearchFilters | None = None,
        limit: int | None = None,
        options: SearchOptions | None = None,
    ) -> SearchResult:
        """
        Search with a stored entity's own embedding, excluding the entity.

        filters.entity_type selects what is searched, so a candidate's
        vector can rank jobs and vice versa.

        Raises:
            EntityNotFoundError: No embedding is stored for the entity
        """
        record = await self._store.get(entity_id, entity_type)
        if record is None:
            raise EntityNotFoundError(entity_id, entity_type.value)

        filters = (filters or SearchFilters(entity_type=entity_type)).model_copy(deep=True)
        if filters.entity_type == entity_type and entity_id not in filters.exclude_ids:
            filters.exclude_ids.append(entity_id)
        return await self.search(record.vector, filters, limit, options)

    def clear_cache(self) -> None:
        """Drop all cached results."""
        self._cache.clear()
        logger.info(f"{__name__}:clear_cache - Search cache cleared")

    def _record_query(self, latency_ms: float) -> None:
        now = self._clock()
        self._total_queries += 1
        self._total_latency_ms += latency_ms
        self._recent_queries.append(now)
        cutoff = now - self._stats_window_seconds
        while self._recent_queries and self._recent_queries[0] < cutoff:
            self._recent_queries.popleft()

    def get_search_stats(self) -> dict[str, Any]:
        """Cache effectiveness and query volume."""
        cutoff = self._clock() - self._stats_window_seconds
        recent = sum(1 for at in self._recent_queries if at >= cutoff)
        return {
            "total_queries": self._total_queries,
            "recent_queries": recent,
            "stats_window_seconds": self._stats_window_seconds,
            "cache_hits": self._cache.hits,
            "cache_misses": self._cache.misses,
            "cache_hit_rate": round(self._cache.hit_rate, 4),
            "cache_size": len(self._cache),
            "average_latency_ms": (
                round(self._total_latency_ms / self._total_queries, 2) if self._total_queries else 0.0
            ),
        }
