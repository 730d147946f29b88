"""
Rate limiting for AI gateway calls.

Each gateway operation gets its own sliding request window and a cap on
concurrent calls, so worker jobs, synchronous requests, and batch searches
together cannot exceed the provider quota. Callers over the window wait
for the oldest request to age out instead of failing.

Dependencies: asyncio, hiring_ai.boundary.ai.gateway, hiring_ai.configs
System role: Provider quota protection in front of the AI gateway
"""

import asyncio
import logging
import time
from collections import deque
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from hiring_ai.boundary.ai.gateway import RETRIEVAL_DOCUMENT, AIGateway, SchemaT
from hiring_ai.configs.gateway import GatewaySettings

logger = logging.getLogger(__name__)

EXTRACT_TEXT = "extract_text"
EMBED = "embed"
COMPLETE = "complete"


@dataclass(frozen=True)
class OperationLimit:
    """Request window and concurrency cap for one gateway operation."""

    max_requests: int
    window_seconds: float
    max_in_flight: int


class _OperationState:
    def __init__(self, limit: OperationLimit) -> None:
        self.limit = limit
        self.slots = asyncio.Semaphore(limit.max_in_flight)
        self.window_lock = asyncio.Lock()
        self.started: deque[float] = deque()
        self.in_flight = 0
        self.total_requests = 0
        self.throttled_requests = 0


class AIRateLimiter:
    """Per-operation sliding-window and in-flight limits."""

    def __init__(self, limits: dict[str, OperationLimit]) -> None:
        """
        Initialize limiter.

        Args:
            limits: Limit per operation name (extract_text, embed, complete)
        """
        self._states = {operation: _OperationState(limit) for operation, limit in limits.items()}

    @classmethod
    def from_settings(cls, settings: GatewaySettings) -> "AIRateLimiter":
        """Build limits for every gateway operation from gateway settings."""
        window = settings.rate_limit_window_seconds
        return cls(
            {
                EXTRACT_TEXT: OperationLimit(
                    settings.extract_text_max_requests, window, settings.extract_text_max_in_flight
                ),
                EMBED: OperationLimit(settings.embed_max_requests, window, settings.embed_max_in_flight),
                COMPLETE: OperationLimit(
                    settings.complete_max_requests, window, settings.complete_max_in_flight
                ),
            }
        )

    @asynccontextmanager
    async def acquire(self, operation: str) -> AsyncIterator[None]:
        """
        Hold one request slot of an operation for the duration of the block.

        Waits for a free in-flight slot first, then for room in the request
        window.

        Args:
            operation: Gateway operation name

        Raises:
            KeyError: Operation has no configured limit
        """
        state = self._states[operation]
        async with state.slots:
            await self._reserve_window_slot(operation, state)
            state.in_flight += 1
            try:
                yield
            finally:
                state.in_flight -= 1

    async def _reserve_window_slot(self, operation: str, state: _OperationState) -> None:
        limit = state.limit
        throttled = False
        async with state.window_lock:
            while True:
                now = time.monotonic()
                while state.started and state.started[0] <= now - limit.window_seconds:
                    state.started.popleft()
                if len(state.started) < limit.max_requests:
                    state.started.append(now)
                    break

                if not throttled:
                    throttled = True
                    state.throttled_requests += 1
                    logger.warning(
                        f"{__name__}:acquire - Rate limit reached, waiting",
                        extra={
                            "operation": operation,
                            "max_requests": limit.max_requests,
                            "window_seconds": limit.window_seconds,
                        },
                    )
                await asyncio.sleep(state.started[0] + limit.window_seconds - now)
        state.total_requests += 1

    def status(self) -> dict[str, dict[str, Any]]:
        """Current window usage and counters per operation."""
        now = time.monotonic()
        status = {}
        for operation, state in self._states.items():
            limit = state.limit
            in_window = sum(1 for at in state.started if at > now - limit.window_seconds)
            status[operation] = {
                "max_requests": limit.max_requests,
                "window_seconds": limit.window_seconds,
                "requests_in_window": in_window,
                "max_in_flight": limit.max_in_flight,
                "in_flight": state.in_flight,
                "total_requests": state.total_requests,
                "throttled_requests": state.throttled_requests,
                "is_limited": in_window >= limit.max_requests or state.in_flight >= limit.max_in_flight,
            }
        return status


class RateLimitedGateway:
    """AIGateway that runs every call of the wrapped gateway under a limiter."""

    def __init__(self, gateway: AIGateway, limiter: AIRateLimiter) -> None:
        self._gateway = gateway
        self._limiter = limiter

    @property
    def limiter(self) -> AIRateLimiter:
        return self._limiter

    async def extract_text(self, blob: bytes, mime_type: str) -> str:
        async with self._limiter.acquire(EXTRACT_TEXT):
            return await self._gateway.extract_text(blob, mime_type)

    async def embed(self, text: str, task_type: str = RETRIEVAL_DOCUMENT) -> list[float]:
        async with self._limiter.acquire(EMBED):
            return await self._gateway.embed(text, task_type)

    async def complete(self, prompt: str, schema: type[SchemaT]) -> SchemaT:
        async with self._limiter.acquire(COMPLETE):
            return await self._gateway.complete(prompt, schema)
