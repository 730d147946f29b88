"""
Test suite for AIRateLimiter and RateLimitedGateway.

Tests the in-flight cap, sliding request window, status reporting, and
pass-through of gateway results and errors.

System role: Verification of provider quota protection
"""

import asyncio
import time

import pytest

from hiring_ai.boundary.ai.rate_limiter import (
    COMPLETE,
    EMBED,
    EXTRACT_TEXT,
    AIRateLimiter,
    OperationLimit,
    RateLimitedGateway,
)
from hiring_ai.configs.gateway import GatewaySettings
from hiring_ai.core.exceptions import TransientGatewayError


class SlowGateway:
    """Gateway stub that tracks concurrent embed calls."""

    def __init__(self, delay: float = 0.0) -> None:
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0
        self.embed_error: Exception | None = None

    async def extract_text(self, blob: bytes, mime_type: str) -> str:
        return blob.decode("utf-8")

    async def embed(self, text: str, task_type: str = "retrieval_document") -> list[float]:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if self.embed_error is not None:
                raise self.embed_error
            return [float(len(text))]
        finally:
            self.in_flight -= 1

    async def complete(self, prompt: str, schema: type):
        raise NotImplementedError


def _limiter(max_requests: int = 100, window_seconds: float = 60.0, max_in_flight: int = 10) -> AIRateLimiter:
    return AIRateLimiter({EMBED: OperationLimit(max_requests, window_seconds, max_in_flight)})


class TestAIRateLimiter:
    """Test suite for request window and in-flight limits."""

    @pytest.mark.asyncio
    async def test_in_flight_cap_should_bound_concurrent_calls(self) -> None:
        # Arrange
        gateway = SlowGateway(delay=0.02)
        limited = RateLimitedGateway(gateway, _limiter(max_in_flight=2))

        # Act
        await asyncio.gather(*(limited.embed(f"text {i}") for i in range(6)))

        # Assert
        assert gateway.max_in_flight == 2

    @pytest.mark.asyncio
    async def test_full_window_should_delay_next_request(self) -> None:
        # Arrange
        limiter = _limiter(max_requests=2, window_seconds=0.2)
        limited = RateLimitedGateway(SlowGateway(), limiter)
        start = time.monotonic()

        # Act
        for i in range(3):
            await limited.embed(f"text {i}")
        elapsed = time.monotonic() - start

        # Assert
        assert elapsed >= 0.15
        status = limiter.status()[EMBED]
        assert status["total_requests"] == 3
        assert status["throttled_requests"] == 1

    @pytest.mark.asyncio
    async def test_status_should_report_window_usage(self) -> None:
        # Arrange
        limiter = _limiter(max_requests=2, window_seconds=60.0)
        limited = RateLimitedGateway(SlowGateway(), limiter)

        # Act
        await limited.embed("one")
        await limited.embed("two")

        # Assert
        status = limiter.status()[EMBED]
        assert status["requests_in_window"] == 2
        assert status["in_flight"] == 0
        assert status["is_limited"] is True

    @pytest.mark.asyncio
    async def test_gateway_error_should_propagate_and_release_slot(self) -> None:
        # Arrange
        gateway = SlowGateway()
        gateway.embed_error = TransientGatewayError("quota", operation="embed")
        limiter = _limiter(max_in_flight=1)
        limited = RateLimitedGateway(gateway, limiter)

        # Act
        with pytest.raises(TransientGatewayError):
            await limited.embed("text")
        gateway.embed_error = None
        vector = await asyncio.wait_for(limited.embed("text"), timeout=1)

        # Assert
        assert vector == [4.0]
        assert limiter.status()[EMBED]["in_flight"] == 0

    def test_from_settings_should_configure_every_operation(self) -> None:
        # Arrange
        settings = GatewaySettings(
            rate_limit_window_seconds=30.0, embed_max_requests=7, embed_max_in_flight=3
        )

        # Act
        status = AIRateLimiter.from_settings(settings).status()

        # Assert
        assert set(status) == {EXTRACT_TEXT, EMBED, COMPLETE}
        assert status[EMBED]["max_requests"] == 7
        assert status[EMBED]["max_in_flight"] == 3
        assert status[EMBED]["window_seconds"] == 30.0
