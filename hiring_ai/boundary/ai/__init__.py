"""
AI boundary module.

Gateway protocol, the Gemini-backed implementation, and the rate limiter
placed in front of it.
"""

from hiring_ai.boundary.ai.gateway import (
    RETRIEVAL_DOCUMENT,
    RETRIEVAL_QUERY,
    AIGateway,
)
from hiring_ai.boundary.ai.gemini_gateway import GeminiGateway
from hiring_ai.boundary.ai.rate_limiter import AIRateLimiter, OperationLimit, RateLimitedGateway

__all__ = [
    "AIGateway",
    "AIRateLimiter",
    "GeminiGateway",
    "OperationLimit",
    "RateLimitedGateway",
    "RETRIEVAL_DOCUMENT",
    "RETRIEVAL_QUERY",
]
