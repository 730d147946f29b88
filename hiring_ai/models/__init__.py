"""HTTP request/response schemas."""

from hiring_ai.models.common import ErrorDetail, ErrorResponse, HealthResponse, StatsResponse
from hiring_ai.models.job import SubmitJobRequest, SubmitJobResponse
from hiring_ai.models.search import (
    BatchSearchRequest,
    BatchSearchResponse,
    SimilarSearchRequest,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "StatsResponse",
    "SubmitJobRequest",
    "SubmitJobResponse",
    "BatchSearchRequest",
    "BatchSearchResponse",
    "SimilarSearchRequest",
]
