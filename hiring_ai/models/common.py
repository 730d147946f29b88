"""
Shared API schemas.

Dependencies: pydantic
System role: Health, statistics, and error response contracts
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


class ErrorDetail(BaseModel):
    """Structured domain error (HiringAIException.to_dict())."""

    type: str
    category: str = Field(description="configuration, transient, or invalid_input")
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Error body of every domain error response."""

    detail: ErrorDetail


class StatsResponse(BaseModel):
    """Processing and search statistics."""

    processing: dict[str, Any]
    search: dict[str, Any]
