"""
Exception hierarchy for the hiring AI processing core.

Provides layered exception structure for domain-specific errors.
Every exception carries an ErrorCategory so the job queue and the HTTP
layer can decide between failing fast and retrying.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

import enum
from typing import Any


class ErrorCategory(str, enum.Enum):
    """
    Error taxonomy shared by the gateway, pipeline, and queue.

    CONFIGURATION: Missing credentials or settings; fatal, never retried
    TRANSIENT: Network, timeout, or store hiccup; retried up to the attempt limit
    INVALID_INPUT: Malformed payload or unreadable document; fatal, never retried
    """

    CONFIGURATION = "configuration"
    TRANSIENT = "transient"
    INVALID_INPUT = "invalid_input"


class HiringAIException(Exception):
    """Base exception for all hiring AI errors."""

    category: ErrorCategory = ErrorCategory.TRANSIENT

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    @property
    def retryable(self) -> bool:
        """Whether the job queue may retry the failed operation."""
        return self.category == ErrorCategory.TRANSIENT

    def to_dict(self) -> dict[str, Any]:
        """Structured error payload for job records and HTTP responses."""
        return {
            "type": type(self).__name__,
            "category": self.category.value,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(HiringAIException):
    """Raised when required configuration or credentials are missing."""

    category = ErrorCategory.CONFIGURATION


class InvalidInputError(HiringAIException):
    """Raised when a payload or document cannot be processed as given."""

    category = ErrorCategory.INVALID_INPUT


class ValidationError(InvalidInputError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class TransientGatewayError(HiringAIException):
    """Raised when the hosted AI service fails in a retryable way."""

    category = ErrorCategory.TRANSIENT

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize gateway error.

        Args:
            message: Error message
            operation: Gateway operation that failed (extract_text, embed, complete)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class GatewayTimeoutError(TransientGatewayError):
    """Raised when a gateway call exceeds its explicit timeout."""

    def __init__(self, operation: str, timeout_seconds: float) -> None:
        """
        Initialize timeout error.

        Args:
            operation: Gateway operation that timed out
            timeout_seconds: Timeout that was exceeded
        """
        super().__init__(
            f"{operation} timed out after {timeout_seconds:.1f}s",
            operation=operation,
            details={"timeout_seconds": timeout_seconds},
        )


class PipelineError(HiringAIException):
    """Base exception for processing pipeline step failures."""

    def __init__(
        self,
        message: str,
        entity_id: str | None = None,
        category: ErrorCategory | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize pipeline error.

        Args:
            message: Error message
            entity_id: Candidate or job ID being processed
            category: Overrides the class category (inherited from the cause)
            details: Additional context
        """
        details = details or {}
        if entity_id:
            details["entity_id"] = entity_id
        if category is not None:
            self.category = category
        super().__init__(message, details)


class TextExtractionError(PipelineError):
    """Raised when the mandatory text extraction step fails."""


class SummaryGenerationError(PipelineError):
    """Raised when summary or skill generation fails."""


class EmbeddingError(PipelineError):
    """Raised when embedding generation fails."""


class ProfileSaveError(PipelineError):
    """Raised when derived profile fields cannot be written."""


class VectorStoreError(HiringAIException):
    """Raised when embedding store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, get, delete, list)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class QueueCapacityError(HiringAIException):
    """Raised when submit is rejected because the queue is full."""

    def __init__(self, capacity: int) -> None:
        super().__init__(
            f"Job queue is at capacity ({capacity} queued jobs)",
            {"capacity": capacity},
        )


class JobNotFoundError(HiringAIException):
    """Raised when a job ID is unknown or already purged."""

    category = ErrorCategory.INVALID_INPUT

    def __init__(self, job_id: str) -> None:
        super().__init__(f"Job not found: {job_id}", {"job_id": job_id})


class JobStateError(HiringAIException):
    """Raised when an operation is not allowed in the job's current state."""

    category = ErrorCategory.INVALID_INPUT

    def __init__(self, job_id: str, status: str, operation: str) -> None:
        super().__init__(
            f"Cannot {operation} job {job_id} in status {status}",
            {"job_id": job_id, "status": status, "operation": operation},
        )


class JobFailedError(HiringAIException):
    """Raised by an awaited job handle when the job ends in failure."""

    def __init__(self, job_id: str, error: dict[str, Any] | None) -> None:
        error = error or {}
        super().__init__(
            f"Job {job_id} failed: {error.get('message', 'unknown error')}",
            {"job_id": job_id, "error": error},
        )
        if error.get("category") in ErrorCategory._value2member_map_:
            self.category = ErrorCategory(error["category"])


class SearchError(HiringAIException):
    """Raised when a search cannot be executed."""

    category = ErrorCategory.INVALID_INPUT


class EntityNotFoundError(SearchError):
    """Raised when a referenced entity has no stored embedding."""

    def __init__(self, entity_id: str, entity_type: str) -> None:
        super().__init__(
            f"No embedding stored for {entity_type} {entity_id}",
            {"entity_id": entity_id, "entity_type": entity_type},
        )
