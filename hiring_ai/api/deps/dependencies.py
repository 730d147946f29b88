"""
Dependency functions.

Routes obtain collaborators from the container stored on app.state by
create_app; there are no module-level singletons.

Dependencies: fastapi, hiring_ai.container
System role: DI seam between routers and the composition root
"""

from fastapi import HTTPException, Request

from hiring_ai.container import Container
from hiring_ai.core.exceptions import (
    EntityNotFoundError,
    ErrorCategory,
    HiringAIException,
    JobNotFoundError,
    JobStateError,
    QueueCapacityError,
)
from hiring_ai.core.orchestrator import Orchestrator

RETRY_AFTER_SECONDS = "5"

_CATEGORY_STATUS = {
    ErrorCategory.INVALID_INPUT: 422,
    ErrorCategory.CONFIGURATION: 500,
    ErrorCategory.TRANSIENT: 502,
}


def get_container(request: Request) -> Container:
    """Container created by create_app."""
    return request.app.state.container


def get_orchestrator(request: Request) -> Orchestrator:
    """Orchestrator from the application container."""
    return get_container(request).orchestrator


def to_http_exception(error: HiringAIException) -> HTTPException:
    """
    Map a domain error onto an HTTP error.

    Not found -> 404, job state conflict -> 409, queue full -> 503 with
    Retry-After, otherwise by category (invalid input 422, configuration
    500, transient 502).
    """
    headers = None
    if isinstance(error, (JobNotFoundError, EntityNotFoundError)):
        status_code = 404
    elif isinstance(error, JobStateError):
        status_code = 409
    elif isinstance(error, QueueCapacityError):
        status_code = 503
        headers = {"Retry-After": RETRY_AFTER_SECONDS}
    else:
        status_code = _CATEGORY_STATUS[error.category]
    return HTTPException(status_code=status_code, detail=error.to_dict(), headers=headers)
