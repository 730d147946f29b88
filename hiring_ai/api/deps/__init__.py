"""API dependencies."""

from .dependencies import get_container, get_orchestrator, to_http_exception

__all__ = ["get_container", "get_orchestrator", "to_http_exception"]
