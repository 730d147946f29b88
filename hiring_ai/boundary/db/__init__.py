"""
Database boundary module.

Profile document stores and SQLAlchemy plumbing.
"""

from hiring_ai.boundary.db.base import Base, TimestampMixin
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

__all__ = [
    "Base",
    "TimestampMixin",
    "create_tables",
    "get_async_engine",
    "get_async_session_factory",
    "DocumentStore",
    "InMemoryDocumentStore",
    "SqlProfileStore",
]
