"""
Vector search.

Exports: VectorSearchEngine and search models
"""

from .engine import VectorSearchEngine
from .models import (
    BatchSearchItem,
    SearchFilters,
    SearchHit,
    SearchOptions,
    SearchQuery,
    SearchResult,
    VectorQuery,
)

__all__ = [
    "VectorSearchEngine",
    "BatchSearchItem",
    "SearchFilters",
    "SearchHit",
    "SearchOptions",
    "SearchQuery",
    "SearchResult",
    "VectorQuery",
]
