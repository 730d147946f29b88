"""
Embedding store boundary.

Exports: EmbeddingStore, InMemoryEmbeddingStore, EmbeddingRecord, EmbeddingMetadata, EntityType
"""

from hiring_ai.boundary.vdb.embedding_store import EmbeddingStore, InMemoryEmbeddingStore
from hiring_ai.boundary.vdb.vector_schemas import EmbeddingMetadata, EmbeddingRecord, EntityType

__all__ = [
    "EmbeddingStore",
    "InMemoryEmbeddingStore",
    "EmbeddingRecord",
    "EmbeddingMetadata",
    "EntityType",
]
