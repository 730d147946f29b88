"""
Embedding store write task.

Replaces the current EmbeddingRecord for an entity.

Dependencies: hiring_ai.boundary.vdb
System role: Final stage of the resume processing pipeline
"""

from hiring_ai.boundary.vdb.embedding_store import EmbeddingStore
from hiring_ai.boundary.vdb.vector_schemas import EmbeddingRecord
from hiring_ai.core.exceptions import VectorStoreError


class VectorStoreTask:
    """Write embedding records."""

    def __init__(self, embedding_store: EmbeddingStore) -> None:
        self._embedding_store = embedding_store

    async def save(self, record: EmbeddingRecord) -> None:
        """
        Upsert the record by (entity_id, entity_type).

        Raises:
            VectorStoreError: When the store rejects or fails the write
        """
        try:
            await self._embedding_store.upsert(record)
        except VectorStoreError:
            raise
        except Exception as e:
            raise VectorStoreError(
                f"Failed to save embedding: {e}",
                operation="upsert",
                details={"entity_id": record.entity_id},
            ) from e
