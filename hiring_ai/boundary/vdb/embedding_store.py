"""
Embedding store interface and in-memory implementation.

Persists one embedding per (entity_id, entity_type) with lightweight
metadata for filtering. The in-memory store can checkpoint to a JSON
snapshot so embeddings survive restarts.

Dependencies: pydantic, hiring_ai.boundary.vdb.vector_schemas
System role: Embedding persistence for the pipeline and search engine
"""

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Protocol, runtime_checkable

from hiring_ai.boundary.vdb.vector_schemas import EmbeddingRecord, EntityType
from hiring_ai.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)

RecordPredicate = Callable[[EmbeddingRecord], bool]


@runtime_checkable
class EmbeddingStore(Protocol):
    """Embedding persistence used by the pipeline (write) and search (read)."""

    async def upsert(self, record: EmbeddingRecord) -> None: ...

    async def get(self, entity_id: str, entity_type: EntityType) -> EmbeddingRecord | None: ...

    async def delete(self, entity_id: str, entity_type: EntityType) -> bool: ...

    async def list_records(
        self,
        entity_type: EntityType | None = None,
        predicate: RecordPredicate | None = None,
    ) -> list[EmbeddingRecord]: ...

    async def count(self, entity_type: EntityType | None = None) -> int: ...


class InMemoryEmbeddingStore:
    """
    Dict-backed embedding store.

    Each upsert swaps in a fresh copy under its key in one step, so a reader
    on the same event loop sees either the old record or the new one,
    never a mix. Records are copied on read so callers cannot mutate
    stored vectors.
    """

    def __init__(
        self,
        dimension: int | None = None,
        snapshot_path: str | None = None,
    ) -> None:
        """
        Initialize store.

        Args:
            dimension: Expected vector length (None disables the check)
            snapshot_path: Optional JSON file for save_snapshot/load_snapshot
        """
        self._dimension = dimension
        self._snapshot_path = Path(snapshot_path) if snapshot_path else None
        self._records: dict[tuple[str, str], EmbeddingRecord] = {}

    async def upsert(self, record: EmbeddingRecord) -> None:
        """
        Write or replace the record for its key.

        Raises:
            VectorStoreError: When the vector has the wrong dimension
        """
        if self._dimension is not None and len(record.vector) != self._dimension:
            raise VectorStoreError(
                f"Expected {self._dimension}-dim vector, got {len(record.vector)}",
                operation="upsert",
                details={"entity_id": record.entity_id},
            )
        self._records[record.key] = record.model_copy(deep=True)

    async def get(self, entity_id: str, entity_type: EntityType) -> EmbeddingRecord | None:
        record = self._records.get((entity_type.value, entity_id))
        return record.model_copy(deep=True) if record else None

    async def delete(self, entity_id: str, entity_type: EntityType) -> bool:
        return self._records.pop((entity_type.value, entity_id), None) is not None

    async def list_records(
        self,
        entity_type: EntityType | None = None,
        predicate: RecordPredicate | None = None,
    ) -> list[EmbeddingRecord]:
        """
        Snapshot of records matching the type and predicate.

        Args:
            entity_type: Restrict to one entity type (None for all)
            predicate: Metadata pre-filter applied before copying

        Returns:
            list[EmbeddingRecord]: Copies of matching records
        """
        records = list(self._records.values())
        return [
            record.model_copy(deep=True)
            for record in records
            if (entity_type is None or record.entity_type == entity_type)
            and (predicate is None or predicate(record))
        ]

    async def count(self, entity_type: EntityType | None = None) -> int:
        if entity_type is None:
            return len(self._records)
        return sum(1 for record in self._records.values() if record.entity_type == entity_type)

    def save_snapshot(self) -> int:
        """
        Write all records to the snapshot file.

        Returns:
            int: Number of records written (0 when no snapshot path is set)
        """
        if self._snapshot_path is None:
            return 0

        self._snapshot_path.parent.mkdir(parents=True, exist_ok=True)
        data = [record.model_dump(mode="json") for record in self._records.values()]
        tmp_path = self._snapshot_path.with_suffix(".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f)
        tmp_path.replace(self._snapshot_path)

        logger.info(
            f"{__name__}:save_snapshot - Saved embeddings",
            extra={"record_count": len(data), "path": str(self._snapshot_path)},
        )
        return len(data)

    def load_snapshot(self) -> int:
        """
        Load records from the snapshot file, replacing matching keys.

        Returns:
            int: Number of records loaded (0 when the file does not exist)
        """
        if self._snapshot_path is None or not self._snapshot_path.exists():
            return 0

        with open(self._snapshot_path, encoding="utf-8") as f:
            data = json.load(f)

        loaded = 0
        for item in data:
            record = EmbeddingRecord.model_validate(item)
            if self._dimension is not None and len(record.vector) != self._dimension:
                logger.warning(
                    f"{__name__}:load_snapshot - Skipping record with wrong dimension",
                    extra={"entity_id": record.entity_id, "dimension": len(record.vector)},
                )
                continue
            self._records[record.key] = record
            loaded += 1

        logger.info(
            f"{__name__}:load_snapshot - Loaded embeddings",
            extra={"record_count": loaded, "path": str(self._snapshot_path)},
        )
        return loaded
