"""
Document store interface and implementations.

The pipeline writes derived profile fields (summary, skills, title) into
the candidate or job document and reads it back for metadata fallbacks.
Two implementations: an in-memory dict for development and tests, and a
SQLAlchemy-backed store over the profiles table.

Dependencies: sqlalchemy, hiring_ai.boundary.db.CRUD
System role: Profile document persistence
"""

import copy
import logging
from datetime import datetime, timezone
from typing import Any, Protocol, runtime_checkable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from hiring_ai.boundary.db.CRUD.profile_crud import profile_crud
from hiring_ai.core.exceptions import ProfileSaveError

logger = logging.getLogger(__name__)


@runtime_checkable
class DocumentStore(Protocol):
    """Profile document access used by the processing pipeline."""

    async def get_profile(self, entity_id: str) -> dict[str, Any] | None: ...

    async def update_profile(
        self,
        entity_id: str,
        fields: dict[str, Any],
        entity_type: str = "candidate",
    ) -> None: ...

    async def exists(self, entity_id: str) -> bool: ...


class InMemoryDocumentStore:
    """Dict-backed document store."""

    def __init__(self, profiles: dict[str, dict[str, Any]] | None = None) -> None:
        """
        Initialize store.

        Args:
            profiles: Optional seed documents keyed by entity ID
        """
        self._profiles: dict[str, dict[str, Any]] = copy.deepcopy(profiles or {})

    async def get_profile(self, entity_id: str) -> dict[str, Any] | None:
        profile = self._profiles.get(entity_id)
        return copy.deepcopy(profile) if profile is not None else None

    async def update_profile(
        self,
        entity_id: str,
        fields: dict[str, Any],
        entity_type: str = "candidate",
    ) -> None:
        """Merge fields into the document, creating it if missing."""
        current = self._profiles.get(entity_id, {"entity_type": entity_type})
        merged = {**current, **copy.deepcopy(fields)}
        merged["updated_at"] = datetime.now(timezone.utc).isoformat()
        self._profiles[entity_id] = merged

    async def exists(self, entity_id: str) -> bool:
        return entity_id in self._profiles


class SqlProfileStore:
    """
    SQLAlchemy-backed document store.

    Each operation runs in its own transaction. Database errors surface
    as ProfileSaveError (transient) so the job queue can retry.
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """
        Initialize store.

        Args:
            session_factory: Async session factory bound to the profile database
        """
        self._session_factory = session_factory

    async def get_profile(self, entity_id: str) -> dict[str, Any] | None:
        async with self._session_factory() as session:
            profile = await profile_crud.get_by_id(session, entity_id)
            if profile is None:
                return None
            return {"entity_type": profile.entity_type, **(profile.data or {})}

    async def update_profile(
        self,
        entity_id: str,
        fields: dict[str, Any],
        entity_type: str = "candidate",
    ) -> None:
        """
        Merge fields into the profile row in one transaction.

        Raises:
            ProfileSaveError: On any database failure
        """
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await profile_crud.merge_fields(session, entity_id, fields, entity_type)
        except SQLAlchemyError as e:
            logger.error(
                f"{__name__}:update_profile - Database write failed",
                extra={"entity_id": entity_id, "error": str(e)},
            )
            raise ProfileSaveError(
                f"Failed to save profile: {e}",
                entity_id=entity_id,
            ) from e

    async def exists(self, entity_id: str) -> bool:
        return await self.get_profile(entity_id) is not None
