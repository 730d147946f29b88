"""
Profile persistence task.

Writes derived profile fields into the document store and reads stored
profiles back for metadata fallbacks.

Dependencies: hiring_ai.boundary.db
System role: Mandatory persistence stage of the resume processing pipeline
"""

import logging
from typing import Any

from hiring_ai.boundary.db.document_store import DocumentStore
from hiring_ai.core.exceptions import HiringAIException, ProfileSaveError

logger = logging.getLogger(__name__)


class ProfileTask:
    """Read and merge-write profile documents."""

    def __init__(self, document_store: DocumentStore) -> None:
        self._document_store = document_store

    async def read(self, entity_id: str) -> dict[str, Any]:
        """
        Read a stored profile without failing the caller.

        Returns:
            dict: Stored profile, or an empty dict when missing or unreadable
        """
        try:
            return await self._document_store.get_profile(entity_id) or {}
        except Exception as e:
            logger.warning(
                f"{__name__}:read - Stored profile unavailable",
                extra={"entity_id": entity_id, "error": str(e)},
            )
            return {}

    async def save(
        self,
        entity_id: str,
        fields: dict[str, Any],
        entity_type: str = "candidate",
    ) -> None:
        """
        Merge fields into the profile document.

        Raises:
            ProfileSaveError: When the write fails (category inherited from the cause)
        """
        try:
            await self._document_store.update_profile(entity_id, fields, entity_type)
        except ProfileSaveError:
            raise
        except HiringAIException as e:
            raise ProfileSaveError(
                f"Failed to save profile: {e.message}",
                entity_id=entity_id,
                category=e.category,
            ) from e
        except Exception as e:
            raise ProfileSaveError(f"Failed to save profile: {e}", entity_id=entity_id) from e
