"""
Profile CRUD operations.

Extends BaseCRUD with merge-upsert of profile documents.

Dependencies: sqlalchemy, hiring_ai.boundary.db.models
System role: Profile persistence operations
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from hiring_ai.boundary.db.CRUD.base_crud import BaseCRUD
from hiring_ai.boundary.db.models.profile_model import ProfileModel


class ProfileCRUD(BaseCRUD[ProfileModel]):
    """CRUD operations for ProfileModel."""

    def __init__(self) -> None:
        """Initialize ProfileCRUD with ProfileModel."""
        super().__init__(ProfileModel)

    async def merge_fields(
        self,
        session: AsyncSession,
        entity_id: str,
        fields: dict[str, Any],
        entity_type: str = "candidate",
    ) -> ProfileModel:
        """
        Merge fields into a profile document, creating it if missing.

        Keys present in fields overwrite stored keys; other stored keys
        are kept. Re-running with the same fields is a no-op in effect.

        Args:
            session: Async database session
            entity_id: External entity ID
            fields: Profile fields to write
            entity_type: "candidate" or "job"

        Returns:
            ProfileModel: The created or updated row
        """
        profile = await self.get_by_id(session, entity_id)
        if profile is None:
            return await self.create(
                session,
                id=entity_id,
                entity_type=entity_type,
                data=dict(fields),
            )

        # Assign a new dict so the JSON column change is detected
        profile.data = {**(profile.data or {}), **fields}
        await session.flush()
        return profile


profile_crud = ProfileCRUD()
