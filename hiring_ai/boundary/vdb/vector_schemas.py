"""
Vector database schemas.

Pydantic models for stored embeddings and their filterable metadata.

Dependencies: pydantic
System role: Type definitions for embedding store operations
"""

import enum
from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator


class EntityType(str, enum.Enum):
    """Kinds of entities that carry embeddings."""

    CANDIDATE = "candidate"
    JOB = "job"


class EmbeddingMetadata(BaseModel):
    """
    Filterable fields denormalized onto each embedding.

    Copied from the profile at write time so search can filter
    without reading the document store.
    """

    skills: list[str] = Field(default_factory=list, description="Skill names")
    location: str | None = Field(default=None, description="City/region or 'Remote'")
    experience: str | None = Field(default=None, description="Experience level label")
    availability: str | None = Field(default=None, description="Free-text availability")
    title: str | None = Field(default=None, description="Current title or job title")

    @field_validator("skills")
    @classmethod
    def _dedupe_skills(cls, skills: list[str]) -> list[str]:
        seen: set[str] = set()
        cleaned = []
        for skill in skills:
            name = skill.strip()
            if name and name.lower() not in seen:
                seen.add(name.lower())
                cleaned.append(name)
        return cleaned


class EmbeddingRecord(BaseModel):
    """
    Current embedding for one (entity_id, entity_type) pair.

    At most one record exists per key; writes replace the previous one.
    """

    entity_id: str = Field(min_length=1, description="Candidate or job ID in the document store")
    entity_type: EntityType = Field(default=EntityType.CANDIDATE)
    vector: list[float] = Field(min_length=1, description="Fixed-dimension embedding")
    metadata: EmbeddingMetadata = Field(default_factory=EmbeddingMetadata)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def key(self) -> tuple[str, str]:
        """Store key for replace-by-key writes."""
        return (self.entity_type.value, self.entity_id)
