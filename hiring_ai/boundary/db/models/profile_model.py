"""
Profile ORM model.

Stores candidate and job profile documents as JSON keyed by the
external entity ID. The pipeline merges derived fields (summary, skills,
title) into the document without a fixed schema.

Dependencies: sqlalchemy, hiring_ai.boundary.db.base
System role: Document store persistence for profile fields
"""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from hiring_ai.boundary.db.base import Base, TimestampMixin


class ProfileModel(Base, TimestampMixin):
    """
    Profile document row.

    Attributes:
        id: External entity ID (candidate or job ID), primary key
        entity_type: "candidate" or "job"
        data: JSON document with profile fields
        created_at: Row creation timestamp (UTC)
        updated_at: Last merge timestamp (UTC)
    """

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)

    entity_type: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default="candidate",
        index=True,
    )

    data: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        doc="Profile fields (schema-less)",
    )
