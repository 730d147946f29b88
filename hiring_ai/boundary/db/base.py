"""
Declarative base for the profile store tables.

The profile store keeps one schema-less JSON document per candidate or
job. Constraint and index names are fixed by a naming convention so the
profiles table looks the same on SQLite (tests) and Postgres.

Dependencies: sqlalchemy
System role: ORM foundation for SqlProfileStore
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "pk": "pk_%(table_name)s",
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Registry for profile store tables; create_tables builds everything in its metadata."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class TimestampMixin:
    """
    Write timestamps for profile documents.

    Attributes:
        created_at: First time any field was stored for the entity
        updated_at: Last field merge (pipeline run, interview analysis, job indexing)
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )
