"""ORM models for the profile store."""

from hiring_ai.boundary.db.models.profile_model import ProfileModel

__all__ = ["ProfileModel"]
