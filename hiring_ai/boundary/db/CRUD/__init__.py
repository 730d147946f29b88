"""CRUD operations for the profile store."""

from hiring_ai.boundary.db.CRUD.base_crud import BaseCRUD
from hiring_ai.boundary.db.CRUD.profile_crud import ProfileCRUD, profile_crud

__all__ = ["BaseCRUD", "ProfileCRUD", "profile_crud"]
