"""Repository package exposing persistence helpers."""

from recipes_api.repositories.base import BaseRepository
from recipes_api.repositories.recipe import RecipeRepository
from recipes_api.repositories.user import UserRepository

__all__ = ["BaseRepository", "RecipeRepository", "UserRepository"]
