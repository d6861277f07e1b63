"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import CredentialsSchema, TokenResponseSchema, UserSchema
from .recipe import MessageSchema, RecipeSchema

__all__ = [
    "CredentialsSchema",
    "TokenResponseSchema",
    "UserSchema",
    "MessageSchema",
    "RecipeSchema",
]
