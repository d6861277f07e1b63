"""User model holding sign-in credentials."""

from __future__ import annotations

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from recipes_api.core.extensions import db

from .base import PKMixin, ReprMixin


class User(PKMixin, ReprMixin, db.Model):
    """
    Credential record owned by the credential store.

    Fields
    ------
    username : str
        Unique login name.
    password : str
        Hex SHA-256 digest of the raw password (never the password itself).
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), nullable=False)
    password: Mapped[str] = mapped_column(String(64), nullable=False)

    __table_args__ = (UniqueConstraint("username", name="uq_users_username"),)
