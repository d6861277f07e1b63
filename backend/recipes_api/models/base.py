"""Reusable SQLAlchemy mixins shared by domain models (typed 2.0)."""

from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column


def new_object_id() -> str:
    """Return a fresh 32-character hexadecimal identifier."""
    return uuid4().hex


class PKMixin:
    """Expose an integer surrogate primary key column named ``id``."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True)


class ObjectIdMixin:
    """Expose an opaque string primary key generated on the application side.

    Attributes
    ----------
    id:
        32-character hex string; clients treat it as an opaque handle.
    """

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_object_id)


class ReprMixin:
    """Provide a concise ``__repr__`` including the class name and id."""

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        key = getattr(self, "id", None)
        return f"<{cls} id={key}>"
