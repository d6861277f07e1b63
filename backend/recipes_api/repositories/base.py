"""Generic repository base for SQLAlchemy 2.x.

Repositories stay persistence-only: they build queries, add and delete rows
and flush, but never commit or roll back. Callers own the transaction.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from recipes_api.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


class BaseRepository(Generic[E]):
    """Thin CRUD helpers shared by concrete repositories.

    :param session: Session to use; defaults to the Flask-SQLAlchemy scoped session.
    :type session: sqlalchemy.orm.Session | None
    """

    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        self.session: Session = session if session is not None else db.session

    def _select(self) -> Select[Any]:
        return select(self.model)

    def get(self, ident: Any) -> E | None:
        """Return the entity with primary key ``ident`` or ``None``."""
        return cast(E | None, self.session.get(self.model, ident))

    def first(self, stmt: Select[Any]) -> E | None:
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def all(self, stmt: Select[Any]) -> Sequence[E]:
        return cast(Sequence[E], self.session.execute(stmt).scalars().all())

    def add(self, entity: E) -> E:
        """Stage ``entity`` and flush so database defaults are populated."""
        self.session.add(entity)
        self.session.flush()
        return entity

    def delete(self, entity: E) -> None:
        self.session.delete(entity)
        self.session.flush()
