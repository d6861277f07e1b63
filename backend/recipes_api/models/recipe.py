"""Recipe model and its tag rows."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipes_api.core.extensions import db

from .base import ObjectIdMixin, PKMixin, ReprMixin


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Recipe(ObjectIdMixin, ReprMixin, db.Model):
    """
    A published recipe.

    ``ingredients`` and ``instructions`` are ordered lists stored as JSON.
    Tags live in :class:`RecipeTag` rows so they can be searched with SQL.
    """

    __tablename__ = "recipes"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    ingredients: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    instructions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    published_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    tag_rows: Mapped[list[RecipeTag]] = relationship(
        back_populates="recipe",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="RecipeTag.position",
    )

    @property
    def tags(self) -> list[str]:
        return [row.tag for row in self.tag_rows]

    @tags.setter
    def tags(self, values: list[str]) -> None:
        self.tag_rows = [RecipeTag(tag=value, position=i) for i, value in enumerate(values)]


class RecipeTag(PKMixin, db.Model):
    """One tag of a recipe; ``position`` keeps the client-supplied order."""

    __tablename__ = "recipe_tags"

    recipe_id: Mapped[str] = mapped_column(
        ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    tag: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    recipe: Mapped[Recipe] = relationship(back_populates="tag_rows")
