"""Recipe repository: listing, tag search and single-row access."""

from __future__ import annotations

from collections.abc import Sequence

from recipes_api.models.recipe import Recipe, RecipeTag
from recipes_api.repositories.base import BaseRepository


class RecipeRepository(BaseRepository[Recipe]):
    """Persistence-only repository for :class:`Recipe`."""

    model = Recipe

    def list_all(self) -> Sequence[Recipe]:
        """Return every recipe, oldest first."""
        return self.all(self._select().order_by(Recipe.published_at, Recipe.id))

    def search_by_tag(self, tag: str) -> Sequence[Recipe]:
        """Return recipes carrying ``tag`` (exact match)."""
        stmt = (
            self._select()
            .where(Recipe.tag_rows.any(RecipeTag.tag == tag))
            .order_by(Recipe.published_at, Recipe.id)
        )
        return self.all(stmt)
