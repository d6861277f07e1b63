# recipes_api/services/recipes/service.py
from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from recipes_api.models.base import new_object_id
from recipes_api.models.recipe import Recipe
from recipes_api.repositories.recipe import RecipeRepository
from recipes_api.schemas.recipe import RecipeSchema
from recipes_api.services._shared.base import BaseService, ServiceContext
from recipes_api.services._shared.errors import NotFoundError, StoreError
from recipes_api.services._shared.ports import RecipeCache

log = logging.getLogger(__name__)

_listing_schema = RecipeSchema(many=True)


class RecipeService(BaseService):
    """
    Recipe CRUD with a cache-aside listing.

    ``list_recipes`` serves the whole listing from the cache when present and
    fills it on a miss. Every successful write drops the cached listing.
    When ``cache`` is ``None`` the store is read on every call.
    """

    def __init__(
        self,
        *,
        session: Session | None = None,
        cache: RecipeCache | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.recipes = RecipeRepository(session)
        self.session = self.recipes.session
        self.cache = cache

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def list_recipes(self) -> list[dict[str, Any]]:
        """Return every recipe in its JSON shape, using the cache when possible."""
        if self.cache is not None:
            try:
                cached = self.cache.get_listing()
            except RedisError as exc:
                raise StoreError("Cache backend failure") from exc
            if cached is not None:
                log.debug("recipes.list", extra={"cache": "hit"})
                return list(json.loads(cached))

        log.debug("recipes.list", extra={"cache": "miss" if self.cache else "off"})
        try:
            listing = _listing_schema.dump(self.recipes.list_all())
        except SQLAlchemyError as exc:
            raise StoreError() from exc

        if self.cache is not None:
            try:
                self.cache.set_listing(json.dumps(listing))
            except RedisError:
                log.warning("recipes.cache.set_failed", exc_info=True)
        return listing

    def search(self, tag: str) -> Sequence[Recipe]:
        """Return recipes tagged with ``tag``; never cached."""
        try:
            return self.recipes.search_by_tag(tag)
        except SQLAlchemyError as exc:
            raise StoreError() from exc

    def get(self, recipe_id: str) -> Recipe:
        """
        Return one recipe.

        :raises NotFoundError: No recipe has ``recipe_id``.
        """
        try:
            recipe = self.recipes.get(recipe_id)
        except SQLAlchemyError as exc:
            raise StoreError() from exc
        if recipe is None:
            raise NotFoundError("Recipe", recipe_id, f"No match was found for ID {recipe_id}")
        return recipe

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    def create(self, data: Mapping[str, Any]) -> Recipe:
        """Persist a new recipe; id and publication time are assigned here."""
        recipe = Recipe(
            id=new_object_id(),
            name=data["name"],
            ingredients=list(data.get("ingredients", [])),
            instructions=list(data.get("instructions", [])),
            published_at=self.now_utc(),
        )
        recipe.tags = list(data.get("tags", []))
        self._commit(lambda: self.recipes.add(recipe))
        log.info("recipes.created", extra={"username": self.ctx.actor})
        return recipe

    def update(self, recipe_id: str, data: Mapping[str, Any]) -> Recipe:
        """
        Replace name, tags, ingredients and instructions of a recipe.

        :raises NotFoundError: No recipe has ``recipe_id``.
        """
        recipe = self.get(recipe_id)

        def _apply() -> None:
            recipe.name = data["name"]
            recipe.tags = list(data.get("tags", []))
            recipe.ingredients = list(data.get("ingredients", []))
            recipe.instructions = list(data.get("instructions", []))
            self.session.flush()

        self._commit(_apply)
        log.info("recipes.updated", extra={"username": self.ctx.actor})
        return recipe

    def delete(self, recipe_id: str) -> bool:
        """Delete a recipe. Returns ``False`` when nothing matched."""
        try:
            recipe = self.recipes.get(recipe_id)
        except SQLAlchemyError as exc:
            raise StoreError() from exc
        if recipe is None:
            return False
        self._commit(lambda: self.recipes.delete(recipe))
        log.info("recipes.deleted", extra={"username": self.ctx.actor})
        return True

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    def _commit(self, work: Callable[[], object]) -> None:
        """Run ``work`` and commit, then drop the cached listing."""
        try:
            work()
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError() from exc
        self._clear_cache()

    def _clear_cache(self) -> None:
        if self.cache is None:
            return
        log.debug("recipes.cache.clear")
        try:
            self.cache.clear_listing()
        except RedisError:
            # The write is committed; a stale listing is served until the next write
            log.error("recipes.cache.clear_failed", exc_info=True)
