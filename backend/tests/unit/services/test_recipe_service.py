"""Unit tests for RecipeService and its cache-aside listing."""

from __future__ import annotations

import json
import logging

import pytest
from recipes_api.infra.redis.redis_recipe_cache import RedisRecipeCache
from recipes_api.services._shared.base import ServiceContext
from recipes_api.services._shared.errors import NotFoundError, StoreError
from recipes_api.services.recipes.service import RecipeService
from redis.exceptions import ConnectionError as RedisConnectionError

from tests.factories.recipe import RecipeFactory


@pytest.fixture()
def cache(redis_client) -> RedisRecipeCache:
    return RedisRecipeCache(redis_client, key="recipes")


@pytest.fixture()
def service(session, cache) -> RecipeService:
    return RecipeService(session=session, cache=cache)


class BrokenCache:
    """Cache double whose backend is unreachable."""

    def get_listing(self):
        raise RedisConnectionError("redis down")

    def set_listing(self, payload):
        raise RedisConnectionError("redis down")

    def clear_listing(self):
        raise RedisConnectionError("redis down")


def _payload(**overrides):
    data = {
        "name": "Pizza",
        "tags": ["italian", "dinner"],
        "ingredients": ["dough", "tomato"],
        "instructions": ["bake"],
    }
    data.update(overrides)
    return data


# -------------------------------------------------------------------- reads


def test_list_miss_fills_cache(service, cache):
    RecipeFactory(name="Soup")

    listing = service.list_recipes()

    assert [r["name"] for r in listing] == ["Soup"]
    assert json.loads(cache.get_listing()) == listing


def test_list_hit_is_served_from_cache(service, cache):
    cache.set_listing(json.dumps([{"name": "Cached"}]))
    RecipeFactory(name="Fresh")

    assert service.list_recipes() == [{"name": "Cached"}]


def test_list_without_cache_reads_store(session):
    RecipeFactory(name="Soup")

    listing = RecipeService(session=session, cache=None).list_recipes()

    assert [r["name"] for r in listing] == ["Soup"]


def test_list_cache_read_failure_is_store_error(session):
    with pytest.raises(StoreError):
        RecipeService(session=session, cache=BrokenCache()).list_recipes()


def test_search_matches_tag_exactly(service):
    RecipeFactory(name="Pasta", tags=["italian"])
    RecipeFactory(name="Tacos", tags=["mexican"])

    assert [r.name for r in service.search("italian")] == ["Pasta"]
    assert list(service.search("ital")) == []


def test_get_unknown_recipe_raises_not_found(service):
    with pytest.raises(NotFoundError) as excinfo:
        service.get("missing")
    assert str(excinfo.value) == "No match was found for ID missing"


# ------------------------------------------------------------------- writes


def test_create_assigns_id_and_time_and_clears_cache(service, cache):
    cache.set_listing("[]")

    recipe = service.create(_payload())

    assert len(recipe.id) == 32
    assert recipe.published_at is not None
    assert recipe.tags == ["italian", "dinner"]
    assert cache.get_listing() is None
    assert service.get(recipe.id).name == "Pizza"


def test_update_replaces_fields_and_clears_cache(service, cache):
    recipe = RecipeFactory(tags=["old"])
    cache.set_listing("[]")

    service.update(recipe.id, _payload(name="Calzone", tags=["new"]))

    updated = service.get(recipe.id)
    assert updated.name == "Calzone"
    assert updated.tags == ["new"]
    assert updated.ingredients == ["dough", "tomato"]
    assert cache.get_listing() is None


def test_update_unknown_recipe_raises_not_found(service, cache):
    cache.set_listing("[]")

    with pytest.raises(NotFoundError):
        service.update("missing", _payload())
    assert cache.get_listing() == "[]"


def test_delete_removes_recipe_and_clears_cache(service, cache):
    recipe = RecipeFactory()
    cache.set_listing("[]")

    assert service.delete(recipe.id) is True
    assert cache.get_listing() is None
    with pytest.raises(NotFoundError):
        service.get(recipe.id)


def test_delete_unknown_recipe_keeps_cache(service, cache):
    cache.set_listing("[]")

    assert service.delete("missing") is False
    assert cache.get_listing() == "[]"


def test_write_survives_cache_clear_failure(session):
    service = RecipeService(session=session, cache=BrokenCache())

    recipe = service.create(_payload())

    assert RecipeService(session=session).get(recipe.id).name == "Pizza"


def test_writes_are_logged_with_the_acting_user(session, caplog):
    service = RecipeService(session=session, ctx=ServiceContext(actor="alice"))

    with caplog.at_level(logging.INFO, logger="recipes_api.services.recipes.service"):
        service.create(_payload())

    assert any(getattr(r, "username", None) == "alice" for r in caplog.records)
