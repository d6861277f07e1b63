"""Unit tests for RedisRecipeCache using fakeredis."""

from __future__ import annotations

import fakeredis
import pytest
from recipes_api.infra.redis.redis_recipe_cache import RedisRecipeCache


@pytest.fixture
def fake_redis():
    """Provide a fresh FakeRedis instance for each test."""
    r = fakeredis.FakeRedis()
    r.flushall()
    return r


@pytest.fixture
def cache(fake_redis):
    return RedisRecipeCache(fake_redis, key="recipes")


def test_get_listing_miss_returns_none(cache):
    assert cache.get_listing() is None


def test_set_then_get_listing(cache, fake_redis):
    cache.set_listing('[{"name": "Pizza"}]')

    assert cache.get_listing() == '[{"name": "Pizza"}]'
    # stored without expiry
    assert fake_redis.ttl("recipes") == -1


def test_clear_listing_removes_key(cache, fake_redis):
    cache.set_listing("[]")

    cache.clear_listing()

    assert fake_redis.exists("recipes") == 0
    assert cache.get_listing() is None


def test_clear_listing_on_missing_key_is_noop(cache):
    cache.clear_listing()
    assert cache.get_listing() is None
