"""Shared API helpers: responses, timing and service wiring."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request

from recipes_api.api.gate import AuthorizationGate, service_context
from recipes_api.core.extensions import db, get_auth_settings, get_redis
from recipes_api.infra.jwt.flask_jwt_token_codec import JWTTokenCodec
from recipes_api.infra.redis.redis_recipe_cache import RedisRecipeCache
from recipes_api.infra.sqlalchemy.credential_store import SQLAlchemyCredentialStore
from recipes_api.services.auth.service import AuthService
from recipes_api.services.recipes.service import RecipeService

F = TypeVar("F", bound=Callable[..., Any])

token_codec = JWTTokenCodec()
gate = AuthorizationGate(token_codec)


def auth_service() -> AuthService:
    """Build an :class:`AuthService` bound to the request session."""
    return AuthService(
        store=SQLAlchemyCredentialStore(db.session),
        codec=token_codec,
        settings=get_auth_settings(),
        ctx=service_context(),
    )


def recipe_service() -> RecipeService:
    """Build a :class:`RecipeService`; the cache is skipped when Redis is off."""
    client = get_redis()
    cache = None
    if client is not None:
        key = current_app.config.get("RECIPES_CACHE_KEY", "recipes")
        cache = RedisRecipeCache(client, key=key)
    return RecipeService(session=db.session, cache=cache, ctx=service_context())


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
