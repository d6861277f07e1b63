"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

from recipes_api.core.config import AuthSettings

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
jwt = JWTManager()

AUTH_SETTINGS_KEY = "auth_settings"
REDIS_CLIENT_KEY = "redis_client"


def init_app(app: Flask) -> None:
    """Validate auth settings and bind SQLAlchemy, JWT and Redis.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances.

    Raises
    ------
    recipes_api.core.config.ConfigError
        When the signing secret is absent. Nothing else is initialized in
        that case.
    RuntimeError
        When ``REDIS_URL`` is configured but the server does not answer.
    """
    settings = AuthSettings.from_mapping(app.config)
    app.extensions[AUTH_SETTINGS_KEY] = settings
    # flask-jwt-extended reads these keys from the app config
    app.config["JWT_SECRET_KEY"] = settings.secret
    app.config["JWT_ALGORITHM"] = settings.algorithm

    db.init_app(app)

    # Ensure models are imported so metadata is complete before create_all
    from recipes_api import models as _models  # noqa: F401

    jwt.init_app(app)

    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        app.extensions.pop(REDIS_CLIENT_KEY, None)
        app.logger.info("redis.disabled")
        return

    client = redis.Redis.from_url(redis_url)
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
    app.extensions[REDIS_CLIENT_KEY] = client
    app.logger.info("redis.connected")


def get_auth_settings() -> AuthSettings:
    """Return the settings validated by :func:`init_app`."""
    settings = current_app.extensions.get(AUTH_SETTINGS_KEY)
    if settings is None:
        raise RuntimeError("Auth settings are not initialized. Call init_app() first.")
    return settings


def get_redis() -> redis.Redis | None:
    """Return the Redis client, or ``None`` when caching is disabled."""
    return current_app.extensions.get(REDIS_CLIENT_KEY)
