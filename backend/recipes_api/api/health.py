"""Liveness probe reporting database and cache reachability."""

from __future__ import annotations

from flask import Blueprint, current_app
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from recipes_api.api.deps import json_response, timing
from recipes_api.core.extensions import db, get_redis

bp = Blueprint("health", __name__)


def _probe_db() -> str:
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        current_app.logger.exception("health.db_unreachable")
        return "fail"
    return "ok"


def _probe_cache() -> str:
    client = get_redis()
    if client is None:
        return "off"
    try:
        client.ping()
    except RedisError:
        current_app.logger.exception("health.cache_unreachable")
        return "fail"
    return "ok"


@bp.get("/health")
@timing
def healthcheck():
    """Always 200; the body says which backend is down."""
    return json_response(
        {
            "status": "ok",
            "db": _probe_db(),
            "cache": _probe_cache(),
            "version": current_app.config.get("APP_VERSION", "dev"),
        }
    )
