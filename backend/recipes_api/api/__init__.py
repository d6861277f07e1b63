"""API blueprint package aggregating the HTTP endpoints."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Mount each ``(blueprint, relative_prefix)`` pair under ``base_prefix``.

    Either part may be empty; a blueprint with neither is mounted at the root
    (``url_prefix=None``) so its own rules, such as ``/signin``, stay as is.
    """

    for bp, rel_prefix in entries:
        segments = [s for s in (base_prefix.strip("/"), rel_prefix.strip("/")) if s]
        full_prefix = "/" + "/".join(segments) if segments else None
        app.register_blueprint(bp, url_prefix=full_prefix)


def init_app(app: Flask) -> None:
    """Register every blueprint on the Flask app."""

    from recipes_api.api.auth import bp as auth_bp
    from recipes_api.api.health import bp as health_bp
    from recipes_api.api.recipes import bp as recipes_bp
    from recipes_api.api.recipes import public_bp as recipes_public_bp
    from recipes_api.api.users import bp as users_bp

    # Each tuple: (blueprint, url_prefix_relative_to_base)
    registry: list[tuple[Blueprint, str]] = [
        (health_bp, ""),
        (auth_bp, ""),  # /signin, /signup, /refresh
        (recipes_public_bp, "/recipes"),  # GET /recipes
        (recipes_bp, "/recipes"),  # protected
        (users_bp, "/user"),  # protected
    ]
    base_prefix = app.config.get("API_BASE_PREFIX", "")
    register_blueprint_group(app, base_prefix=base_prefix, entries=registry)


__all__ = ["init_app", "register_blueprint_group"]
