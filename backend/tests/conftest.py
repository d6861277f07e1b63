"""Pytest fixtures for the recipes API.

Every test gets a fresh application bound to its own in-memory SQLite
database and a FakeRedis instance standing in for the recipe cache.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import fakeredis
import pytest
from flask import Flask
from recipes_api.core.config import TestingConfig
from recipes_api.core.extensions import REDIS_CLIENT_KEY, db as _db, get_auth_settings
from recipes_api.factory import create_app
from recipes_api.infra.jwt.flask_jwt_token_codec import JWTTokenCodec

from tests.helpers.auth import TEST_SECRET


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - Pins the signing secret so tokens can be forged in tests.
    - Leaves ``REDIS_URL`` unset; FakeRedis is injected by the fixture.
    """

    JWT_SECRET_KEY = TEST_SECRET
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    REDIS_URL = None
    LOG_LEVEL = "WARNING"


@pytest.fixture()
def redis_client() -> fakeredis.FakeRedis:
    """Provide a fresh FakeRedis instance for each test."""
    r = fakeredis.FakeRedis()
    r.flushall()
    return r


@pytest.fixture()
def app(redis_client: fakeredis.FakeRedis) -> Generator[Flask, None, None]:
    """Create an application with its schema, inside an app context."""
    application = create_app(TestConfig, instance_relative_config=False)
    application.extensions[REDIS_CLIENT_KEY] = redis_client
    with application.app_context():
        _db.create_all()
        yield application
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def session(app: Flask) -> Any:
    """Return the Flask-SQLAlchemy scoped session of ``app``."""
    return _db.session


@pytest.fixture()
def client(app: Flask) -> Any:
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture()
def settings(app: Flask):
    """Auth settings validated at startup."""
    return get_auth_settings()


@pytest.fixture()
def codec(app: Flask) -> JWTTokenCodec:
    """Token codec bound to the test application's secret."""
    return JWTTokenCodec()


# -- Hook up Factory Boy to the application session ---------------------------
@pytest.fixture(autouse=True)
def _factories_session(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    """Wire Factory Boy's session helper when a test uses the database."""
    from tests.factories import SQLAlchemySession

    if "app" in request.fixturenames:
        request.getfixturevalue("app")
        SQLAlchemySession.set(_db.session)
    yield
    SQLAlchemySession.set(None)
