"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

# Name of the environment variable holding the token signing secret
SECRET_ENV_VAR: Final[str] = "JWT_SECRET"


# Load .env in development (no-op when the file is missing)
load_dotenv()


class ConfigError(RuntimeError):
    """Raised at startup when mandatory configuration is missing or invalid."""


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints. Empty by default so routes
        live at ``/signin``, ``/recipes`` and so on.
    JWT_SECRET_KEY: str | None
        Signing secret read from ``JWT_SECRET``. There is no default: a
        missing value aborts :func:`recipes_api.factory.create_app`.
    JWT_ALGORITHM: str
        HMAC algorithm used to sign tokens.
    AUTH_SIGN_IN_TTL_SECONDS: int
        Lifetime of tokens issued by sign-in (10 minutes).
    AUTH_REFRESH_TTL_SECONDS: int
        Lifetime of tokens issued by refresh (5 minutes).
    AUTH_REFRESH_WINDOW_SECONDS: int
        Refresh is only allowed when the token expires within this window.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    REDIS_URL: str | None
        Redis connection string for the recipe cache. Caching is disabled
        when unset.
    RECIPES_CACHE_KEY: str
        Redis key holding the serialized recipe listing.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = os.getenv("API_BASE_PREFIX", "")

    # Secrets / security
    JWT_SECRET_KEY = os.getenv(SECRET_ENV_VAR)
    JWT_ALGORITHM = "HS256"
    JWT_DECODE_LEEWAY = 0
    AUTH_SIGN_IN_TTL_SECONDS = 10 * 60
    AUTH_REFRESH_TTL_SECONDS = 5 * 60
    AUTH_REFRESH_WINDOW_SECONDS = 30

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./recipes.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Cache
    REDIS_URL = os.getenv("REDIS_URL")
    RECIPES_CACHE_KEY = "recipes"

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Falls back to a fixed signing secret so the suite runs without ``.env``.
    """

    TESTING = True
    DEBUG = False
    JWT_SECRET_KEY = os.getenv(SECRET_ENV_VAR, "testing-secret-key")
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    REDIS_URL = None
    PROPAGATE_EXCEPTIONS = False


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments."""

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)


@dataclass(frozen=True, slots=True)
class AuthSettings:
    """
    Immutable authentication settings resolved once at startup.

    :param secret: Token signing secret.
    :type secret: str
    :param algorithm: JWT signing algorithm.
    :type algorithm: str
    :param sign_in_ttl: Lifetime of tokens issued on sign-in.
    :type sign_in_ttl: timedelta
    :param refresh_ttl: Lifetime of tokens issued on refresh.
    :type refresh_ttl: timedelta
    :param refresh_window: Maximum remaining lifetime allowing a refresh.
    :type refresh_window: timedelta
    """

    secret: str
    algorithm: str = "HS256"
    sign_in_ttl: timedelta = timedelta(minutes=10)
    refresh_ttl: timedelta = timedelta(minutes=5)
    refresh_window: timedelta = timedelta(seconds=30)

    def __repr__(self) -> str:
        return (
            f"AuthSettings(secret=***, algorithm={self.algorithm!r}, "
            f"sign_in_ttl={self.sign_in_ttl!r}, refresh_ttl={self.refresh_ttl!r}, "
            f"refresh_window={self.refresh_window!r})"
        )

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> AuthSettings:
        """
        Build settings from a Flask config mapping.

        :param config: Mapping holding ``JWT_SECRET_KEY`` and the ``AUTH_*`` values.
        :returns: Validated settings.
        :raises ConfigError: When the signing secret is missing or blank.
        """
        secret = config.get("JWT_SECRET_KEY")
        if not isinstance(secret, str) or not secret.strip():
            raise ConfigError(
                f"{SECRET_ENV_VAR} is not set; refusing to start without a signing secret."
            )
        return cls(
            secret=secret,
            algorithm=str(config.get("JWT_ALGORITHM", "HS256")),
            sign_in_ttl=timedelta(seconds=int(config.get("AUTH_SIGN_IN_TTL_SECONDS", 600))),
            refresh_ttl=timedelta(seconds=int(config.get("AUTH_REFRESH_TTL_SECONDS", 300))),
            refresh_window=timedelta(seconds=int(config.get("AUTH_REFRESH_WINDOW_SECONDS", 30))),
        )
