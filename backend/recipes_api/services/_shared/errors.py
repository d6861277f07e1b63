"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never depend on Flask or HTTP.
They are stable contracts between adapters, repositories and services.

The translation to HTTP responses (RFC 7807) is handled by
``recipes_api/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name; SQLite reports the column, so the
    column suffix of the conventional name is matched as a fallback.

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :param constraint_name: Constraint name, e.g. ``uq_users_username``.
    :returns: ``True`` if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    name = constraint_name.lower()
    if name in message:
        return True
    # "UNIQUE constraint failed: users.username"
    table_col = name.removeprefix("uq_").replace("_", ".", 1)
    return table_col in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - ``BaseService.translate_exceptions`` turns them into ``APIError``.
    """


# --------------------------------------------------------------------------- #
# Authentication
# --------------------------------------------------------------------------- #


class InvalidCredentialsError(ServiceError):
    """Unknown username or wrong password (deliberately indistinguishable)."""

    def __init__(self, message: str = "Invalid username or password") -> None:
        super().__init__(message)


class TokenError(ServiceError):
    """Base class for tokens that cannot be accepted."""

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)


class InvalidSignatureError(TokenError):
    """Token signature does not match its header and payload."""

    def __init__(self, message: str = "Token signature is invalid") -> None:
        super().__init__(message)


class MalformedTokenError(TokenError):
    """Token is not a well-formed signed claim set."""

    def __init__(self, message: str = "Token is malformed") -> None:
        super().__init__(message)


class TokenExpiredError(TokenError):
    """Token is correctly signed but its expiry is in the past."""

    def __init__(self, message: str = "Token is expired") -> None:
        super().__init__(message)


class UsernameTakenError(ServiceError):
    """Sign-up attempted with a username that already exists."""

    def __init__(self, message: str = "Username already exists") -> None:
        super().__init__(message)


class RefreshTooEarlyError(ServiceError):
    """Refresh attempted while the token is still outside the refresh window."""

    def __init__(self, message: str = "Token is not expired yet") -> None:
        super().__init__(message)


# --------------------------------------------------------------------------- #
# Persistence
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    :param message: Client-facing message; a generic one is derived when empty.
    :type message: str
    """

    entity: str
    key: str | int
    message: str = ""

    def __str__(self) -> str:
        return self.message or f"{self.entity} not found: {self.key}"


class StoreError(ServiceError):
    """The backing store failed; the cause is chained, never shown to clients."""

    def __init__(self, message: str = "Storage backend failure") -> None:
        super().__init__(message)
