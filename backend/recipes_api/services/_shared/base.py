# recipes_api/services/_shared/base.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from recipes_api.core import errors as api_errors
from recipes_api.services._shared.errors import (
    InvalidCredentialsError,
    NotFoundError,
    RefreshTooEarlyError,
    ServiceError,
    StoreError,
    TokenError,
    UsernameTakenError,
)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data.

    :param actor: Authenticated username, when the request passed the gate.
    :param request_id: Correlation id for logging/tracing.
    """

    actor: str | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide a single clock (``now_utc``) so time can be frozen in tests.
    * Centralize translation of service errors into API errors.
    * Keep services thin, orchestration-only, no web/ORM leakage.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context.
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    @staticmethod
    def now_utc() -> datetime:
        """Return the current timezone-aware UTC instant."""
        return datetime.now(timezone.utc)

    # -------------------------- Error handling ------------------------------

    def translate_exceptions(self, exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        if isinstance(exc, InvalidCredentialsError | TokenError):
            # → 401 Unauthorized
            return api_errors.Unauthorized(str(exc))

        if isinstance(exc, UsernameTakenError):
            return api_errors.BadRequest(str(exc), code="username_taken")

        if isinstance(exc, RefreshTooEarlyError):
            return api_errors.BadRequest(str(exc), code="refresh_too_early")

        if isinstance(exc, NotFoundError):
            # → 404 Not Found
            return api_errors.NotFound(str(exc))

        if isinstance(exc, StoreError):
            # → 500, cause stays in the logs
            return api_errors.ServerError(str(exc))

        # Any other ServiceError subclass → 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.BadRequest(str(exc))

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc
