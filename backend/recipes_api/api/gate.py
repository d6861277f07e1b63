"""Authorization gate guarding the protected blueprint group.

The gate is a pure decision step: :meth:`AuthorizationGate.evaluate` turns
the ``Authorization`` header into either :class:`Admit` or :class:`Reject`.
:meth:`AuthorizationGate.protect` installs it as a blueprint
``before_request`` hook, where returning a response ends the request, so a
rejected request never reaches a view.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from http import HTTPStatus

from flask import Blueprint, Response, g, request

from recipes_api.core.logger import ensure_request_id
from recipes_api.services._shared.base import ServiceContext
from recipes_api.services._shared.errors import TokenError
from recipes_api.services._shared.ports import TokenCodec
from recipes_api.services.auth.dto import Claims

log = logging.getLogger(__name__)

AUTH_HEADER = "Authorization"
BEARER_SCHEME = "bearer"


@dataclass(frozen=True, slots=True)
class Admit:
    claims: Claims


@dataclass(frozen=True, slots=True)
class Reject:
    reason: str


GateDecision = Admit | Reject


@dataclass(frozen=True, slots=True)
class AuthContext:
    """Identity attached to a request that passed the gate."""

    claims: Claims

    @property
    def username(self) -> str:
        return self.claims.username


def extract_token(header_value: str | None) -> str | None:
    """Return the token from a raw or ``Bearer``-prefixed header value."""
    if not header_value:
        return None
    value = header_value.strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == BEARER_SCHEME:
        value = rest.strip()
    return value or None


class AuthorizationGate:
    """Validate bearer tokens for a group of routes."""

    def __init__(self, codec: TokenCodec) -> None:
        self.codec = codec

    def evaluate(self, header_value: str | None) -> GateDecision:
        """Decide whether a request carrying ``header_value`` may proceed."""
        token = extract_token(header_value)
        if token is None:
            return Reject("missing_token")
        try:
            claims = self.codec.parse(token)
        except TokenError as exc:
            return Reject(type(exc).__name__)
        return Admit(claims)

    def protect(self, bp: Blueprint) -> None:
        """Run the gate before every view of ``bp``."""

        @bp.before_request
        def _authorize() -> Response | None:
            decision = self.evaluate(request.headers.get(AUTH_HEADER))
            if isinstance(decision, Reject):
                log.warning(
                    "auth.gate.rejected",
                    extra={"endpoint": request.endpoint, "reason": decision.reason},
                )
                return Response(status=HTTPStatus.UNAUTHORIZED)
            g.auth = AuthContext(claims=decision.claims)
            return None


def current_auth() -> AuthContext:
    """Return the identity the gate attached to this request.

    Raises ``RuntimeError`` when called from a view outside the protected group.
    """
    auth = g.get("auth")
    if auth is None:
        raise RuntimeError("No authenticated identity; is the view behind the gate?")
    return auth


def service_context() -> ServiceContext:
    """Build the request-scoped context handed to services."""
    auth = g.get("auth")
    return ServiceContext(
        actor=auth.username if auth is not None else None,
        request_id=ensure_request_id(),
    )
