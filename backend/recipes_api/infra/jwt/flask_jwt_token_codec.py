# recipes_api/infra/jwt/flask_jwt_token_codec.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, cast

import jwt as pyjwt
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTDecodeError

from recipes_api.services._shared.errors import (
    InvalidSignatureError,
    MalformedTokenError,
    TokenExpiredError,
)
from recipes_api.services._shared.ports import TokenCodec
from recipes_api.services.auth.dto import Claims

USERNAME_CLAIM = "username"


@dataclass(frozen=True, slots=True)
class JWTTokenCodec(TokenCodec):
    """
    HS256 codec backed by Flask-JWT-Extended.

    The ``exp`` claim is written from ``Claims.expires_at`` (whole seconds)
    instead of the extension's configured lifetime, so callers fully control
    expiry.

    .. note::
       Requires an active Flask app context; the extension reads the signing
       key that :func:`recipes_api.core.extensions.init_app` validated.
    """

    def issue(self, claims: Claims) -> str:
        now = datetime.now(timezone.utc)
        if claims.expires_at <= now:
            raise ValueError("Refusing to issue a token that is already expired.")
        token = create_access_token(
            identity=claims.username,
            additional_claims={
                USERNAME_CLAIM: claims.username,
                "exp": int(claims.expires_at.timestamp()),
            },
            expires_delta=False,
        )
        return cast(str, token)

    def parse(self, token: str, *, allow_expired: bool = False) -> Claims:
        try:
            decoded = cast(dict[str, Any], decode_token(token, allow_expired=allow_expired))
        except pyjwt.ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except pyjwt.InvalidSignatureError as exc:
            raise InvalidSignatureError() from exc
        except (pyjwt.InvalidTokenError, JWTDecodeError) as exc:
            raise MalformedTokenError() from exc

        username = decoded.get(USERNAME_CLAIM) or decoded.get("sub")
        exp = decoded.get("exp")
        if not isinstance(username, str) or not username or not isinstance(exp, int | float):
            raise MalformedTokenError()
        return Claims(username=username, expires_at=datetime.fromtimestamp(exp, tz=timezone.utc))
