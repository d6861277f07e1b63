"""Authentication endpoints: sign-in, sign-up and token refresh."""

from __future__ import annotations

from flask import Blueprint, request

from recipes_api.api.deps import auth_service, json_response, timing
from recipes_api.api.gate import AUTH_HEADER, extract_token
from recipes_api.core.errors import Unauthorized
from recipes_api.schemas import CredentialsSchema, TokenResponseSchema, UserSchema
from recipes_api.services._shared.errors import ServiceError
from recipes_api.services.auth.dto import CredentialsIn

bp = Blueprint("auth", __name__)

credentials_schema = CredentialsSchema()
token_schema = TokenResponseSchema()
user_schema = UserSchema()


def _credentials() -> CredentialsIn:
    data = credentials_schema.load(request.get_json(silent=True) or {})
    return CredentialsIn(username=data["username"], password=data["password"])


@bp.post("/signin")
@timing
def sign_in():
    """Login with username and password.

    200 with ``{token, expires}``; 401 on invalid credentials.
    """
    service = auth_service()
    try:
        issued = service.sign_in(_credentials())
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return json_response(token_schema.dump(issued))


@bp.post("/signup")
@timing
def sign_up():
    """Sign up a user.

    200 with the stored ``{username, password}``; 400 when the username exists.
    """
    service = auth_service()
    try:
        record = service.sign_up(_credentials())
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return json_response(user_schema.dump(record))


@bp.post("/refresh")
@timing
def refresh():
    """Refresh a token that expires within the refresh window.

    401 for a missing, invalid or expired token; 400 when it is too early.
    """
    token = extract_token(request.headers.get(AUTH_HEADER))
    if token is None:
        raise Unauthorized("Missing authorization token")
    service = auth_service()
    try:
        issued = service.refresh(token)
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return json_response(token_schema.dump(issued))
