"""User lookup endpoint (protected)."""

from __future__ import annotations

import logging

from flask import Blueprint

from recipes_api.api.deps import auth_service, gate, json_response, timing
from recipes_api.api.gate import current_auth
from recipes_api.schemas import UserSchema
from recipes_api.services._shared.errors import ServiceError

log = logging.getLogger(__name__)

bp = Blueprint("users", __name__)
gate.protect(bp)

user_schema = UserSchema()


@bp.get("/<string:username>")
@timing
def get_user(username: str):
    """Return a stored user record; 404 when unknown."""
    log.info("users.lookup target=%s", username, extra={"username": current_auth().username})
    service = auth_service()
    try:
        record = service.get_user(username)
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return json_response(user_schema.dump(record))
