"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class CredentialsSchema(Schema):
    """Input payload for sign-in and sign-up."""

    username = fields.String(required=True, validate=validate.Length(min=1, max=50))
    password = fields.String(required=True, validate=validate.Length(min=1))


class TokenResponseSchema(Schema):
    """Response payload carrying an issued token and its expiry."""

    token = fields.String(required=True)
    expires = fields.DateTime(required=True)


class UserSchema(Schema):
    """Stored user record (the password member is the digest)."""

    username = fields.String(required=True)
    password = fields.String(required=True)
