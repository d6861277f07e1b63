"""Recipe Marshmallow schemas."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from marshmallow import EXCLUDE, Schema, fields, validate


class UTCDateTime(fields.DateTime):
    """ISO 8601 datetime that always carries an offset; naive values are UTC."""

    def _serialize(self, value: datetime | None, attr: str | None, obj: Any, **kwargs: Any):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return super()._serialize(value, attr, obj, **kwargs)


class RecipeSchema(Schema):
    """Recipe representation; also validates create and update payloads.

    ``id`` and ``publishedAt`` are server-assigned and ignored on input.
    """

    class Meta:
        unknown = EXCLUDE

    id = fields.String(dump_only=True)
    name = fields.String(required=True, validate=validate.Length(min=1, max=200))
    tags = fields.List(fields.String(validate=validate.Length(min=1, max=100)), load_default=list)
    ingredients = fields.List(fields.String(), load_default=list)
    instructions = fields.List(fields.String(), load_default=list)
    published_at = UTCDateTime(data_key="publishedAt", dump_only=True)


class MessageSchema(Schema):
    """Plain confirmation message."""

    message = fields.String(required=True)
