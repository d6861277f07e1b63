"""Factory Boy definition for :class:`recipes_api.models.user.User`."""

from __future__ import annotations

import factory
from recipes_api.models.user import User
from recipes_api.services.auth.passwords import digest_password

from tests.factories import BaseFactory


class UserFactory(BaseFactory):
    """Build persisted users; pass ``raw_password`` to pick the password."""

    class Meta:
        model = User

    class Params:
        raw_password = "Passw0rd!"

    id = None  # let autoincrement handle it
    username = factory.Sequence(lambda n: f"user{n}")
    password = factory.LazyAttribute(lambda o: digest_password(o.raw_password))
