"""User repository: lookups used by the credential store."""

from __future__ import annotations

from recipes_api.models.user import User
from recipes_api.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It never hashes passwords or issues tokens; callers pass digests.
    """

    model = User

    def get_by_username(self, username: str) -> User | None:
        """Fetch a user by exact username."""
        return self.first(self._select().where(User.username == username))

    def get_by_credentials(self, username: str, password_digest: str) -> User | None:
        """Fetch the user matching both ``username`` and ``password_digest``."""
        stmt = self._select().where(
            User.username == username,
            User.password == password_digest,
        )
        return self.first(stmt)
