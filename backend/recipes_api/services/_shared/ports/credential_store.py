from __future__ import annotations

from typing import Protocol

from recipes_api.services._shared.errors import UsernameTakenError
from recipes_api.services.auth.dto import UserRecord


class CredentialStore(Protocol):
    """
    Abstraction over durable user-record storage.

    Implementations raise :class:`StoreError` on backend failures and
    :class:`UsernameTakenError` when an insert collides with an existing user.
    """

    def get_by_username(self, username: str) -> UserRecord | None: ...

    def find_by_credentials(self, username: str, password_digest: str) -> UserRecord | None: ...

    def add(self, username: str, password_digest: str) -> UserRecord: ...


class InMemoryCredentialStore(CredentialStore):
    """Dictionary-backed store used in unit tests."""

    def __init__(self) -> None:
        self._users: dict[str, UserRecord] = {}

    def get_by_username(self, username: str) -> UserRecord | None:
        return self._users.get(username)

    def find_by_credentials(self, username: str, password_digest: str) -> UserRecord | None:
        record = self._users.get(username)
        if record is None or record.password != password_digest:
            return None
        return record

    def add(self, username: str, password_digest: str) -> UserRecord:
        if username in self._users:
            raise UsernameTakenError()
        record = UserRecord(username=username, password=password_digest)
        self._users[username] = record
        return record
