# recipes_api/infra/sqlalchemy/credential_store.py
from __future__ import annotations

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from recipes_api.models.user import User
from recipes_api.repositories.user import UserRepository
from recipes_api.services._shared.errors import StoreError, UsernameTakenError, violates
from recipes_api.services._shared.ports import CredentialStore
from recipes_api.services.auth.dto import UserRecord


def _to_record(user: User) -> UserRecord:
    return UserRecord(username=user.username, password=user.password)


class SQLAlchemyCredentialStore(CredentialStore):
    """
    Credential store over the ``users`` table.

    Each insert is its own transaction: committed on success, rolled back on
    failure. Backend errors surface as :class:`StoreError` with the original
    exception chained.
    """

    def __init__(self, session: Session | None = None) -> None:
        self.users = UserRepository(session)
        self.session = self.users.session

    def get_by_username(self, username: str) -> UserRecord | None:
        try:
            user = self.users.get_by_username(username)
        except SQLAlchemyError as exc:
            raise StoreError() from exc
        return _to_record(user) if user is not None else None

    def find_by_credentials(self, username: str, password_digest: str) -> UserRecord | None:
        try:
            user = self.users.get_by_credentials(username, password_digest)
        except SQLAlchemyError as exc:
            raise StoreError() from exc
        return _to_record(user) if user is not None else None

    def add(self, username: str, password_digest: str) -> UserRecord:
        try:
            user = self.users.add(User(username=username, password=password_digest))
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            # Lost a race with a concurrent sign-up for the same name
            if violates(exc, "uq_users_username"):
                raise UsernameTakenError() from exc
            raise StoreError() from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError() from exc
        return _to_record(user)
