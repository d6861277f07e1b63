"""Unit tests for SQLAlchemyCredentialStore."""

from __future__ import annotations

import pytest
from recipes_api.infra.sqlalchemy.credential_store import SQLAlchemyCredentialStore
from recipes_api.services._shared.errors import StoreError, UsernameTakenError
from recipes_api.services.auth.dto import UserRecord
from recipes_api.services.auth.passwords import digest_password
from sqlalchemy.exc import OperationalError

from tests.factories.user import UserFactory


@pytest.fixture()
def store(session) -> SQLAlchemyCredentialStore:
    return SQLAlchemyCredentialStore(session)


def test_add_persists_and_returns_record(store):
    record = store.add("alice", digest_password("pw1"))

    assert record == UserRecord(username="alice", password=digest_password("pw1"))
    assert store.get_by_username("alice") == record


def test_get_by_username_unknown_returns_none(store):
    assert store.get_by_username("nobody") is None


def test_find_by_credentials_matches_username_and_digest(store):
    user = UserFactory(username="carol", raw_password="secret")

    assert store.find_by_credentials("carol", digest_password("secret")).username == user.username
    assert store.find_by_credentials("carol", digest_password("wrong")) is None
    assert store.find_by_credentials("dave", digest_password("secret")) is None


def test_add_duplicate_username_raises_username_taken(store):
    UserFactory(username="erin")

    with pytest.raises(UsernameTakenError):
        store.add("erin", digest_password("other"))

    # the session is usable again after the rollback
    assert store.get_by_username("erin") is not None


def test_backend_failure_surfaces_as_store_error(store, monkeypatch):
    def _boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(store.session, "execute", _boom)

    with pytest.raises(StoreError) as excinfo:
        store.get_by_username("alice")
    assert isinstance(excinfo.value.__cause__, OperationalError)
