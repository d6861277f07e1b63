"""Unit tests for the authorization gate."""

from __future__ import annotations

from datetime import timedelta

import pytest
from recipes_api.api.gate import Admit, AuthorizationGate, Reject, extract_token
from recipes_api.models import Recipe

from tests.helpers.auth import TEST_SECRET, auth_header, forge_token, tamper


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        (None, None),
        ("", None),
        ("   ", None),
        ("abc.def.ghi", "abc.def.ghi"),
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("bearer   abc.def.ghi ", "abc.def.ghi"),
        ("Bearer ", None),
    ],
)
def test_extract_token(header, expected):
    assert extract_token(header) == expected


@pytest.fixture()
def gate(codec) -> AuthorizationGate:
    return AuthorizationGate(codec)


def test_evaluate_admits_valid_token(gate):
    decision = gate.evaluate(forge_token(TEST_SECRET, "alice"))

    assert isinstance(decision, Admit)
    assert decision.claims.username == "alice"


def test_evaluate_rejects_missing_header(gate):
    assert gate.evaluate(None) == Reject("missing_token")


@pytest.mark.parametrize(
    ("make_token", "reason"),
    [
        (lambda: "garbage", "MalformedTokenError"),
        (lambda: forge_token("wrong-secret", "alice"), "InvalidSignatureError"),
        (lambda: tamper(forge_token(TEST_SECRET, "alice")), "InvalidSignatureError"),
        (
            lambda: forge_token(TEST_SECRET, "alice", expires_in=timedelta(seconds=-1)),
            "TokenExpiredError",
        ),
    ],
)
def test_evaluate_rejects_bad_tokens(gate, make_token, reason):
    assert gate.evaluate(make_token()) == Reject(reason)


def test_rejected_request_never_reaches_the_view(client, session):
    resp = client.post(
        "/recipes",
        json={"name": "Pizza"},
        headers=auth_header(forge_token("wrong-secret", "alice")),
    )

    assert resp.status_code == 401
    assert resp.data == b""
    assert session.query(Recipe).count() == 0


def test_missing_header_gets_empty_401(client):
    resp = client.get("/user/alice")

    assert resp.status_code == 401
    assert resp.data == b""


def test_admitted_request_reaches_the_view(client):
    resp = client.post(
        "/recipes",
        json={"name": "Pizza"},
        headers=auth_header(forge_token(TEST_SECRET, "alice")),
    )

    assert resp.status_code == 200
    assert resp.get_json()["name"] == "Pizza"


def test_current_auth_outside_protected_group(app):
    from recipes_api.api.gate import current_auth

    with app.test_request_context("/signin"):
        with pytest.raises(RuntimeError):
            current_auth()
