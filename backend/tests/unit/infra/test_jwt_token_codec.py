"""Unit tests for JWTTokenCodec (signing, verification and expiry)."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from freezegun import freeze_time
from recipes_api.services._shared.errors import (
    InvalidSignatureError,
    MalformedTokenError,
    TokenError,
    TokenExpiredError,
)
from recipes_api.services.auth.dto import Claims

from tests.helpers.auth import TEST_SECRET, forge_token, tamper


def _claims(username: str = "alice", seconds: int = 600) -> Claims:
    expires = (datetime.now(timezone.utc) + timedelta(seconds=seconds)).replace(microsecond=0)
    return Claims(username=username, expires_at=expires)


def test_issue_then_parse_returns_same_claims(codec):
    claims = _claims()
    token = codec.issue(claims)

    parsed = codec.parse(token)

    assert parsed == claims


def test_token_is_hs256_signed_with_configured_secret(codec):
    import jwt as pyjwt

    token = codec.issue(_claims("bob"))

    decoded = pyjwt.decode(token, TEST_SECRET, algorithms=["HS256"])
    assert decoded["username"] == "bob"
    assert decoded["sub"] == "bob"
    assert pyjwt.get_unverified_header(token)["alg"] == "HS256"


def test_issue_refuses_expired_claims(codec):
    past = datetime.now(timezone.utc) - timedelta(seconds=1)

    with pytest.raises(ValueError):
        codec.issue(Claims(username="alice", expires_at=past))


def test_parse_rejects_tampered_payload(codec):
    token = codec.issue(_claims())

    with pytest.raises(InvalidSignatureError):
        codec.parse(tamper(token))


def test_parse_rejects_tampered_payload_even_when_expired(codec):
    token = codec.issue(_claims())
    past = int((datetime.now(timezone.utc) - timedelta(hours=1)).timestamp())

    with pytest.raises(InvalidSignatureError):
        codec.parse(tamper(token, exp=past))


def test_parse_rejects_token_signed_with_another_secret(codec):
    token = forge_token("some-other-secret", "alice")

    with pytest.raises(InvalidSignatureError):
        codec.parse(token)


@pytest.mark.parametrize("garbage", ["", "not-a-token", "a.b.c", "Bearer"])
def test_parse_rejects_malformed_tokens(codec, garbage):
    with pytest.raises(MalformedTokenError):
        codec.parse(garbage)


def test_parse_rejects_token_without_expiry(codec):
    import jwt as pyjwt

    token = pyjwt.encode({"sub": "alice", "username": "alice"}, TEST_SECRET, algorithm="HS256")

    with pytest.raises(MalformedTokenError):
        codec.parse(token)


def test_parse_rejects_expired_token(codec):
    token = forge_token(TEST_SECRET, "alice", expires_in=timedelta(seconds=-5))

    with pytest.raises(TokenExpiredError):
        codec.parse(token)


def test_parse_allow_expired_returns_claims(codec):
    token = forge_token(TEST_SECRET, "alice", expires_in=timedelta(seconds=-5))

    claims = codec.parse(token, allow_expired=True)

    assert claims.username == "alice"
    assert claims.expires_at < datetime.now(timezone.utc)


def test_token_expires_exactly_at_claimed_instant(codec):
    with freeze_time("2030-01-01 12:00:00") as frozen:
        token = codec.issue(
            Claims(username="alice", expires_at=datetime(2030, 1, 1, 12, 10, tzinfo=timezone.utc))
        )

        frozen.move_to("2030-01-01 12:09:59")
        assert codec.parse(token).username == "alice"

        frozen.move_to("2030-01-01 12:10:01")
        with pytest.raises(TokenExpiredError):
            codec.parse(token)


def test_all_codec_failures_share_a_base_class():
    for exc_type in (InvalidSignatureError, MalformedTokenError, TokenExpiredError):
        assert issubclass(exc_type, TokenError)
