"""Tests for the token adapter's error surface."""

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest
from bson import ObjectId

from svc_store.auth import settings as auth_settings
from svc_store.auth import Token
from svc_store.exceptions import AuthError, ErrorKind, TokenExpiredError

SECRET = "test_secret_key_32_chars_minimum!"


@pytest.fixture
def reset_auth_settings():
    auth_settings._settings = None
    yield
    auth_settings._settings = None


class TestToken:
    def test_round_trip(self):
        oid = ObjectId()

        raw = Token.encode(oid, timedelta(minutes=5), SECRET)
        token = Token.decode(raw, SECRET)

        assert token.id == oid
        assert not token.is_expired()
        assert raw.count(".") == 2

    def test_expired(self):
        raw = Token.encode(ObjectId(), timedelta(seconds=-10), SECRET)

        with pytest.raises(TokenExpiredError) as exc_info:
            Token.decode(raw, SECRET)

        assert exc_info.value.kind is ErrorKind.TOKEN_EXPIRED
        assert exc_info.value.code == 2

    def test_wrong_secret(self):
        raw = Token.encode(ObjectId(), timedelta(minutes=5), SECRET)

        with pytest.raises(AuthError):
            Token.decode(raw, "another_secret_key_32_chars_long!!")

    def test_garbage(self):
        with pytest.raises(AuthError) as exc_info:
            Token.decode("not-a-token", SECRET)

        assert exc_info.value.code == 52

    def test_bad_claims(self):
        raw = jwt.encode({"id": "not-an-object-id", "exp": 9_999_999_999}, SECRET, algorithm="HS256")

        with pytest.raises(AuthError):
            Token.decode(raw, SECRET)

    def test_missing_id_claim(self):
        raw = jwt.encode({"exp": 9_999_999_999}, SECRET, algorithm="HS256")

        with pytest.raises(AuthError):
            Token.decode(raw, SECRET)

    def test_secret_and_lifetime_from_settings(self, monkeypatch, reset_auth_settings):
        monkeypatch.setenv("AUTH_JWT_SECRET", SECRET)
        monkeypatch.setenv("AUTH_JWT_LIFETIME_SECONDS", "60")
        oid = ObjectId()

        token = Token.decode(Token.encode(oid))

        assert token.id == oid
        assert jwt.decode(Token.encode(oid), SECRET, algorithms=["HS256"])["id"] == str(oid)
