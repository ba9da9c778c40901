"""
Unit tests for token and password helpers and the auth dependencies.

The dependencies are plain functions, so they are called directly with the
payload `authenticate_jwt` would have produced.
"""

from datetime import timedelta
from types import SimpleNamespace

import pytest
from fastapi.security import HTTPAuthorizationCredentials
from jose import JWTError, jwt

from jobly.core.config import settings
from jobly.core.deps import (
    authenticate_jwt,
    ensure_admin,
    ensure_admin_or_correct_user,
    ensure_logged_in,
)
from jobly.core.exceptions import UnauthorizedError
from jobly.core.security import create_token, decode_token, get_password_hash, verify_password


def bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestTokens:
    """Tests for create_token / decode_token"""

    def test_create_token_non_admin(self):
        token = create_token(SimpleNamespace(username="test", is_admin=False))
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])

        assert payload["username"] == "test"
        assert payload["isAdmin"] is False
        assert "exp" in payload

    def test_create_token_admin(self):
        token = create_token(SimpleNamespace(username="test", is_admin=True))

        assert decode_token(token)["isAdmin"] is True

    def test_decode_rejects_wrong_key(self):
        token = jwt.encode({"username": "test", "isAdmin": True}, "wrong", algorithm="HS256")

        with pytest.raises(JWTError):
            decode_token(token)

    def test_decode_rejects_expired(self):
        token = create_token(SimpleNamespace(username="test", is_admin=False), timedelta(minutes=-1))

        with pytest.raises(JWTError):
            decode_token(token)


class TestPasswords:
    """Tests for bcrypt hashing"""

    def test_hash_and_verify(self):
        hashed = get_password_hash("password1")

        assert hashed != "password1"
        assert hashed.startswith("$2")
        assert verify_password("password1", hashed)
        assert not verify_password("wrong", hashed)


class TestAuthenticateJWT:
    """Tests for the token-reading dependency"""

    def test_valid_token(self):
        token = create_token(SimpleNamespace(username="test", is_admin=False))
        payload = authenticate_jwt(bearer(token))

        assert payload["username"] == "test"
        assert payload["isAdmin"] is False

    def test_no_header(self):
        assert authenticate_jwt(None) is None

    def test_invalid_token_is_not_an_error(self):
        token = jwt.encode({"username": "test", "isAdmin": False}, "wrong", algorithm="HS256")

        assert authenticate_jwt(bearer(token)) is None

    def test_garbage_token(self):
        assert authenticate_jwt(bearer("not-a-jwt")) is None


class TestEnsureLoggedIn:
    def test_works(self):
        user = {"username": "test", "isAdmin": False}
        assert ensure_logged_in(user) == user

    def test_unauth_if_no_login(self):
        with pytest.raises(UnauthorizedError):
            ensure_logged_in(None)

    def test_unauth_if_no_username(self):
        with pytest.raises(UnauthorizedError):
            ensure_logged_in({"isAdmin": True})


class TestEnsureAdmin:
    def test_works(self):
        user = {"username": "admin", "isAdmin": True}
        assert ensure_admin(user) == user

    def test_unauth_if_not_admin(self):
        with pytest.raises(UnauthorizedError):
            ensure_admin({"username": "test", "isAdmin": False})

    def test_unauth_if_anon(self):
        with pytest.raises(UnauthorizedError):
            ensure_admin(None)

    def test_admin_flag_must_be_true(self):
        with pytest.raises(UnauthorizedError):
            ensure_admin({"username": "test", "isAdmin": "true"})


class TestEnsureAdminOrCorrectUser:
    def test_works_for_same_user(self):
        user = {"username": "test", "isAdmin": False}
        assert ensure_admin_or_correct_user("test", user) == user

    def test_works_for_admin(self):
        user = {"username": "admin", "isAdmin": True}
        assert ensure_admin_or_correct_user("test", user) == user

    def test_unauth_for_different_user(self):
        with pytest.raises(UnauthorizedError):
            ensure_admin_or_correct_user("test", {"username": "other", "isAdmin": False})

    def test_unauth_for_anon(self):
        with pytest.raises(UnauthorizedError):
            ensure_admin_or_correct_user("test", None)
