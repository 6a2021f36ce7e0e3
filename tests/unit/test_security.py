# tests/unit/test_security.py
from datetime import timedelta

import pytest
from jose import jwt

from fastmoney.api.auth import (
    create_access_token,
    hash_password,
    verify_access_token,
    verify_password,
)
from fastmoney.config import Settings
from fastmoney.exceptions import AuthError, ForbiddenError


@pytest.fixture
def settings():
    return Settings(secret_key="unit-secret", access_token_expire_minutes=5)


class TestPasswords:

    def test_hash_is_salted_and_verifies(self):
        first = hash_password("pw1")
        second = hash_password("pw1")
        assert first != second
        assert first != "pw1"
        assert verify_password("pw1", first)
        assert verify_password("pw1", second)

    def test_wrong_password_fails(self):
        assert not verify_password("nope", hash_password("pw1"))


class TestTokens:

    def test_token_resolves_to_embedded_user_id(self, settings):
        token = create_access_token({"sub": "42"}, settings)
        assert verify_access_token(token, settings) == 42

    def test_token_carries_expiry(self, settings):
        token = create_access_token({"sub": "42"}, settings)
        claims = jwt.get_unverified_claims(token)
        assert "exp" in claims

    def test_expired_token_rejected(self, settings):
        token = create_access_token({"sub": "42"}, settings, expires_delta=timedelta(seconds=-10))
        with pytest.raises(AuthError):
            verify_access_token(token, settings)

    def test_token_signed_with_other_secret_rejected(self, settings):
        other = Settings(secret_key="someone-else")
        token = create_access_token({"sub": "42"}, other)
        with pytest.raises(AuthError):
            verify_access_token(token, settings)

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_malformed_token_rejected(self, settings, token):
        with pytest.raises(AuthError):
            verify_access_token(token, settings)

    def test_non_numeric_subject_rejected(self, settings):
        token = create_access_token({"sub": "alice"}, settings)
        with pytest.raises(AuthError):
            verify_access_token(token, settings)

    def test_invalid_token_is_401_not_403(self, settings):
        with pytest.raises(AuthError) as excinfo:
            verify_access_token("garbage", settings)
        assert not isinstance(excinfo.value, ForbiddenError)
        assert excinfo.value.status_code == 401
