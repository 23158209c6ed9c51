"""
Unit tests for password hashing and bearer tokens
"""
import time
from datetime import timedelta

import pytest
from jose import JWTError, jwt

from app.core.config import settings
from app.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


class TestPasswordHashing:

    def test_hash_is_not_plaintext(self):
        hashed = get_password_hash("pw123")
        assert hashed != "pw123"
        assert hashed.startswith("$pbkdf2-sha256$")

    def test_hash_is_salted(self):
        assert get_password_hash("pw123") != get_password_hash("pw123")

    def test_verify_password(self):
        hashed = get_password_hash("pw123")
        assert verify_password("pw123", hashed) is True
        assert verify_password("wrong", hashed) is False


class TestAccessToken:

    def test_claims_carry_user_id_and_role(self):
        token = create_access_token(user_id=7, role="TEACHER")
        payload = decode_access_token(token)

        assert payload["userId"] == 7
        assert payload["role"] == "TEACHER"
        assert payload["sub"] == "7"
        assert payload["ver"] == settings.TOKEN_VERSION

    def test_default_expiry_is_one_hour(self):
        token = create_access_token(user_id=1, role="STUDENT")
        claims = jwt.get_unverified_claims(token)

        assert 3590 <= claims["exp"] - time.time() <= 3610

    def test_expired_token_is_rejected(self):
        token = create_access_token(user_id=1, role="STUDENT", expires_delta=timedelta(seconds=-5))
        with pytest.raises(JWTError):
            decode_access_token(token)

    def test_foreign_signature_is_rejected(self):
        token = jwt.encode(
            {"userId": 1, "role": "TEACHER", "ver": settings.TOKEN_VERSION},
            "some-other-key",
            algorithm="HS256",
        )
        with pytest.raises(JWTError):
            decode_access_token(token)

    def test_rotated_token_version_is_rejected(self, monkeypatch):
        token = create_access_token(user_id=1, role="STUDENT")
        monkeypatch.setattr(settings, "TOKEN_VERSION", settings.TOKEN_VERSION + 1)
        with pytest.raises(JWTError):
            decode_access_token(token)
