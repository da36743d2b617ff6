"""Password hashing and access token tests."""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from petcare.core.config import Settings
from petcare.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


UNIT_SECRET = "unit-secret-key-with-at-least-32-bytes"


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, jwt_secret_key=UNIT_SECRET, **overrides)


def test_hash_and_verify_password() -> None:
    stored = hash_password("pass1234", iterations=1000)
    assert stored.startswith("pbkdf2_sha256$1000$")
    assert verify_password("pass1234", stored) is True
    assert verify_password("wrong", stored) is False


def test_hashes_are_salted() -> None:
    assert hash_password("same", iterations=1000) != hash_password("same", iterations=1000)


def test_verify_rejects_plaintext_and_garbage() -> None:
    assert verify_password("secret", "secret") is False
    assert verify_password("secret", "") is False
    assert verify_password("secret", "pbkdf2_sha256$notanumber$zz$zz") is False


def test_token_carries_account_id() -> None:
    settings = _settings()
    token = create_access_token(42, settings)
    assert decode_access_token(token, settings) == 42
    payload = jwt.decode(token, UNIT_SECRET, algorithms=["HS256"])
    assert set(payload) == {"sub", "exp"}


def test_token_signed_with_other_key_is_rejected() -> None:
    token = create_access_token(1, _settings())
    other = Settings(_env_file=None, jwt_secret_key="another-secret-key-with-32-bytes-or-more")
    with pytest.raises(jwt.InvalidTokenError):
        decode_access_token(token, other)


def test_expired_token_is_rejected() -> None:
    settings = _settings()
    token = jwt.encode(
        {"sub": "1", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        UNIT_SECRET,
        algorithm="HS256",
    )
    with pytest.raises(jwt.ExpiredSignatureError):
        decode_access_token(token, settings)


def test_token_without_numeric_subject_is_rejected() -> None:
    settings = _settings()
    token = jwt.encode({"sub": "abc"}, UNIT_SECRET, algorithm="HS256")
    with pytest.raises(jwt.InvalidTokenError):
        decode_access_token(token, settings)
