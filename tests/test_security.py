from datetime import datetime, timedelta, timezone

import jwt

from arena.config import settings
from arena.core.security import create_access_token, decode_access_token, get_password_hash, verify_password


def test_password_hash_round_trip():
    hashed = get_password_hash("1234")

    assert hashed != "1234"
    assert verify_password("1234", hashed)
    assert not verify_password("4321", hashed)


def test_access_token_carries_user_name():
    token = create_access_token("admin")

    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    assert payload["sub"] == "admin"
    assert payload["type"] == "access"
    assert payload["exp"] - payload["iat"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    assert decode_access_token(token) == "admin"


def test_expired_token_is_rejected():
    assert decode_access_token(create_access_token("admin", expires_minutes=-1)) is None


def test_token_without_access_type_is_rejected():
    token = jwt.encode(
        {"sub": "admin", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )

    assert decode_access_token(token) is None


def test_token_signed_with_other_key_is_rejected():
    token = jwt.encode(
        {"sub": "admin", "type": "access", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        "another-secret-key-that-is-long-enough",
        algorithm=settings.ALGORITHM,
    )

    assert decode_access_token(token) is None
