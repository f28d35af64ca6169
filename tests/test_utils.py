"""Пароли, токены, разбор параметров поиска."""
from datetime import timedelta

import jwt
import pytest

from fudge import config
from fudge.utils.search_utils import like_pattern, normalize_page
from fudge.utils.security import hash_password, verify_password
from fudge.utils.tokens import TokenError, generate_token, parse_expires_in, verify_token


def test_hash_and_verify_password() -> None:
    hashed = hash_password("s3cret!")
    assert hashed != "s3cret!"
    assert hashed.startswith("$2")
    assert verify_password("s3cret!", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("s3cret!", "garbage")
    assert not verify_password("", hashed)


def test_hash_uses_configured_cost() -> None:
    assert hash_password("pw", rounds=5).startswith("$2b$05$")


@pytest.mark.parametrize("value,expected", [
    ("7d", timedelta(days=7)),
    ("12h", timedelta(hours=12)),
    ("30m", timedelta(minutes=30)),
    ("45s", timedelta(seconds=45)),
    ("3600", timedelta(hours=1)),
    (60, timedelta(minutes=1)),
])
def test_parse_expires_in(value, expected) -> None:
    assert parse_expires_in(value) == expected


def test_parse_expires_in_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        parse_expires_in("forever")


def test_token_carries_only_user_id() -> None:
    payload = verify_token(generate_token(42))
    assert payload["userId"] == 42
    assert set(payload) == {"userId", "iat", "exp"}
    assert payload["exp"] - payload["iat"] == 7 * 24 * 3600


def test_token_with_wrong_signature() -> None:
    forged = jwt.encode({"userId": 1}, "not-the-secret", algorithm=config.JWT_ALGORITHM)
    with pytest.raises(TokenError):
        verify_token(forged)


def test_empty_token() -> None:
    with pytest.raises(TokenError):
        verify_token("")


def test_like_pattern_escapes_wildcards() -> None:
    assert like_pattern("car") == "%car%"
    assert like_pattern("50%_off") == "%50\\%\\_off%"


def test_normalize_page() -> None:
    assert normalize_page(None, None) == (1, 14)
    assert normalize_page(0, -1) == (1, 14)
    assert normalize_page(3, 5) == (3, 5)
    assert normalize_page(2 ** 70, 2 ** 70) == (1_000_000, 100)
