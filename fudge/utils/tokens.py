import re
from datetime import datetime, timedelta, timezone

import jwt

from fudge import config

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


class TokenError(Exception):
    """Токен отсутствует, битый, просрочен или подпись не сходится."""


def parse_expires_in(value) -> timedelta:
    """'7d' | '12h' | '30m' | '45s' | '3600' -> timedelta"""
    if isinstance(value, (int, float)):
        return timedelta(seconds=int(value))
    m = _DURATION_RE.match(str(value or "").lower())
    if not m:
        raise ValueError(f"Bad token lifetime: {value!r}")
    amount, unit = m.groups()
    return timedelta(seconds=int(amount) * _UNITS[unit])


def generate_token(user_id: int, expires_in=None) -> str:
    """Подписанный JWT: внутри только userId + iat/exp."""
    now = datetime.now(timezone.utc)
    payload = {
        "userId": user_id,
        "iat": now,
        "exp": now + parse_expires_in(expires_in or config.JWT_EXPIRES_IN),
    }
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def verify_token(token: str) -> dict:
    if not token:
        raise TokenError("Token is missing")
    try:
        payload = jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise TokenError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenError("Invalid token") from e

    if "userId" not in payload:
        raise TokenError("Invalid token")
    return payload
