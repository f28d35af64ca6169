import logging

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from fudge.db import get_db
from fudge.errors import Forbidden, Unauthorized
from fudge.models.user import User
from fudge.utils.enums import UserRole
from fudge.utils.tokens import TokenError, verify_token

logger = logging.getLogger(__name__)


def _bearer_token(request: Request) -> str:
    header = request.headers.get("Authorization") or ""
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


def authenticate(request: Request, db: Session = Depends(get_db)) -> User:
    """Authorization: Bearer <token> -> пользователь в request.state.user.

    Любая ошибка -> 401, дальше запрос не идёт.
    """
    token = _bearer_token(request)
    if not token:
        raise Unauthorized("Access token required")

    try:
        payload = verify_token(token)
    except TokenError as e:
        logger.info("Rejected token on %s: %s", request.url.path, e)
        raise Unauthorized("Invalid token")

    user = db.get(User, payload["userId"]) if isinstance(payload["userId"], int) else None
    if not user:
        raise Unauthorized("Invalid token")

    request.state.user = user
    return user


def require_admin(user: User = Depends(authenticate)) -> User:
    """Только для роли admin; запускается после authenticate."""
    role = (user.role or "").strip().lower()
    if role != UserRole.ADMIN.value:
        raise Forbidden("Admin access required")
    return user
