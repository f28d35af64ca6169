import logging
from typing import Optional

from sqlalchemy.orm import Session

from fudge.errors import Conflict, Unauthorized
from fudge.models.user import User
from fudge.schemas import RegisterRequest, dump_user
from fudge.utils.enums import UserRole
from fudge.utils.tokens import generate_token

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == (email or "").strip().lower()).first()


def auth_result(user: User) -> dict:
    """{user: {id, username, email, role}, token} - пароль наружу не отдаём"""
    return {"user": dump_user(user), "token": generate_token(user.id)}


def register_user(db: Session, payload: RegisterRequest) -> User:
    """Регистрация. payload.role игнорируется: роль admin выдаёт только seed."""
    if get_user_by_email(db, payload.email):
        raise Conflict("User with this email already exists")

    if payload.role and payload.role.strip().lower() != UserRole.USER.value:
        logger.warning("Ignoring requested role %r for %s", payload.role, payload.email)

    user = User(
        username=payload.username,
        email=payload.email.lower(),
        password=payload.password,
        role=UserRole.USER.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User registered: #%s %s", user.id, user.email)
    return user


def login_user(db: Session, email: str, password: str) -> User:
    user = get_user_by_email(db, email)
    # одно сообщение и для неизвестного email, и для неверного пароля
    if not user or not user.check_password(password):
        logger.info("Login failed for %s", (email or "").strip().lower())
        raise Unauthorized("Invalid credentials")
    return user
