from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, DateTime
from fudge.db import Base
from fudge.utils.enums import UserRole
from fudge.utils.security import hash_password, verify_password


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(30), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # роль пользователя
    role: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=UserRole.USER.value  # по умолчанию покупатель
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    # пароль только на запись: в БД уходит хэш
    @property
    def password(self):
        raise AttributeError("password is write-only")

    @password.setter
    def password(self, plain: str):
        self.password_hash = hash_password(plain)

    def check_password(self, plain: str) -> bool:
        return verify_password(plain, self.password_hash)

    @property
    def is_admin(self) -> bool:
        return (self.role or "").strip().lower() == UserRole.ADMIN.value
