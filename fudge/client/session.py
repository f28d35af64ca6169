"""Текущий пользователь клиента: явный объект, который передаётся во view-слой."""
from typing import Callable, Optional

from fudge.client.api import ApiClient
from fudge.client.models import User
from fudge.client.services import AuthService


class AuthSession:
    """
    Единственный владелец жизненного цикла токена.
    Источник правды - store клиента: если ApiClient очистил его после 401,
    сессия сразу видит, что пользователь вышел.
    """

    def __init__(self, api: ApiClient, notify: Optional[Callable[[str], None]] = None):
        self.api = api
        self.store = api.store
        self.auth = AuthService(api)
        self.notify = notify or api.notify
        self.is_loading = True

    @property
    def user(self) -> Optional[User]:
        return self.store.user if self.store.token else None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_admin(self) -> bool:
        return bool(self.user and self.user.is_admin)

    def load(self) -> Optional[User]:
        """Восстановление сессии при старте (из store)."""
        self.is_loading = False
        return self.user

    def login(self, email: str, password: str) -> User:
        result = self.auth.login(email, password)
        self.store.save(result.token, result.user)
        self.notify("Login successful!")
        return result.user

    def register(self, username: str, email: str, password: str) -> User:
        result = self.auth.register(username, email, password)
        self.store.save(result.token, result.user)
        self.notify("Registration successful!")
        return result.user

    def logout(self) -> None:
        self.store.clear()
        self.notify("Logged out successfully")
