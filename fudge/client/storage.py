"""Хранилище сессии клиента: токен + профиль пользователя (аналог localStorage)."""
import json
import logging
from pathlib import Path
from typing import Optional

from fudge.client.models import User

logger = logging.getLogger(__name__)

DEFAULT_SESSION_FILE = Path.home() / ".fudge" / "session.json"


class MemorySessionStore:
    """Сессия в памяти процесса: для тестов и одноразовых скриптов."""

    def __init__(self, token: Optional[str] = None, user: Optional[User] = None):
        self.token = token
        self.user = user

    def save(self, token: str, user: User) -> None:
        self.token = token
        self.user = user

    def clear(self) -> None:
        self.token = None
        self.user = None


class FileSessionStore(MemorySessionStore):
    """Сессия в JSON-файле; читается один раз при создании, пишется сразу."""

    def __init__(self, path: Optional[Path] = None):
        super().__init__()
        self.path = Path(path) if path else DEFAULT_SESSION_FILE
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("session file must hold a JSON object")
            self.token = data.get("token")
            self.user = User.model_validate(data["user"]) if data.get("user") else None
        except (OSError, ValueError, KeyError) as e:
            # битый файл = нет сессии
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            self.token = None
            self.user = None

    def save(self, token: str, user: User) -> None:
        super().save(token, user)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(
                {"token": token, "user": user.model_dump(mode="json", by_alias=True)},
                f, indent=2, ensure_ascii=False,
            )

    def clear(self) -> None:
        super().clear()
        if self.path.exists():
            self.path.unlink()
