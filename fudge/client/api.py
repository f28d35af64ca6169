"""HTTP-клиент API: перехватчики запроса (токен) и ответа (401, уведомления)."""
import logging
import os
from typing import Any, Callable, List, Optional

import requests

from fudge.client.storage import MemorySessionStore

logger = logging.getLogger(__name__)

DEFAULT_API_URL = os.getenv("FUDGE_API_URL", "http://localhost:1417/api")


class ApiError(Exception):
    def __init__(self, message: str, status: Optional[int] = None, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.errors = errors or []


def _log_notify(message: str) -> None:
    logger.warning("API: %s", message)


class ApiClient:
    """
    http - requests.Session или любой объект с request(method, url, **kw)
    (в тестах туда подставляется TestClient приложения).
    notify - куда показывать сообщения об ошибках (тост в UI).
    on_unauthorized - что делать после 401 (переход на экран входа).
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        store=None,
        http=None,
        notify: Optional[Callable[[str], None]] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
    ):
        self.base_url = (base_url or DEFAULT_API_URL).rstrip("/")
        self.store = store if store is not None else MemorySessionStore()
        self.http = http if http is not None else requests.Session()
        self.notify = notify or _log_notify
        self.on_unauthorized = on_unauthorized

    # ---- перехватчик запроса ----
    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.store.token:
            headers["Authorization"] = f"Bearer {self.store.token}"
        return headers

    def request(self, method: str, path: str, params: Optional[dict] = None, json: Any = None) -> dict:
        url = f"{self.base_url}/{path.lstrip('/')}"
        kwargs = {"headers": self._headers()}
        if params:
            kwargs["params"] = {k: v for k, v in params.items() if v is not None and v != ""}
        if json is not None:
            kwargs["json"] = json

        try:
            response = self.http.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            self.notify("Network error")
            raise ApiError("Network error") from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if 200 <= response.status_code < 300:
            return body
        return self._handle_error(response.status_code, body)

    # ---- перехватчик ответа ----
    def _handle_error(self, status: int, body: dict):
        message = body.get("message") or "An error occurred"
        if status == 401:
            # сессия больше не действительна
            self.store.clear()
            if self.on_unauthorized:
                self.on_unauthorized()
        self.notify(message)
        raise ApiError(message, status=status, errors=body.get("errors"))

    def get(self, path: str, params: Optional[dict] = None) -> dict:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> dict:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> dict:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> dict:
        return self.request("DELETE", path)
