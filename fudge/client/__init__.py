"""Клиент API Fudge!: HTTP-сервисы, сессия пользователя, состояние каталога."""
from fudge.client.api import ApiClient, ApiError
from fudge.client.catalog import SweetCatalog
from fudge.client.models import AuthResult, Pagination, SearchFilters, StockMovement, Sweet, SweetPage, User
from fudge.client.services import AuthService, SweetsService
from fudge.client.session import AuthSession
from fudge.client.storage import FileSessionStore, MemorySessionStore

__all__ = [
    "ApiClient",
    "ApiError",
    "AuthResult",
    "AuthService",
    "AuthSession",
    "FileSessionStore",
    "MemorySessionStore",
    "Pagination",
    "SearchFilters",
    "StockMovement",
    "Sweet",
    "SweetCatalog",
    "SweetPage",
    "SweetsService",
    "User",
]
