from typing import List, Optional, Union

from pydantic import BaseModel

from fudge.client.api import ApiClient
from fudge.client.models import AuthResult, SearchFilters, StockMovement, Sweet, SweetPage, User


def _payload(data: Union[dict, BaseModel]) -> dict:
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True, exclude_unset=True, mode="json")
    return dict(data)


class AuthService:
    def __init__(self, api: ApiClient):
        self.api = api

    def login(self, email: str, password: str) -> AuthResult:
        body = self.api.post("/auth/login", {"email": email, "password": password})
        return AuthResult.model_validate(body["data"])

    def register(self, username: str, email: str, password: str, role: Optional[str] = None) -> AuthResult:
        payload = {"username": username, "email": email, "password": password}
        if role:
            payload["role"] = role
        body = self.api.post("/auth/register", payload)
        return AuthResult.model_validate(body["data"])

    def me(self) -> User:
        return User.model_validate(self.api.get("/auth/me")["data"])


class SweetsService:
    def __init__(self, api: ApiClient):
        self.api = api

    def list(self, page: Optional[int] = None, limit: Optional[int] = None) -> SweetPage:
        body = self.api.get("/sweets", params={"page": page, "limit": limit})
        return SweetPage.model_validate(body["data"])

    def search(self, filters: Union[SearchFilters, dict]) -> SweetPage:
        if not isinstance(filters, SearchFilters):
            filters = SearchFilters.model_validate(filters)
        body = self.api.get("/sweets/search", params=filters.to_params())
        return SweetPage.model_validate(body["data"])

    def get(self, sweet_id: int) -> Sweet:
        return Sweet.model_validate(self.api.get(f"/sweets/{sweet_id}")["data"])

    def create(self, data: Union[dict, BaseModel]) -> Sweet:
        return Sweet.model_validate(self.api.post("/sweets", _payload(data))["data"])

    def update(self, sweet_id: int, data: Union[dict, BaseModel]) -> Sweet:
        return Sweet.model_validate(self.api.put(f"/sweets/{sweet_id}", _payload(data))["data"])

    def delete(self, sweet_id: int) -> None:
        self.api.delete(f"/sweets/{sweet_id}")

    def purchase(self, sweet_id: int, quantity: int = 1) -> Sweet:
        body = self.api.post(f"/sweets/{sweet_id}/purchase", {"quantity": quantity})
        return Sweet.model_validate(body["data"])

    def restock(self, sweet_id: int, quantity: int) -> Sweet:
        body = self.api.post(f"/sweets/{sweet_id}/restock", {"quantity": quantity})
        return Sweet.model_validate(body["data"])

    def movements(self, sweet_id: int) -> List[StockMovement]:
        body = self.api.get(f"/sweets/{sweet_id}/movements")
        return [StockMovement.model_validate(m) for m in body.get("data") or []]
