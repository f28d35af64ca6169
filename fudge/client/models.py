"""Типы ответов API на стороне клиента."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _ApiModel(BaseModel):
    # на проводе camelCase (imageUrl, createdAt ...), в Python - snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class User(_ApiModel):
    id: int
    username: str
    email: str
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class Sweet(_ApiModel):
    id: int
    name: str
    category: str
    price: float
    quantity: int = 0
    description: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def in_stock(self) -> bool:
        return self.quantity > 0


class Pagination(_ApiModel):
    page: int
    limit: int
    total: int
    pages: int


class SweetPage(_ApiModel):
    data: List[Sweet] = Field(default_factory=list)
    pagination: Pagination


class AuthResult(_ApiModel):
    user: User
    token: str


class StockMovement(_ApiModel):
    id: int
    sweet_id: int
    sweet_name: str
    kind: str
    delta: int
    old_quantity: int
    new_quantity: int
    user_id: Optional[int] = None
    username: Optional[str] = None
    created_at: Optional[datetime] = None


class SearchFilters(_ApiModel):
    name: Optional[str] = None
    category: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    page: Optional[int] = None
    limit: Optional[int] = None

    def to_params(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)

    def is_empty(self) -> bool:
        return not self.to_params()
