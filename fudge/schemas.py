from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import (
    AliasGenerator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from fudge import config
from fudge.utils.enums import SweetCategory


# ---------- Общий конверт ответа ----------

def envelope(message: str, data: Any = None, success: bool = True, errors: Optional[List[str]] = None) -> dict:
    """{success, message, data?, errors?} - единый формат всех ответов"""
    body = {"success": success, "message": message}
    if data is not None:
        body["data"] = data
    if errors:
        body["errors"] = errors
    return body


# ---------- Auth ----------

class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(..., min_length=6)
    # принимаем ради совместимости, но игнорируем: самостоятельная регистрация = user
    role: Optional[str] = None

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v):
        return v.strip() if isinstance(v, str) else v


class LoginRequest(BaseModel):
    email: str
    password: str


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: str


# ---------- Sweets ----------

def _lower_category(v):
    return v.strip().lower() if isinstance(v, str) else v


class SweetCreate(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        use_enum_values=True,
    )

    name: str = Field(..., min_length=1, max_length=64)
    category: SweetCategory
    # копейки не округляем молча: больше 2 знаков -> ошибка валидации
    price: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    quantity: int = Field(0, ge=0, le=config.MAX_QUANTITY)
    description: Optional[str] = Field(None, max_length=500)
    image_url: Optional[str] = None

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v):
        return _lower_category(v)


class SweetUpdate(BaseModel):
    """Частичное обновление: любое подмножество полей SweetCreate."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        use_enum_values=True,
    )

    name: Optional[str] = Field(None, min_length=1, max_length=64)
    category: Optional[SweetCategory] = None
    price: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    quantity: Optional[int] = Field(None, ge=0, le=config.MAX_QUANTITY)
    description: Optional[str] = Field(None, max_length=500)
    image_url: Optional[str] = None

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v):
        return _lower_category(v)

    @model_validator(mode="after")
    def check_required_not_null(self):
        for field in ("name", "category", "price", "quantity"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class SweetOut(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )

    id: int
    name: str
    category: str
    price: float
    quantity: int
    description: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PurchaseRequest(BaseModel):
    quantity: int = Field(1, le=config.MAX_QUANTITY)


class RestockRequest(BaseModel):
    quantity: Optional[int] = Field(None, le=config.MAX_QUANTITY)


class StockMovementOut(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )

    id: int
    sweet_id: int
    sweet_name: str
    kind: str
    delta: int
    old_quantity: int
    new_quantity: int
    user_id: Optional[int] = None
    username: Optional[str] = None
    created_at: datetime


def dump_sweet(sweet) -> dict:
    return SweetOut.model_validate(sweet).model_dump(by_alias=True, mode="json")


def dump_user(user) -> dict:
    return UserOut.model_validate(user).model_dump(mode="json")
