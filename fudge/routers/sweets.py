from typing import Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from fudge.db import get_db
from fudge.errors import BadRequest, failure_message
from fudge.middleware.auth import authenticate, require_admin
from fudge.models.user import User
from fudge.schemas import (
    PurchaseRequest,
    RestockRequest,
    StockMovementOut,
    SweetCreate,
    SweetUpdate,
    dump_sweet,
    envelope,
)
from fudge.services import sweets as sweets_service

# все маршруты каталога - только с токеном
router = APIRouter(prefix="/api/sweets", tags=["sweets"], dependencies=[Depends(authenticate)])


def _to_int(value: Optional[str]) -> Optional[int]:
    """page/limit: мусор -> None (дальше подставится значение по умолчанию)"""
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _to_price(value: Optional[str], field: str) -> Optional[float]:
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError:
        raise BadRequest("Invalid price filter", errors=[f"{field}: must be a number"])


def _page_response(message: str, items, pagination) -> dict:
    return envelope(message, {
        "data": [dump_sweet(s) for s in items],
        "pagination": pagination,
    })


# =========================
# Чтение
# =========================

@router.get("")
def get_all_sweets(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    with failure_message(db, "Failed to retrieve sweets"):
        items, pagination = sweets_service.list_sweets(db, _to_int(page), _to_int(limit))
    return _page_response("Sweets retrieved successfully", items, pagination)


@router.get("/search")
def search_sweets(
    name: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    with failure_message(db, "Search failed"):
        items, pagination = sweets_service.search_sweets(
            db,
            name=name,
            category=category,
            min_price=_to_price(min_price, "minPrice"),
            max_price=_to_price(max_price, "maxPrice"),
            page=_to_int(page),
            limit=_to_int(limit),
        )
    return _page_response("Search results retrieved successfully", items, pagination)


@router.get("/{sweet_id}")
def get_sweet(sweet_id: int, db: Session = Depends(get_db)):
    with failure_message(db, "Failed to retrieve sweet"):
        sweet = sweets_service.get_sweet(db, sweet_id)
    return envelope("Sweet retrieved successfully", dump_sweet(sweet))


# =========================
# Админка
# =========================

@router.post("", status_code=201)
def create_sweet(
    payload: SweetCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    with failure_message(db, "Failed to create sweet"):
        sweet = sweets_service.create_sweet(db, payload)
    return envelope("Sweet created successfully", dump_sweet(sweet))


@router.put("/{sweet_id}")
@router.post("/{sweet_id}")
def update_sweet(
    sweet_id: int,
    payload: SweetUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    with failure_message(db, "Failed to update sweet"):
        sweet = sweets_service.update_sweet(db, sweet_id, payload)
    return envelope("Sweet updated successfully", dump_sweet(sweet))


@router.delete("/{sweet_id}")
def delete_sweet(
    sweet_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    with failure_message(db, "Failed to delete sweet"):
        sweets_service.delete_sweet(db, sweet_id)
    return envelope("Sweet deleted successfully")


@router.post("/{sweet_id}/restock")
def restock_sweet(
    sweet_id: int,
    payload: Optional[RestockRequest] = Body(None),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    quantity = payload.quantity if payload else None
    with failure_message(db, "Restock failed"):
        sweet = sweets_service.restock_sweet(db, sweet_id, quantity, user=admin)
    return envelope(f"Successfully restocked {quantity} {sweet.name}(s)", dump_sweet(sweet))


@router.get("/{sweet_id}/movements")
def list_movements(
    sweet_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    with failure_message(db, "Failed to retrieve stock movements"):
        movements = sweets_service.list_movements(db, sweet_id)
    return envelope("Stock movements retrieved successfully", [
        StockMovementOut.model_validate(m).model_dump(by_alias=True, mode="json")
        for m in movements
    ])


# =========================
# Покупка
# =========================

@router.post("/{sweet_id}/purchase")
def purchase_sweet(
    sweet_id: int,
    payload: Optional[PurchaseRequest] = Body(None),
    user: User = Depends(authenticate),
    db: Session = Depends(get_db),
):
    quantity = payload.quantity if payload else 1
    with failure_message(db, "Purchase failed"):
        sweet = sweets_service.purchase_sweet(db, sweet_id, quantity, user=user)
    return envelope(f"Successfully purchased {quantity} {sweet.name}(s)", dump_sweet(sweet))
