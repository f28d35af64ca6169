import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from sqlalchemy import update
from sqlalchemy.orm import Session

from fudge.errors import BadRequest, InsufficientStock, NotFound
from fudge.models.sweet import Sweet
from fudge.models.stock_movement import StockMovement
from fudge.models.user import User
from fudge.schemas import SweetCreate, SweetUpdate
from fudge.utils.enums import MovementKind
from fudge.utils.search_utils import normalize_page, paginate, sweet_filters

logger = logging.getLogger(__name__)


def _money(value) -> Decimal:
    return Decimal(str(value)).quantize(Decimal("0.01"))


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def get_sweet(db: Session, sweet_id: int) -> Sweet:
    sweet = db.get(Sweet, sweet_id)
    if not sweet:
        raise NotFound("Sweet not found")
    return sweet


def create_sweet(db: Session, payload: SweetCreate) -> Sweet:
    data = payload.model_dump()
    data["price"] = _money(data["price"])
    sweet = Sweet(**data)
    db.add(sweet)
    db.commit()
    db.refresh(sweet)
    logger.info("Sweet #%s '%s' created (qty=%s)", sweet.id, sweet.name, sweet.quantity)
    return sweet


def list_sweets(db: Session, page: Optional[int] = None, limit: Optional[int] = None) -> Tuple[List[Sweet], Dict[str, int]]:
    page, limit = normalize_page(page, limit)
    return paginate(db.query(Sweet), page, limit)


def search_sweets(
    db: Session,
    name: Optional[str] = None,
    category: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
) -> Tuple[List[Sweet], Dict[str, int]]:
    page, limit = normalize_page(page, limit)
    query = db.query(Sweet).filter(*sweet_filters(name, category, min_price, max_price))
    return paginate(query, page, limit)


def update_sweet(db: Session, sweet_id: int, payload: SweetUpdate) -> Sweet:
    """Частичное обновление: меняем только переданные поля."""
    sweet = get_sweet(db, sweet_id)
    data = payload.model_dump(exclude_unset=True)
    if "price" in data:
        data["price"] = _money(data["price"])
    for field, value in data.items():
        setattr(sweet, field, value)
    db.commit()
    db.refresh(sweet)
    return sweet


def delete_sweet(db: Session, sweet_id: int) -> None:
    sweet = get_sweet(db, sweet_id)
    db.delete(sweet)
    db.commit()
    logger.info("Sweet #%s deleted", sweet_id)


def _record_movement(db: Session, sweet: Sweet, kind: MovementKind, delta: int, user: Optional[User]) -> StockMovement:
    # sweet уже с новым остатком
    new_qty = int(sweet.quantity)
    old_qty = new_qty + delta if kind == MovementKind.PURCHASE else new_qty - delta
    movement = StockMovement(
        sweet_id=sweet.id,
        sweet_name=sweet.name,
        kind=kind.value,
        delta=delta,
        old_quantity=old_qty,
        new_quantity=new_qty,
        user_id=user.id if user else None,
        username=user.username if user else None,
    )
    db.add(movement)
    return movement


def purchase_sweet(db: Session, sweet_id: int, quantity: int = 1, user: Optional[User] = None) -> Sweet:
    """
    Списание одним условным UPDATE: "уменьши, если остаток >= quantity".
    Не совпала ни одна строка -> либо товара нет (404), либо не хватает (400).
    """
    if not _is_positive_int(quantity):
        raise BadRequest("Invalid quantity")

    result = db.execute(
        update(Sweet)
        .where(Sweet.id == sweet_id, Sweet.quantity >= quantity)
        .values(quantity=Sweet.quantity - quantity, updated_at=datetime.utcnow())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        get_sweet(db, sweet_id)
        raise InsufficientStock("Insufficient quantity in stock")

    sweet = db.get(Sweet, sweet_id, populate_existing=True)
    _record_movement(db, sweet, MovementKind.PURCHASE, quantity, user)
    db.commit()
    db.refresh(sweet)
    logger.info(
        "Purchase: %s x '%s' (#%s) by %s, left %s",
        quantity, sweet.name, sweet.id, user.username if user else "-", sweet.quantity,
    )
    return sweet


def restock_sweet(db: Session, sweet_id: int, quantity, user: Optional[User] = None) -> Sweet:
    if not _is_positive_int(quantity):
        raise BadRequest("Invalid quantity")

    result = db.execute(
        update(Sweet)
        .where(Sweet.id == sweet_id)
        .values(quantity=Sweet.quantity + quantity, updated_at=datetime.utcnow())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFound("Sweet not found")

    sweet = db.get(Sweet, sweet_id, populate_existing=True)
    _record_movement(db, sweet, MovementKind.RESTOCK, quantity, user)
    db.commit()
    db.refresh(sweet)
    logger.info("Restock: +%s '%s' (#%s), now %s", quantity, sweet.name, sweet.id, sweet.quantity)
    return sweet


def list_movements(db: Session, sweet_id: int) -> List[StockMovement]:
    return (
        db.query(StockMovement)
        .filter(StockMovement.sweet_id == sweet_id)
        .order_by(StockMovement.created_at.desc(), StockMovement.id.desc())
        .all()
    )
