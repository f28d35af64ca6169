import math
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Query

from fudge import config
from fudge.models.sweet import Sweet


def _norm(s: Optional[str]) -> str:
    return (s or "").strip()


def like_pattern(q: str) -> str:
    """Подстрока для ILIKE: экранируем %, _ и сам escape-символ"""
    escaped = q.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def normalize_page(page: Optional[int], limit: Optional[int]) -> Tuple[int, int]:
    """Непозитивные/пустые значения -> значения по умолчанию (1 и 14), слишком большие -> потолок"""
    page = min(page, config.MAX_PAGE) if page and page > 0 else config.DEFAULT_PAGE
    limit = min(limit, config.MAX_PAGE_LIMIT) if limit and limit > 0 else config.DEFAULT_PAGE_LIMIT
    return page, limit


def sweet_filters(
    name: Optional[str] = None,
    category: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
) -> List[Any]:
    """
    Условия WHERE для поиска. Не переданный фильтр = нет ограничения:
      name      - подстрока без учёта регистра
      category  - точное совпадение (категории храним в нижнем регистре)
      min/max   - включительные границы цены
    """
    clauses = []
    name = _norm(name)
    if name:
        clauses.append(Sweet.name.ilike(like_pattern(name), escape="\\"))

    category = _norm(category).lower()
    if category:
        clauses.append(Sweet.category == category)

    if min_price is not None:
        clauses.append(Sweet.price >= min_price)
    if max_price is not None:
        clauses.append(Sweet.price <= max_price)
    return clauses


def paginate(query: Query, page: int, limit: int) -> Tuple[List[Any], Dict[str, int]]:
    """Страница + {page, limit, total, pages}; порядок - по id (порядок вставки)."""
    total = query.order_by(None).count()
    items = (
        query.order_by(Sweet.id.asc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return items, {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": math.ceil(total / limit) if limit else 0,
    }
