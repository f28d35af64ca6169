# fudge/models/stock_movement.py
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from fudge.db import Base


class StockMovement(Base):
    """Журнал движения остатков: одна запись на покупку или пополнение.

    sweet_id / sweet_name / username копируются, а не ссылаются FK,
    чтобы история переживала удаление товара.
    """
    __tablename__ = "stock_movements"

    id = Column(Integer, primary_key=True)
    sweet_id = Column(Integer, nullable=False, index=True)
    sweet_name = Column(String(64), nullable=False)

    # purchase | restock
    kind = Column(String(16), nullable=False)

    delta = Column(Integer, nullable=False)        # сколько штук ушло/пришло
    old_quantity = Column(Integer, nullable=False)
    new_quantity = Column(Integer, nullable=False)

    user_id = Column(Integer, nullable=True)
    username = Column(String(30), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
