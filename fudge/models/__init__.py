# fudge/models/__init__.py
from .user import *             # User
from .sweet import *            # Sweet
from .stock_movement import *   # StockMovement (журнал остатков)
