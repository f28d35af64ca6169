from enum import Enum


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class SweetCategory(str, Enum):
    CHOCOLATE = "chocolate"
    GUMMY = "gummy"
    HARD_CANDY = "hard-candy"
    LOLLIPOP = "lollipop"
    FUDGE = "fudge"
    TOFFEE = "toffee"
    MINT = "mint"
    NOUGAT = "nougat"
    OTHER = "other"


class MovementKind(str, Enum):
    PURCHASE = "purchase"
    RESTOCK = "restock"
