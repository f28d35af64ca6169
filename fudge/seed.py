# fudge/seed.py - таблицы, администратор и стартовый ассортимент
import argparse
import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from fudge import config
from fudge.db import Base, SessionLocal, engine, init_db
import fudge.models  # noqa: F401  все таблицы, в т.ч. для drop_all
from fudge.models.sweet import Sweet
from fudge.models.user import User
from fudge.utils.enums import UserRole

logger = logging.getLogger(__name__)

SAMPLE_SWEETS = [
    # name, category, price, quantity, description
    ("Caramel Chocolate", "chocolate", "30.00", 25, "Milk chocolate with a soft caramel centre"),
    ("Vanilla Fudge", "fudge", "20.00", 40, "Classic butter fudge"),
    ("Sour Worms", "gummy", "12.50", 60, None),
    ("Peppermint Drops", "mint", "8.00", 80, None),
    ("Rainbow Lollipop", "lollipop", "5.00", 100, None),
    ("Almond Nougat", "nougat", "18.00", 15, "Honey nougat with roasted almonds"),
    ("Butter Toffee", "toffee", "14.00", 30, None),
    ("Lemon Drops", "hard-candy", "6.50", 70, None),
]


def ensure_admin(db: Session, username: str = None, email: str = None, password: str = None) -> User:
    """Единственный способ получить admin: регистрация роль не выдаёт."""
    email = (email or config.ADMIN_EMAIL).strip().lower()
    user = db.query(User).filter(User.email == email).first()
    if user:
        if user.role != UserRole.ADMIN.value:
            user.role = UserRole.ADMIN.value
            db.commit()
            logger.info("User %s promoted to admin", email)
        return user

    user = User(
        username=username or config.ADMIN_USERNAME,
        email=email,
        password=password or config.ADMIN_PASSWORD,
        role=UserRole.ADMIN.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Admin created: %s", email)
    return user


def seed_sweets(db: Session) -> int:
    """Стартовый ассортимент - только если каталог пуст."""
    if db.query(Sweet).count():
        return 0
    for name, category, price, qty, description in SAMPLE_SWEETS:
        db.add(Sweet(
            name=name,
            category=category,
            price=Decimal(price),
            quantity=qty,
            description=description,
        ))
    db.commit()
    logger.info("Seeded %s sweets", len(SAMPLE_SWEETS))
    return len(SAMPLE_SWEETS)


def run_seed(reset: bool = False):
    if reset:
        Base.metadata.drop_all(bind=engine)
        logger.info("All tables dropped")
    init_db()

    db = SessionLocal()
    try:
        ensure_admin(db)
        seed_sweets(db)
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(message)s")
    parser = argparse.ArgumentParser(description="Create tables, the admin user and sample sweets")
    parser.add_argument("--reset", action="store_true", help="drop all tables first")
    args = parser.parse_args()
    run_seed(reset=args.reset)
