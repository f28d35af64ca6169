"""Общие фикстуры: временная SQLite-база, клиент приложения, токены."""
import os
import tempfile
from decimal import Decimal
from pathlib import Path

# до импорта fudge: конфиг читается при импорте
_TMP_DIR = tempfile.mkdtemp(prefix="fudge-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{(Path(_TMP_DIR) / 'test.db').as_posix()}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENV"] = "test"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from fudge.db import Base, SessionLocal, engine  # noqa: E402
from fudge.main import app  # noqa: E402
from fudge.models.sweet import Sweet  # noqa: E402
from fudge.models.user import User  # noqa: E402
from fudge.utils.tokens import generate_token  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def _make_user(db, username, email, role):
    user = User(username=username, email=email, password="password", role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin(db):
    return _make_user(db, "boss", "admin@example.com", "admin")


@pytest.fixture
def customer(db):
    return _make_user(db, "sweettooth", "user@example.com", "user")


@pytest.fixture
def admin_headers(admin):
    return {"Authorization": f"Bearer {generate_token(admin.id)}"}


@pytest.fixture
def user_headers(customer):
    return {"Authorization": f"Bearer {generate_token(customer.id)}"}


@pytest.fixture
def make_sweet(db):
    def _make(name="Fudge", category="fudge", price="20", quantity=10, **extra):
        sweet = Sweet(name=name, category=category, price=Decimal(price), quantity=quantity, **extra)
        db.add(sweet)
        db.commit()
        db.refresh(sweet)
        return sweet
    return _make
