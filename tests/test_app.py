"""Обвязка приложения: health, 404, формат ошибок, seed."""
from fudge.models.sweet import Sweet
from fudge.models.user import User
from fudge.seed import SAMPLE_SWEETS, ensure_admin, seed_sweets


def test_health(client) -> None:
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "OK"}


def test_unknown_route_returns_envelope(client) -> None:
    res = client.get("/api/nothing-here")
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Route not found"}


def test_validation_errors_use_envelope(client) -> None:
    res = client.post("/api/auth/login", json={"email": "a@b.c"})
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert any(e.startswith("password") for e in body["errors"])


def test_ensure_admin_creates_and_promotes(db) -> None:
    admin = ensure_admin(db, username="root", email="Root@Fudge.local", password="topsecret")
    assert admin.role == "admin"
    assert admin.email == "root@fudge.local"
    assert admin.check_password("topsecret")

    # повторный вызов не плодит пользователей
    again = ensure_admin(db, email="root@fudge.local")
    assert again.id == admin.id
    assert db.query(User).count() == 1


def test_ensure_admin_promotes_existing_user(db, customer) -> None:
    promoted = ensure_admin(db, email=customer.email)
    assert promoted.id == customer.id
    assert promoted.role == "admin"


def test_seed_sweets_only_into_empty_catalog(db) -> None:
    assert seed_sweets(db) == len(SAMPLE_SWEETS)
    assert seed_sweets(db) == 0
    assert db.query(Sweet).count() == len(SAMPLE_SWEETS)
    categories = {s.category for s in db.query(Sweet).all()}
    assert "hard-candy" in categories


def test_request_log_middleware(caplog) -> None:
    from fastapi import FastAPI
    from fastapi.testclient import TestClient

    from fudge.middleware.request_log import RequestLogMiddleware

    dev_app = FastAPI()
    dev_app.add_middleware(RequestLogMiddleware)

    @dev_app.get("/ping")
    def ping():
        return {"ok": True}

    with caplog.at_level("INFO", logger="fudge.requests"):
        assert TestClient(dev_app).get("/ping").status_code == 200
    assert any("GET /ping 200" in r.getMessage() for r in caplog.records)


def _app_raising(orig: Exception):
    from fastapi import FastAPI
    from sqlalchemy.exc import IntegrityError

    from fudge.errors import install_error_handlers

    broken = FastAPI()
    install_error_handlers(broken)

    @broken.get("/boom")
    def boom():
        raise IntegrityError("INSERT INTO sweets ...", {}, orig)

    return broken


def test_unique_violation_reports_duplicate() -> None:
    from fastapi.testclient import TestClient

    res = TestClient(_app_raising(Exception("UNIQUE constraint failed: users.email"))).get("/boom")
    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "Duplicate field value entered"}


def test_other_integrity_errors_are_not_duplicates() -> None:
    from fastapi.testclient import TestClient

    res = TestClient(_app_raising(Exception("CHECK constraint failed: ck_sweets_price_positive"))).get("/boom")
    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "Validation failed"}
