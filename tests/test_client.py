"""Клиент: сервисы, сессия и каталог поверх настоящего приложения (TestClient)."""
import pytest
import requests

from fudge.client import (
    ApiClient,
    ApiError,
    AuthSession,
    FileSessionStore,
    MemorySessionStore,
    SearchFilters,
    SweetCatalog,
    SweetsService,
    User,
)


@pytest.fixture
def notes():
    return []


@pytest.fixture
def api(client, notes):
    return ApiClient(base_url="http://testserver/api", http=client, notify=notes.append)


def test_register_and_login_through_session(api, notes) -> None:
    session = AuthSession(api)
    assert session.load() is None
    assert session.is_loading is False
    assert not session.is_authenticated

    user = session.register("candyfan", "fan@example.com", "password")
    assert user.role == "user"
    assert session.is_authenticated
    assert api.store.token

    session.logout()
    assert not session.is_authenticated
    assert api.store.token is None

    session.login("fan@example.com", "password")
    assert session.user.email == "fan@example.com"
    assert notes == ["Registration successful!", "Logged out successfully", "Login successful!"]


def test_unauthorized_clears_session_and_redirects(client, notes, customer) -> None:
    redirected = []
    store = MemorySessionStore(token="stale-token", user=User(id=customer.id, username="x", email="x@example.com"))
    api = ApiClient(
        base_url="http://testserver/api",
        http=client,
        store=store,
        notify=notes.append,
        on_unauthorized=lambda: redirected.append("/login"),
    )
    session = AuthSession(api)
    assert session.is_authenticated

    with pytest.raises(ApiError) as exc:
        SweetsService(api).list()
    assert exc.value.status == 401
    assert store.token is None
    assert not session.is_authenticated
    assert redirected == ["/login"]
    assert notes == ["Invalid token"]


def test_server_message_is_surfaced(api, notes, admin) -> None:
    AuthSession(api).login("admin@example.com", "password")
    with pytest.raises(ApiError) as exc:
        SweetsService(api).restock(12345, 3)
    assert exc.value.status == 404
    assert exc.value.message == "Sweet not found"
    assert notes[-1] == "Sweet not found"
    # 404 не выкидывает из сессии
    assert api.store.token


def test_network_error(notes) -> None:
    class Broken:
        def request(self, method, url, **kwargs):
            raise requests.ConnectionError("connection refused")

    api = ApiClient(base_url="http://nowhere/api", http=Broken(), notify=notes.append)
    with pytest.raises(ApiError) as exc:
        SweetsService(api).list()
    assert exc.value.message == "Network error"
    assert exc.value.status is None
    assert notes == ["Network error"]


def test_catalog_state_follows_operations(api, admin) -> None:
    AuthSession(api).login("admin@example.com", "password")
    catalog = SweetCatalog(SweetsService(api))

    assert catalog.fetch() == []
    assert catalog.pagination.total == 0

    fudge = catalog.create({"name": "Vanilla Fudge", "category": "fudge", "price": 4.5, "quantity": 3})
    mint = catalog.create({"name": "Mint Humbug", "category": "mint", "price": 1, "quantity": 0})
    assert [s.name for s in catalog.sweets] == ["Mint Humbug", "Vanilla Fudge"]

    assert catalog.purchase(fudge.id, 2).quantity == 1
    assert catalog.restock(mint.id, 5).quantity == 5
    assert {s.name: s.quantity for s in catalog.sweets} == {"Mint Humbug": 5, "Vanilla Fudge": 1}

    catalog.update(fudge.id, {"price": 5})
    assert next(s for s in catalog.sweets if s.id == fudge.id).price == 5

    catalog.delete(mint.id)
    assert [s.id for s in catalog.sweets] == [fudge.id]

    catalog.fetch(SearchFilters(category="mint"))
    assert catalog.sweets == []
    catalog.fetch({"name": "vanilla"})
    assert [s.name for s in catalog.sweets] == ["Vanilla Fudge"]

    movements = SweetsService(api).movements(fudge.id)
    assert [m.kind for m in movements] == ["purchase"]


def test_catalog_records_error(api) -> None:
    catalog = SweetCatalog(SweetsService(api), initial_filters={"name": "fudge"})
    assert catalog.refetch() == []
    assert catalog.error == "Access token required"
    assert catalog.is_loading is False


def test_file_session_store_round_trip(tmp_path, api, customer) -> None:
    path = tmp_path / "session.json"
    api.store = FileSessionStore(path)
    AuthSession(api).login("user@example.com", "password")
    assert path.exists()

    restored = AuthSession(ApiClient(base_url="http://testserver/api", http=api.http, store=FileSessionStore(path)))
    assert restored.load().email == "user@example.com"
    assert restored.auth.me().id == customer.id

    restored.logout()
    assert not path.exists()


def test_file_session_store_ignores_corrupt_file(tmp_path) -> None:
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")
    store = FileSessionStore(path)
    assert store.token is None
    assert store.user is None


@pytest.mark.parametrize("content", ["[]", "42", '"token"', '{"token": "t", "user": [1]}'])
def test_file_session_store_ignores_non_object_json(tmp_path, content) -> None:
    path = tmp_path / "session.json"
    path.write_text(content, encoding="utf-8")
    store = FileSessionStore(path)
    assert store.token is None
    assert store.user is None
