"""End-to-end tests for the payment link endpoints over a real JSON store."""

import json
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from paylink.application.services import LinkPolicy, PaymentLinkService
from paylink.application.services.link_policy import MAX_EXPIRY_MINUTES
from paylink.config import Settings, get_settings
from paylink.infrastructure.dependencies import get_payment_link_service
from paylink.infrastructure.storage.json_link_store import JsonFileLinkStore
from paylink.main import app
from tests.fakes import START_MS, FakeClock

BASE_URL = "https://pay.example"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "links.json"


@pytest.fixture
def client(store_path: Path, clock: FakeClock):
    service = PaymentLinkService(
        JsonFileLinkStore(store_path), LinkPolicy(base_url=BASE_URL), clock=clock
    )
    app.dependency_overrides[get_payment_link_service] = lambda: service
    yield AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_create_then_validate_until_expiry(client: AsyncClient, clock: FakeClock):
    async with client:
        created = await client.post(
            "/api/v1/payment-links", json={"amount": "10.00", "expiryMinutes": 1}
        )
        assert created.status_code == 201
        body = created.json()
        assert body["expiresAt"] == START_MS + 60_000
        assert body["link"] == f"{BASE_URL}/?amount=10.00&id={body['id']}"

        valid = await client.get("/api/v1/payment-links/validate", params={"id": body["id"]})
        assert valid.status_code == 200
        assert valid.json() == {"valid": True, "amount": "10.00", "expiresAt": body["expiresAt"]}

        clock.advance(60_001)
        expired = await client.get("/api/v1/payment-links/validate", params={"id": body["id"]})

    assert expired.status_code == 410
    assert expired.json() == {"valid": False, "reason": "expired"}


@pytest.mark.asyncio
async def test_requested_id_conflict(client: AsyncClient, store_path: Path):
    async with client:
        first = await client.post("/api/v1/payment-links", json={"amount": "5.00", "id": "promo1"})
        second = await client.post("/api/v1/payment-links", json={"amount": "6.00", "id": "promo1"})
        check = await client.get("/api/v1/payment-links/validate", params={"id": "promo1"})

    assert first.status_code == 201
    assert first.json()["id"] == "promo1"
    assert second.status_code == 409
    assert check.json()["amount"] == "5.00"
    assert json.loads(store_path.read_text("utf-8"))["promo1"]["amount"] == "5.00"


@pytest.mark.asyncio
async def test_first_run_validate_is_not_found(client: AsyncClient, store_path: Path):
    async with client:
        response = await client.get("/api/v1/payment-links/validate", params={"id": "anything"})

    assert response.status_code == 404
    assert response.json() == {"valid": False, "reason": "not found"}
    assert not store_path.exists()


@pytest.mark.asyncio
async def test_validate_without_id(client: AsyncClient):
    async with client:
        response = await client.get("/api/v1/payment-links/validate")

    assert response.status_code == 400
    assert response.json() == {"valid": False, "reason": "missing id"}


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{}, {"amount": ""}, {"amount": "abc"}, {"amount": 0}])
async def test_create_rejects_bad_amount(client: AsyncClient, payload: dict):
    async with client:
        response = await client.post("/api/v1/payment-links", json=payload)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_accepts_numeric_amount(client: AsyncClient):
    async with client:
        response = await client.post("/api/v1/payment-links", json={"amount": 12.5})
        link_id = response.json()["id"]
        check = await client.get("/api/v1/payment-links/validate", params={"id": link_id})

    assert response.status_code == 201
    assert check.json()["amount"] == "12.5"


@pytest.mark.asyncio
async def test_small_float_amount_is_stored_as_plain_decimal(client: AsyncClient, store_path: Path):
    async with client:
        response = await client.post("/api/v1/payment-links", json={"amount": 1.5e-07})

    assert response.status_code == 201
    assert "amount=0.00000015&" in response.json()["link"]
    stored = json.loads(store_path.read_text(encoding="utf-8"))
    assert stored[response.json()["id"]]["amount"] == "0.00000015"


@pytest.mark.asyncio
@pytest.mark.parametrize("expiry", [1e15, 1e308])
async def test_huge_expiry_is_clamped(client: AsyncClient, store_path: Path, expiry: float):
    async with client:
        response = await client.post(
            "/api/v1/payment-links", json={"amount": "1.00", "expiryMinutes": expiry}
        )

    assert response.status_code == 201
    assert response.json()["expiresAt"] == START_MS + MAX_EXPIRY_MINUTES * 60_000
    stored = json.loads(store_path.read_text(encoding="utf-8"))
    assert stored[response.json()["id"]]["expiresAt"] == response.json()["expiresAt"]


@pytest.mark.asyncio
async def test_corrupt_store_is_a_server_error(client: AsyncClient, store_path: Path):
    store_path.write_text("{broken", encoding="utf-8")

    async with client:
        validate = await client.get("/api/v1/payment-links/validate", params={"id": "x"})
        create = await client.post("/api/v1/payment-links", json={"amount": "1"})

    assert validate.status_code == 500
    assert validate.json() == {"valid": False, "reason": "server error"}
    assert create.status_code == 500
    assert create.json() == {"detail": "server error"}


@pytest.mark.asyncio
async def test_admin_list_disabled_by_default(client: AsyncClient):
    app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None)
    async with client:
        response = await client.get("/api/v1/admin/payment-links")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_admin_list_dumps_mapping(client: AsyncClient, clock: FakeClock):
    app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None, admin_list_enabled=True)
    async with client:
        await client.post("/api/v1/payment-links", json={"amount": "2.00", "id": "a", "expiryMinutes": 2})
        response = await client.get("/api/v1/admin/payment-links")

    assert response.status_code == 200
    assert response.json() == {
        "a": {"amount": "2.00", "createdAt": START_MS, "expiresAt": START_MS + 120_000}
    }
