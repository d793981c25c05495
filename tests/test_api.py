"""
HTTP boundary tests for /api/v1/customers

Checks status codes, error codes and that the credential never appears in
a response body.
"""

import httpx
import pytest

from exceptions import (
    CustomerAuthenticationError,
    CustomerInactiveError,
    CustomerNotFoundError,
    InvalidCustomerDataError,
)
from main import app, get_customer_service

BASE = "/api/v1/customers"

MARIA = {
    "name": "Maria Lopez",
    "identification": "2222222222",
    "password": "pass123",
}


class ExplodingService:
    async def find_all_customers(self):
        raise RuntimeError("connection reset by peer at 10.0.0.12")


class RaisingService:
    def __init__(self, error):
        self.error = error

    async def find_customer_by_id(self, customer_id):
        raise self.error


@pytest.mark.asyncio
async def test_create_returns_201_without_credential(client):
    response = await client.post(BASE, json=MARIA)

    assert response.status_code == 201
    body = response.json()
    assert body["id"] is not None
    assert body["status"] is True
    assert body["identification"] == "2222222222"
    assert "password" not in body


@pytest.mark.asyncio
async def test_duplicate_create_returns_409(client):
    await client.post(BASE, json=MARIA)

    response = await client.post(BASE, json=MARIA)

    assert response.status_code == 409
    assert response.json()["error"] == "CUSTOMER_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_create_validation_returns_400(client):
    response = await client.post(BASE, json={**MARIA, "identification": "12AB"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert any("identification" in e["field"] for e in body["details"]["errors"])


@pytest.mark.asyncio
async def test_get_by_id_and_identification(client):
    created = (await client.post(BASE, json=MARIA)).json()

    by_id = await client.get(f"{BASE}/{created['id']}")
    by_identification = await client.get(f"{BASE}/identification/2222222222")

    assert by_id.status_code == 200
    assert by_id.json() == by_identification.json()


@pytest.mark.asyncio
async def test_missing_customer_returns_404(client):
    response = await client.get(f"{BASE}/999")

    assert response.status_code == 404
    assert response.json()["error"] == "CUSTOMER_NOT_FOUND"
    assert (await client.get(f"{BASE}/identification/9999999999")).status_code == 404


@pytest.mark.asyncio
async def test_list_customers(client):
    assert (await client.get(BASE)).json() == []

    await client.post(BASE, json=MARIA)
    await client.post(BASE, json={**MARIA, "identification": "3333333333", "name": "Jose Perez"})

    names = [c["name"] for c in (await client.get(BASE)).json()]
    assert names == ["Maria Lopez", "Jose Perez"]


@pytest.mark.asyncio
async def test_update_is_partial(client):
    created = (await client.post(BASE, json={**MARIA, "phone": "0999999999"})).json()

    response = await client.put(f"{BASE}/{created['id']}", json={"address": "Quito"})

    assert response.status_code == 200
    body = response.json()
    assert body["address"] == "Quito"
    assert body["phone"] == "0999999999"
    assert body["identification"] == "2222222222"


@pytest.mark.asyncio
async def test_update_rejects_identification(client):
    created = (await client.post(BASE, json=MARIA)).json()

    response = await client.put(f"{BASE}/{created['id']}", json={"identification": "3333333333"})

    assert response.status_code == 400
    assert (await client.get(f"{BASE}/{created['id']}")).json()["identification"] == "2222222222"


@pytest.mark.asyncio
async def test_soft_then_hard_delete(client):
    created = (await client.post(BASE, json=MARIA)).json()
    url = f"{BASE}/{created['id']}"

    soft = await client.delete(url)
    assert soft.status_code == 204
    assert (await client.get(url)).json()["status"] is False

    hard = await client.delete(f"{url}/hard")
    assert hard.status_code == 204
    assert (await client.get(url)).status_code == 404
    assert (await client.get(f"{BASE}/identification/2222222222")).status_code == 404


@pytest.mark.asyncio
async def test_delete_missing_returns_404(client):
    assert (await client.delete(f"{BASE}/12")).status_code == 404
    assert (await client.delete(f"{BASE}/12/hard")).status_code == 404


@pytest.mark.asyncio
async def test_unexpected_error_is_generic():
    app.dependency_overrides[get_customer_service] = lambda: ExplodingService()
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
            response = await http_client.get(BASE)
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "INTERNAL_SERVER_ERROR"
    assert "10.0.0.12" not in response.text


@pytest.mark.asyncio
@pytest.mark.parametrize("error, status_code, code", [
    (CustomerNotFoundError("Customer not found with ID: 1"), 404, "CUSTOMER_NOT_FOUND"),
    (InvalidCustomerDataError("Name and identification cannot be blank"), 400, "INVALID_CUSTOMER_DATA"),
    (CustomerInactiveError("Customer 1 is inactive"), 403, "CUSTOMER_INACTIVE"),
    (CustomerAuthenticationError("Invalid credentials"), 401, "AUTHENTICATION_FAILED"),
])
async def test_domain_errors_map_to_status_and_code(error, status_code, code):
    app.dependency_overrides[get_customer_service] = lambda: RaisingService(error)
    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
            response = await http_client.get(f"{BASE}/1")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == status_code
    body = response.json()
    assert body["error"] == code
    assert body["message"] == str(error)


@pytest.mark.asyncio
async def test_id_beyond_key_range_returns_404(client):
    await client.post(BASE, json=MARIA)
    url = f"{BASE}/{10**25}"

    for response in (
        await client.get(url),
        await client.put(url, json={"address": "Quito"}),
        await client.delete(url),
        await client.delete(f"{url}/hard"),
    ):
        assert response.status_code == 404
        assert response.json()["error"] == "CUSTOMER_NOT_FOUND"

    assert (await client.get(f"{BASE}/0")).status_code == 404


@pytest.mark.asyncio
async def test_update_name_is_trimmed_like_create(client):
    created = (await client.post(BASE, json=MARIA)).json()
    url = f"{BASE}/{created['id']}"

    padded = await client.put(url, json={"name": "  Ana Ruiz  "})
    assert padded.status_code == 200
    assert padded.json()["name"] == "Ana Ruiz"

    for name in (" A ", "   "):
        response = await client.put(url, json={"name": name})
        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    assert (await client.get(url)).json()["name"] == "Ana Ruiz"
