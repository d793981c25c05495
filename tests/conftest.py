"""
Shared fixtures: an in-memory SQLite database per test, the repository and
service wired to it, and an HTTP client bound to the FastAPI app
"""

import httpx
import pytest
import pytest_asyncio

from database import DatabaseManager
from main import app, get_customer_service
from repositories.customer_repository import CustomerRepository
from schemas.customer import CreateCustomerRequest
from services.customer_service import CustomerService

pytest_plugins = ('pytest_asyncio',)


@pytest_asyncio.fixture
async def database():
    """Fresh in-memory database with both tables"""
    manager = DatabaseManager("sqlite+aiosqlite:///:memory:")
    await manager.create_tables()
    yield manager
    await manager.dispose()


@pytest.fixture
def repository(database):
    return CustomerRepository(database)


@pytest.fixture
def service(repository):
    return CustomerService(repository)


@pytest_asyncio.fixture
async def client(service):
    """HTTP client whose requests are served by the test database"""
    app.dependency_overrides[get_customer_service] = lambda: service
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()


@pytest.fixture
def maria_request():
    return CreateCustomerRequest(
        name="Maria Lopez",
        gender="Female",
        identification="2222222222",
        address="Quito, La Mariscal",
        phone="0999999999",
        password="pass123",
    )
