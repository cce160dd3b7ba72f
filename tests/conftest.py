"""Test configuration and fixtures."""
import os
import itertools
from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "test")

from tenant_admin.main import app  # noqa: E402
from tenant_admin.core.database import Base, get_session_factory  # noqa: E402
from tenant_admin.core.security import create_access_token  # noqa: E402


_email_counter = itertools.count(1)


@pytest_asyncio.fixture(scope="function")
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """File-backed SQLite database per test so concurrent sessions share data."""
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    await test_engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for tests."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Create test client bound to the per-test database."""
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


def _headers(role: str, subject: str) -> dict:
    token = create_access_token(subject=subject, role=role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers() -> dict:
    return _headers("admin", "admin-1")


@pytest.fixture
def manager_headers() -> dict:
    return _headers("manager", "manager-1")


@pytest.fixture
def viewer_headers() -> dict:
    return _headers("viewer", "viewer-1")


@pytest.fixture
def tenant_payload() -> Callable[..., dict]:
    """Factory for valid create payloads; each call gets a fresh email."""
    def build(**overrides) -> dict:
        payload = {
            "name": "Acme Analytics",
            "industry": "Technology",
            "contact_email": f"ops{next(_email_counter)}@acme.io",
            "subscription_tier": "Professional",
            "compliance_level": "Standard",
            "settings": {
                "timezone": "Europe/Berlin",
                "dateFormat": "DD.MM.YYYY",
                "language": "de-DE",
                "notificationPreferences": {"email": True, "slack": True},
            },
            "metadata": {
                "industry": "Technology",
                "subIndustry": "Data Platforms",
                "companySize": "51-200",
                "region": "EMEA",
                "country": "DE",
                "primaryContact": {"name": "Greta Lang", "position": "CTO", "phone": "+49 30 1234567"},
                "tags": ["analytics", "b2b"],
            },
        }
        payload.update(overrides)
        return payload
    return build


@pytest_asyncio.fixture
async def create_tenant(client: AsyncClient, admin_headers: dict, tenant_payload) -> Callable:
    """Create a tenant through the API and return its JSON body."""
    async def create(**overrides) -> dict:
        response = await client.post("/api/tenants", headers=admin_headers, json=tenant_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()
    return create
