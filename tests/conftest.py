"""
Pytest configuration and fixtures for the Mercado API tests.
"""

import os
import shutil
import tempfile
from typing import AsyncGenerator, Dict

import pytest

# Set up test environment variables before importing anything else
_TEST_DIR = tempfile.mkdtemp(prefix="mercado-tests-")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only")
os.environ["DATABASE_URL_OVERRIDE"] = f"sqlite+aiosqlite:///{_TEST_DIR}/test_mercado.db"
os.environ["PUBLIC_DIR"] = os.path.join(_TEST_DIR, "public")
os.environ["SEED_FILE_PATH"] = os.path.join(_TEST_DIR, "categories.seed.json")
os.environ["LOG_LEVEL"] = "WARNING"

from httpx import ASGITransport, AsyncClient  # noqa: E402

from mercado.core.config import settings  # noqa: E402
from mercado.db.database import AsyncSessionLocal, Base, engine  # noqa: E402
from mercado.db.init_db import init_db  # noqa: E402
from mercado.main import app  # noqa: E402
from mercado.services.session_service import session_store  # noqa: E402

ADMIN_PASSWORD = "admin123"


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_TEST_DIR, ignore_errors=True)


@pytest.fixture
async def prepared_db() -> AsyncGenerator[None, None]:
    """Fresh schema with default settings for every test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await init_db(engine, AsyncSessionLocal)
    settings.UPLOADS_DIR.mkdir(parents=True, exist_ok=True)
    session_store.clear()
    yield
    session_store.clear()
    if settings.SEED_FILE_PATH.exists():
        settings.SEED_FILE_PATH.unlink()
    await engine.dispose()


@pytest.fixture
async def db_session(prepared_db) -> AsyncGenerator:
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def client(prepared_db) -> AsyncGenerator[AsyncClient, None]:
    """Anonymous HTTP client bound to the ASGI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def admin_client(client: AsyncClient) -> AsyncClient:
    """Same client after a successful admin login."""
    response = await client.post("/api/v1/auth/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return client


async def _create_category(client: AsyncClient, name: str, level: int, parent_id: int = 0) -> int:
    response = await client.post(
        "/api/v1/categories", json={"name": name, "level": level, "parent_id": parent_id}
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


@pytest.fixture
async def catalog(admin_client: AsyncClient) -> Dict[str, int]:
    """
    Small three-level catalog:

        RPG (general)
        ├── Equipamento (category)
        │   ├── Espadas (subcategory)
        │   └── Arcos (subcategory)
        └── Magia (category)
        Decoração (general)
    """
    rpg = await _create_category(admin_client, "RPG", 1)
    equipamento = await _create_category(admin_client, "Equipamento", 2, rpg)
    espadas = await _create_category(admin_client, "Espadas", 3, equipamento)
    arcos = await _create_category(admin_client, "Arcos", 3, equipamento)
    magia = await _create_category(admin_client, "Magia", 2, rpg)
    decoracao = await _create_category(admin_client, "Decoração", 1)
    return {
        "rpg": rpg,
        "equipamento": equipamento,
        "espadas": espadas,
        "arcos": arcos,
        "magia": magia,
        "decoracao": decoracao,
    }


@pytest.fixture
def make_category(admin_client: AsyncClient):
    """Factory that creates a category through the API and returns its id."""

    async def _make(name: str, level: int, parent_id: int = 0) -> int:
        return await _create_category(admin_client, name, level, parent_id)

    return _make
