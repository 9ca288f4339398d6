import os
import uuid

TEST_DB_URL = "sqlite://:memory:"
os.environ["DATABASE_URL"] = TEST_DB_URL
os.environ["JWT_SECRET"] = "test-secret-for-the-suite-0123456789abcdef"
os.environ["GENERATE_SCHEMAS"] = "false"

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from taskmanager.core import db as db_module
from taskmanager.core.security import hash_password
from taskmanager.domain import UserProfile
from taskmanager.main import app
from taskmanager.models.user import User

db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest_asyncio.fixture
async def db():
    """Fresh schema for tests that talk to services or repositories directly."""
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def client(db):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


@pytest_asyncio.fixture
async def create_user(db):
    """
    Factory fixture to create users directly via ORM, bypassing registration.
    """

    async def _create_user(password: str = "UserPass!23") -> tuple[UserProfile, str]:
        user = await User.create(
            username=f"user_{uuid.uuid4().hex[:6]}",
            password_hash=hash_password(password),
        )
        return UserProfile(id=user.id, username=user.username), password

    return _create_user


@pytest_asyncio.fixture
async def auth_header_factory(client):
    """
    Helper fixture: register a fresh user through the API and return Authorization headers.
    """

    async def _get_headers(username: str | None = None, password: str = "Secret#123") -> dict[str, str]:
        username = username or f"user_{uuid.uuid4().hex[:6]}"
        reg = await client.post("/auth/register", json={"username": username, "password": password})
        assert reg.status_code == 201, reg.text
        resp = await client.post("/auth/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.text
        token = resp.json()["access_token"]
        return {"Authorization": f"Bearer {token}"}

    return _get_headers
