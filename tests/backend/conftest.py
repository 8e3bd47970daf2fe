import os
import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from notehub.api.deps import blob_store_dependency, quota_gate_dependency
from notehub.core import db as db_module
from notehub.core.quota import QuotaGate
from notehub.main import app
from notehub.services.blob_base import BlobStore, BlobStoreError


TEST_DB_URL = "sqlite://:memory:"
os.environ["DATABASE_URL"] = TEST_DB_URL
db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL


class InMemoryBlobStore(BlobStore):
    """
    Blob store double that keeps files in a dict.
    Set ``fail_with`` to an exception instance to make the next puts raise it.
    """

    def __init__(self):
        self.files: dict[str, str] = {}
        self.messages: list[str] = []
        self.fail_with: Exception | None = None
        self.put_calls = 0

    @property
    def name(self) -> str:
        return "in-memory"

    def is_available(self) -> bool:
        return True

    def public_url(self, path: str) -> str:
        return f"https://raw.example.test/owner/repo/main/{path}"

    async def put(self, path: str, content_b64: str, message: str) -> str:
        self.put_calls += 1
        if self.fail_with is not None:
            raise self.fail_with
        self.files[path] = content_b64
        self.messages.append(message)
        return self.public_url(path)

    async def check(self) -> str:
        if self.fail_with is not None:
            raise BlobStoreError(str(self.fail_with))
        return "owner/repo"


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest.fixture
def blob_store():
    return InMemoryBlobStore()


@pytest.fixture
def quota_gate():
    return QuotaGate()


@pytest_asyncio.fixture
async def db():
    """Fresh database for tests that call services directly."""
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def client(blob_store, quota_gate):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB,
    the in-memory blob store and a private quota gate.
    """
    await _init_test_db()
    app.dependency_overrides[blob_store_dependency] = lambda: blob_store
    app.dependency_overrides[quota_gate_dependency] = lambda: quota_gate
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    app.dependency_overrides.clear()
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def signup_user(client):
    """
    Factory fixture registering users through the public endpoint.
    Returns the signup payload merged with the created user's id.
    """

    async def _signup(username: str | None = None, password: str = "UserPass!23",
                      security_pass: str = "SEC123") -> dict:
        username = username or f"user_{uuid.uuid4().hex[:6]}"
        payload = {
            "username": username,
            "email": f"{username}@college.example.org",
            "password": password,
            "securityPass": security_pass,
        }
        resp = await client.post("/signup", json=payload)
        assert resp.status_code == 200, resp.text
        return {**payload, "id": resp.json()["user"]["id"]}

    return _signup
