# This project was developed with assistance from AI tools.
"""Shared fixtures.

Every test gets a fresh in-memory SQLite database (aiosqlite + StaticPool so
all sessions see the same connection). HTTP tests drive the real app through
``httpx.AsyncClient``; each persona gets its own client so it keeps its own
session cookie.
"""

import os

# Must be set before the app (and its settings) are imported.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from visadesk_db import DatabaseService, get_db  # noqa: E402

from visadesk.core.config import settings  # noqa: E402
from visadesk.main import app as real_app  # noqa: E402

from .helpers import Persona, create_agent, create_client, signup  # noqa: E402


@pytest.fixture(autouse=True)
def _fast_bcrypt(monkeypatch):
    """Minimum bcrypt cost keeps signup/login fast in tests."""
    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)


@pytest_asyncio.fixture
async def db_service():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    service = DatabaseService(engine=engine)
    await service.create_all()
    yield service
    await service.close()


@pytest_asyncio.fixture
async def session(db_service):
    """A standalone session for service-level tests and direct assertions."""
    async with db_service.session() as s:
        yield s


@pytest.fixture
def app(db_service):
    """The real app wired to the per-test database."""

    async def _get_db():
        async with db_service.session() as s:
            yield s

    real_app.state.db_service = db_service
    real_app.dependency_overrides[get_db] = _get_db
    yield real_app
    real_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def make_client(app):
    """Factory: a new cookie-isolated HTTP client per call."""
    clients: list[httpx.AsyncClient] = []

    def _make() -> httpx.AsyncClient:
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        client = httpx.AsyncClient(transport=transport, base_url="http://test")
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()


@pytest_asyncio.fixture
async def tree(make_client):
    """Two admin trees.

    Admin A owns agent ``ag1`` (provisioned by A), agent ``ag2`` (self-signup),
    client ``c1`` (provisioned by ag1, so assigned to it) and client ``c2``
    (self-signup, unassigned). Admin B owns agent ``agb`` and client ``cb``.
    """
    admin_a = await signup(make_client(), "Alice Admin", "alice@example.com", "admin")
    admin_b = await signup(make_client(), "Bob Admin", "bob@example.com", "admin")

    ag1 = await create_agent(make_client, admin_a, "Agnes Agent", "agnes@example.com")
    ag2 = await signup(
        make_client(), "Arthur Agent", "arthur@example.com", "agent", admin_id=admin_a.user_id
    )
    agb = await signup(
        make_client(), "Beatrix Agent", "beatrix@example.com", "agent", admin_id=admin_b.user_id
    )

    c1 = await create_client(make_client, ag1, "Carla Client", "carla@example.com")
    c2 = await signup(
        make_client(), "Cedric Client", "cedric@example.com", "client", admin_id=admin_a.user_id
    )
    cb = await signup(
        make_client(), "Clara Client", "clara@example.com", "client", admin_id=admin_b.user_id
    )

    for persona in (ag2, agb):
        persona.row_id = (await persona.http.get("/api/agent/profile")).json()["id"]
    for persona in (c2, cb):
        persona.row_id = (await persona.http.get("/api/client/profile")).json()["id"]

    return _Tree(
        admin_a=admin_a,
        admin_b=admin_b,
        ag1=ag1,
        ag2=ag2,
        agb=agb,
        c1=c1,
        c2=c2,
        cb=cb,
    )


class _Tree:
    def __init__(self, **personas: Persona):
        for name, persona in personas.items():
            setattr(self, name, persona)
