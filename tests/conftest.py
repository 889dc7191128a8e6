"""Test fixtures: a fresh in-memory database per test.

Each test gets its own aiosqlite engine (StaticPool keeps the single
in-memory connection alive), with the schema created from the ORM
metadata. The app's get_db dependency is overridden to hand out the
test's session, so data seeded through services is visible to requests.

Environment is set before the app is imported: settings are read once.
"""

import os

os.environ["YOGASTUDIO_DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["YOGASTUDIO_BCRYPT_ROUNDS"] = "4"
os.environ["YOGASTUDIO_JWT_SECRET"] = (
    "test-secret-that-is-long-enough-for-hs512-signing-and-has-well-over-64-bytes"
)

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from yogastudio.auth.context import AuthContext  # noqa: E402
from yogastudio.auth.dependencies import get_current_user  # noqa: E402
from yogastudio.auth.user_details import UserDetails  # noqa: E402
from yogastudio.db.engine import get_db  # noqa: E402
from yogastudio.db.models import Base  # noqa: E402
from yogastudio.main import app  # noqa: E402
from yogastudio.services.teacher_service import TeacherService  # noqa: E402
from yogastudio.services.user_service import UserService  # noqa: E402

TEST_PASSWORD = "namaste123"


@pytest_asyncio.fixture()
async def db_session():
    """Per-test session on a brand-new in-memory database."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        try:
            yield session
        finally:
            await session.close()
    await engine.dispose()


@pytest_asyncio.fixture()
async def client(db_session):
    """HTTP client with get_db and the auth gate overridden.

    Every protected route sees a fixed identity, so tests of plain CRUD
    don't have to register and log in first.
    """

    async def override_get_db():
        yield db_session

    def override_get_current_user():
        return AuthContext.for_principal(
            UserDetails(
                id=1,
                username="yogi@studio.com",
                first_name="Yogi",
                last_name="Tester",
                password="",
            )
        )

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = override_get_current_user

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def unauthenticated_client(db_session):
    """HTTP client WITHOUT the auth override: the real token pipeline runs."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def teacher(db_session):
    return await TeacherService(db_session).create_teacher("Margot", "Delahaye")


@pytest_asyncio.fixture()
async def make_user(db_session):
    """Factory: create a user with TEST_PASSWORD."""
    users = UserService(db_session)
    counter = {"n": 0}

    async def _make(email=None, first_name="Student", last_name="Member", admin=False):
        counter["n"] += 1
        email = email or f"student{counter['n']}@studio.com"
        return await users.create_user(
            email=email,
            first_name=first_name,
            last_name=last_name,
            password=TEST_PASSWORD,
            admin=admin,
        )

    return _make


async def login(client, email, password=TEST_PASSWORD) -> dict:
    """Log in through the API and return auth headers."""
    r = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['token']}"}
