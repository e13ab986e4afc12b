"""
Shared test fixtures for warden.

Uses an in-memory SQLite database (aiosqlite) with per-test table
create/drop. Point ``TEST_DATABASE_URL`` at Postgres to run the same suite
against a real server.
"""

import os
from types import SimpleNamespace
from uuid import uuid4

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-tests")

from warden.db.base import Base  # noqa: E402
from warden.db.session import enable_sqlite_foreign_keys  # noqa: E402
from warden.main import app  # noqa: E402
import warden.models  # noqa: E402,F401

TEST_DB_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")

ADMINISTRATOR_USERNAME = "administrator"
ADMINISTRATOR_PASSWORD = "administrator"


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    if make_url(TEST_DB_URL).get_backend_name() == "sqlite":
        engine = create_async_engine(
            TEST_DB_URL,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        enable_sqlite_foreign_keys(engine)
    else:
        engine = create_async_engine(TEST_DB_URL, pool_pre_ping=True, echo=False)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine):
    """Fresh tables per test: drop → create → yield session → drop."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with factory() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


class RecordingNotifier:
    """Captures password reset notifications instead of delivering them."""

    def __init__(self):
        self.sent: list[dict] = []

    async def send_password_reset(self, user, security_code, reset_password_url):
        self.sent.append(
            {
                "username": user.username,
                "security_code": security_code,
                "reset_password_url": reset_password_url,
            }
        )


@pytest_asyncio.fixture()
async def notifier():
    return RecordingNotifier()


@pytest_asyncio.fixture(scope="function")
async def security_service(db_session, notifier):
    from warden.services.security_service import SecurityService

    return SecurityService(db_session, password_reset_notifier=notifier)


# ---------------------------------------------------------------------------
# Test client
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture(scope="function")
async def test_client(db_session, notifier):
    from warden.db.session import get_db

    async def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    previous_notifier = app.state.password_reset_notifier
    app.state.password_reset_notifier = notifier

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client

    app.state.password_reset_notifier = previous_notifier
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Seed data helpers
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture(scope="function")
async def seed_administrator(db_session, monkeypatch):
    """Run the first-run bootstrap. Returns the tenant and its directory id."""
    from warden.bootstrap import ensure_default_administrator
    from warden.config import settings
    from warden.models.security import Tenant
    from warden.services.security_service import SecurityService
    from sqlalchemy import select

    monkeypatch.setattr(settings, "administrator_username", ADMINISTRATOR_USERNAME)
    monkeypatch.setattr(settings, "administrator_password", ADMINISTRATOR_PASSWORD)

    await ensure_default_administrator(db_session)

    tenant = (await db_session.execute(select(Tenant))).scalar_one()
    user_directory_ids = await SecurityService(db_session).get_user_directory_ids_for_tenant(
        tenant.tenant_id
    )
    return SimpleNamespace(tenant=tenant, user_directory_id=user_directory_ids[0])


@pytest_asyncio.fixture(scope="function")
async def auth_headers(seed_administrator, test_client):
    """JWT auth headers for the seeded administrator."""
    resp = await test_client.post(
        "/api/v1/security/login",
        json={"username": ADMINISTRATOR_USERNAME, "password": ADMINISTRATOR_PASSWORD},
    )
    assert resp.status_code == 200, resp.text
    token = resp.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# Factory fixtures
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture(scope="function")
async def tenant_factory(security_service):
    from warden.models.pydantic_models import TenantModel

    async def _create(name: str | None = None, create_user_directory: bool = True):
        return await security_service.create_tenant(
            TenantModel(name=name or f"Tenant {uuid4().hex[:6]}"),
            create_user_directory=create_user_directory,
        )

    return _create


@pytest_asyncio.fixture(scope="function")
async def user_directory(tenant_factory):
    """An internal user directory with the default parameters."""
    _, user_directory = await tenant_factory()
    return user_directory


@pytest_asyncio.fixture(scope="function")
async def user_factory(security_service, user_directory):
    from warden.models.pydantic_models import UserRequest

    async def _create(
        username: str | None = None,
        password: str = "Password1",
        name: str = "Test User",
        user_directory_id=None,
        expired_password: bool = False,
        user_locked: bool = False,
        **fields,
    ):
        return await security_service.create_user(
            UserRequest(
                user_directory_id=user_directory_id or user_directory.user_directory_id,
                username=username or f"user{uuid4().hex[:6]}",
                name=name,
                password=password,
                **fields,
            ),
            expired_password,
            user_locked,
        )

    return _create


@pytest_asyncio.fixture(scope="function")
async def group_factory(security_service, user_directory):
    from warden.models.pydantic_models import GroupModel

    async def _create(name: str | None = None, description: str = "", user_directory_id=None):
        return await security_service.create_group(
            GroupModel(
                user_directory_id=user_directory_id or user_directory.user_directory_id,
                name=name or f"Group {uuid4().hex[:6]}",
                description=description,
            )
        )

    return _create


@pytest_asyncio.fixture(scope="function")
async def role_factory(security_service):
    from warden.models.pydantic_models import FunctionModel, RoleModel

    async def _create(code: str, function_codes: tuple[str, ...] = ()):
        role = await security_service.create_role(RoleModel(code=code, name=code))
        for function_code in function_codes:
            if not await security_service.functions.exists_by_id(function_code):
                await security_service.create_function(
                    FunctionModel(code=function_code, name=function_code)
                )
            await security_service.add_function_to_role(code, function_code)
        return role

    return _create
