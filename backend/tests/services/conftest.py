"""Service test fixtures — async DB, live runtime, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - get_runtime overridden with a runtime seeded from the test identities
    - db_manager and runtime singletons patched for the readiness probe

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - Genesis height 100 so harvest dates up to 100 are accepted by default
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

import product_registry.models  # noqa: F401
from product_registry.core.creator_index import CreatorIndex
from product_registry.core.product_store import ProductStore
from product_registry.db.base import Base
from product_registry.infrastructure.database import get_db, DatabaseSessionManager
from product_registry.infrastructure.ledger_clock import LocalLedgerClock
from product_registry.infrastructure.role_directory import RoleDirectory
from product_registry.infrastructure.treasury import RecordingTreasury
import product_registry.infrastructure.database as db_module
import product_registry.services.registry_runtime as runtime_module
from product_registry.services.registry_runtime import RegistryRuntime, get_runtime
from product_registry.main import app

from tests.fakes import (
    ADMIN, BUYER, CERTIFIER, OTHER_SUPPLIER, SUPPLIER, TREASURY,
)

GENESIS_HEIGHT = 100


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def registry_runtime():
    """Runtime over an empty store, test identities and a recording treasury."""
    return RegistryRuntime(
        store=ProductStore(creator_index=CreatorIndex()),
        roles=RoleDirectory({
            SUPPLIER: "supplier",
            OTHER_SUPPLIER: "supplier",
            CERTIFIER: "certifier",
            ADMIN: "admin",
            BUYER: "buyer",
        }),
        clock=LocalLedgerClock(GENESIS_HEIGHT),
        treasury=RecordingTreasury(),
        treasury_identity=TREASURY,
    )


@pytest.fixture
async def client(test_engine, test_session_factory, registry_runtime):
    """FastAPI test client with DB and runtime dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_runtime] = lambda: registry_runtime

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    original_runtime = runtime_module.runtime
    runtime_module.runtime = registry_runtime

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
    runtime_module.runtime = original_runtime
