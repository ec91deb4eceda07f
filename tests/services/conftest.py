"""Service test fixtures — FastAPI test client and pipeline collaborator fakes.

Invariants:
    - get_db dependency overridden to use the per-test SQLite database
    - db_manager patched so the readiness probe sees the test engine
    - route_cache emptied around every test (module-level singleton)

Design Decisions:
    - Fakes record calls instead of mocking methods: assertions read as the
      sequence of collaborator calls the pipeline made
"""

import pytest
from httpx import ASGITransport, AsyncClient

from invoice_dashboard.infrastructure.database import get_db, DatabaseSessionManager
from invoice_dashboard.infrastructure.route_cache import route_cache
import invoice_dashboard.infrastructure.database as db_module
from invoice_dashboard.main import app

from tests.services.fakes import FakeCache, FakeNavigator, FakeStore


@pytest.fixture(autouse=True)
def _clear_route_cache():
    route_cache.clear()
    yield
    route_cache.clear()


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def cache():
    return FakeCache()


@pytest.fixture
def navigator():
    return FakeNavigator()
