"""Shared test fixtures for the system lookup service."""

import os

# Fixed configuration before any app import triggers Settings().
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("DB_TIMEOUT", "5")

from collections.abc import AsyncGenerator  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from simples_api.config import get_settings  # noqa: E402
from simples_api.main import app  # noqa: E402

# ---------------------------------------------------------------------------
# Mock DB session
# ---------------------------------------------------------------------------


def make_result(rows: list[dict]) -> MagicMock:
    """Mimic a ``Result`` whose ``.mappings().first()`` yields the first row."""
    result = MagicMock()
    result.mappings.return_value.first.return_value = rows[0] if rows else None
    result.mappings.return_value.all.return_value = rows
    return result


def _make_mock_session():
    """Create a mock async DB session returning no rows by default."""
    session = AsyncMock()
    session.execute.return_value = make_result([])
    session.close = AsyncMock()
    session.rollback = AsyncMock()
    return session


def _make_mock_session_factory():
    """Return a callable that mimics ``async_sessionmaker().__call__()``."""
    mock_session = _make_mock_session()
    factory = MagicMock()
    ctx = AsyncMock()
    ctx.__aenter__.return_value = mock_session
    factory.return_value = ctx
    return factory, mock_session


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_app_overrides():
    """Drop dependency overrides and cached settings between tests."""
    yield
    app.dependency_overrides.clear()
    get_settings.cache_clear()


@pytest.fixture()
def db_session():
    """Mock session shared with the ``client`` fixture."""
    factory, session = _make_mock_session_factory()
    app.state.engine = MagicMock()
    app.state.session_factory = factory
    return session


@pytest_asyncio.fixture()
async def client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the FastAPI app.

    The database is mocked so tests run without MySQL.  Application errors
    are rendered as responses instead of being re-raised into the test.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Row factories
# ---------------------------------------------------------------------------


def make_system_row(**overrides) -> dict:
    """A ``system`` row as the lookup query returns it (``SELECT s.*``)."""
    data = {
        "id": 7,
        "mapId": 3,
        "systemId": 30000142,
        "alias": "Jita",
        "typeId": 1,
        "statusId": 1,
        "locked": 0,
        "rallyUpdated": None,
        "description": "",
        "posX": 40,
        "posY": 120,
        "active": 1,
    }
    data.update(overrides)
    return data
