"""Shared test fixtures for generic options."""

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from generic_options.config import get_settings
from generic_options.models.base import Base
from tests.helpers import sample_models  # noqa: F401

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop the cached Settings so env overrides apply per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Real SQLite database (in-memory)
# ---------------------------------------------------------------------------


@pytest.fixture()
def engine():
    """In-memory SQLite engine with every model table created."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db_session(engine):
    """Provide a real sync DB session. Each test gets a fresh database."""
    with Session(engine, expire_on_commit=False) as session:
        yield session


# ---------------------------------------------------------------------------
# Mock async DB session
# ---------------------------------------------------------------------------


def _make_mock_session():
    """Create a mock async DB session.

    ``session.execute`` returns a result whose ``scalars().first()`` and
    ``scalar_one_or_none()`` return ``None`` unless overridden.
    """
    session = AsyncMock()
    result_mock = MagicMock()
    result_mock.scalars.return_value.first.return_value = None
    result_mock.scalars.return_value.all.return_value = []
    result_mock.scalar_one_or_none.return_value = None
    session.execute.return_value = result_mock
    # add() is synchronous on AsyncSession
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture()
async def async_session():
    """Provide a mock async database session."""
    return _make_mock_session()
