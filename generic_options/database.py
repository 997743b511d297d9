"""Engine and session factories for option storage.

``create_engine`` serves the synchronous accessors and ``SessionEntityFinder``.
``create_async_engine`` serves ``OptionRepository`` and
``AsyncSessionEntityFinder``; it needs an async driver in the URL, such as
``postgresql+asyncpg://`` or ``sqlite+aiosqlite://``.
"""

import logging

from sqlalchemy import Engine, event
from sqlalchemy import create_engine as sa_create_engine
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.ext.asyncio import create_async_engine as sa_create_async_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool

from generic_options.config import Settings

logger = logging.getLogger(__name__)


def _register_pool_events(engine: Engine) -> None:
    """Log connection checkout and checkin on queue pools."""
    pool = engine.pool
    if not isinstance(pool, QueuePool):
        return

    def _report(action: str) -> None:
        logger.debug(
            "option store connection %s (pool size %s, %s in use)",
            action,
            pool.size(),
            pool.checkedout(),
        )

    event.listen(pool, "checkout", lambda *_args: _report("checked out"))
    event.listen(pool, "checkin", lambda *_args: _report("returned"))


def create_engine(settings: Settings) -> Engine:
    """Create the database engine described by *settings*."""
    engine = sa_create_engine(settings.database_url, echo=settings.debug)
    _register_pool_events(engine)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create session factory bound to *engine*."""
    return sessionmaker(engine, class_=Session, expire_on_commit=False)


def create_async_engine(settings: Settings) -> AsyncEngine:
    """Create an async engine from *settings*; the URL must name an async driver."""
    engine = sa_create_async_engine(settings.database_url, echo=settings.debug)
    _register_pool_events(engine.sync_engine)
    return engine


def create_async_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory bound to *engine*."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
