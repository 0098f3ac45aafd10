"""Dependency injection for FastAPI."""

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import QueuePool

from simples_api.config import Settings, get_settings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Lifespan helpers: called from main.py to create & destroy shared resources
# ---------------------------------------------------------------------------


def _register_pool_events(engine: AsyncEngine) -> None:
    """Attach pool event listeners for observability."""
    pool = engine.pool
    if not isinstance(pool, QueuePool):
        return

    @event.listens_for(pool, "checkout")
    def _on_checkout(_dbapi_conn, _conn_record, _conn_proxy):
        logger.debug("Pool checkout size=%s checked_out=%s", pool.size(), pool.checkedout())

    @event.listens_for(pool, "checkin")
    def _on_checkin(_dbapi_conn, _conn_record):
        logger.debug("Pool checkin size=%s checked_out=%s", pool.size(), pool.checkedout())


def _engine_options(settings: Settings) -> dict:
    """Pool sizing for the configured backend.

    MySQL gets a fixed-size queue pool: no overflow, so ``db_pool_size`` is a
    hard ceiling on open connections, and ``db_timeout`` bounds both the wait
    for a free connection and the TCP connect.  SQLite (tests, local runs)
    uses SQLAlchemy's default pool and accepts none of these options.
    """
    if settings.database_url.startswith("sqlite"):
        return {}
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": 0,
        "pool_timeout": settings.db_timeout,
        "pool_pre_ping": True,
        "connect_args": {"connect_timeout": int(settings.db_timeout)},
    }


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async database engine.

    No connection is opened here; the pool connects on first checkout, so
    the server can start listening while the database is still unreachable.
    """
    engine = create_async_engine(
        settings.database_url,
        echo=settings.debug,
        **_engine_options(settings),
    )
    _register_pool_events(engine)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory bound to *engine*."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# ---------------------------------------------------------------------------
# FastAPI dependencies: pull resources from app.state (set in lifespan)
# ---------------------------------------------------------------------------


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides a read-only database session from app.state.

    The service never writes, so nothing is committed; the transaction is
    rolled back on error and closed either way.
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ---------------------------------------------------------------------------
# Type aliases for cleaner dependency injection
# ---------------------------------------------------------------------------
DBSession = Annotated[AsyncSession, Depends(get_db_session)]
AppSettings = Annotated[Settings, Depends(get_settings)]
