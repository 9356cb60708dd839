"""Record store connection handling.

One async engine per process; one session (and transaction) per request.
Connection-level failures surface as StoreUnavailableError so callers can
tell "the store is down" apart from programming errors.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import logfire
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from chatter.config import Settings
from chatter.domain.error import StoreUnavailableError


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg engine described by DATABASE__* settings.

    SQL is echoed when ``debug`` is on.
    """
    database = settings.database
    return create_async_engine(
        database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory for request-scoped sessions.

    Rows are mapped to frozen domain models right after each query, so
    nothing relies on ORM state surviving a commit.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@asynccontextmanager
async def store_errors(operation: str) -> AsyncIterator[None]:
    """Translate connection-level database failures to StoreUnavailableError.

    Args:
        operation: Name of the store operation, for logs
    """
    try:
        yield
    except (OperationalError, InterfaceError) as e:
        logfire.error("Record store unavailable", operation=operation, error=str(e))
        raise StoreUnavailableError(f"Record store unavailable during {operation}") from e
