"""Scoped transaction helper.

    async with transaction(db):
        ...reads and writes...

Commits when the block exits cleanly and rolls back on any exception.
Connectivity failures are re-raised as StoreUnavailableError so callers can
decide whether to retry; every other exception propagates unchanged.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from src.vm_common.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


def is_store_unavailable(exc: BaseException) -> bool:
    """True for failures of the store itself rather than of the statement."""
    if isinstance(exc, (OperationalError, InterfaceError, PoolTimeoutError, OSError)):
        return True
    return isinstance(exc, DBAPIError) and exc.connection_invalidated


@asynccontextmanager
async def transaction(db: AsyncSession) -> AsyncGenerator[AsyncSession, None]:
    try:
        yield db
        await db.commit()
    except Exception as exc:
        await db.rollback()
        if is_store_unavailable(exc):
            logger.warning("Transaction aborted, store unavailable: %s", exc)
            raise StoreUnavailableError() from exc
        raise
