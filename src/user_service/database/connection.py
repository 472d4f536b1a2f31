"""
Database connection and pool management
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import asyncpg
from fastapi import Request

from user_service.config.settings import (
    DATABASE_URL,
    DB_POOL_MIN_SIZE,
    DB_POOL_MAX_SIZE,
    DB_COMMAND_TIMEOUT,
)
from user_service.utils.errors import DispatchFailure

logger = logging.getLogger(__name__)

# Failures that mean a connection could not be handed out
ACQUIRE_ERRORS = (asyncio.TimeoutError, OSError, asyncpg.PostgresError, asyncpg.InterfaceError)


async def create_db_pool(
    dsn: Optional[str] = None,
    min_size: int = DB_POOL_MIN_SIZE,
    max_size: int = DB_POOL_MAX_SIZE,
    command_timeout: float = DB_COMMAND_TIMEOUT,
) -> asyncpg.Pool:
    """Create the connection pool and check that the database answers"""
    dsn = dsn or DATABASE_URL
    if not dsn:
        raise ValueError("DATABASE_URL environment variable is required")

    pool = await asyncpg.create_pool(
        dsn,
        min_size=min_size,
        max_size=max_size,
        command_timeout=command_timeout,
        statement_cache_size=0  # pgbouncer compatibility
    )

    # Test connection
    async with pool.acquire() as conn:
        await conn.fetchval("SELECT 1")

    logger.info(f"Database pool initialized (min_size={min_size}, max_size={max_size})")
    return pool


async def close_db_pool(pool: Optional[asyncpg.Pool]) -> None:
    """Close the connection pool"""
    if pool:
        await pool.close()
    logger.info("Database connections closed")


def get_db_pool(request: Request) -> asyncpg.Pool:
    """FastAPI dependency returning the pool owned by the running app"""
    return request.app.state.db_pool


@asynccontextmanager
async def acquire_connection(
    pool: asyncpg.Pool,
    action: str,
    timeout: Optional[float] = None,
) -> AsyncIterator[asyncpg.Connection]:
    """
    Borrow one connection for the duration of a request.

    Waits until a connection is free or `timeout` elapses. A connection that
    cannot be obtained aborts the request with DispatchFailure; there is no
    retry. The connection always goes back to the pool.
    """
    try:
        conn = await pool.acquire(timeout=timeout)
    except ACQUIRE_ERRORS as e:
        logger.error(f"Could not acquire database connection for '{action}': {type(e).__name__}: {e}")
        raise DispatchFailure(action) from e

    try:
        yield conn
    finally:
        await pool.release(conn)
