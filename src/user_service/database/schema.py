"""
Schema bootstrap for the users table
"""

import logging

import asyncpg

logger = logging.getLogger(__name__)

USERS_TABLE_DDL = """
    CREATE TABLE IF NOT EXISTS users (
        id SERIAL PRIMARY KEY,
        user_id UUID NOT NULL UNIQUE,
        first_name VARCHAR NOT NULL,
        last_name VARCHAR NOT NULL,
        email VARCHAR NOT NULL UNIQUE,
        created_at TIMESTAMP NOT NULL
    )
"""


async def ensure_schema(pool: asyncpg.Pool) -> None:
    """Create the users table if it does not exist yet"""
    async with pool.acquire() as conn:
        await conn.execute(USERS_TABLE_DDL)
    logger.info("Users table schema ensured")
