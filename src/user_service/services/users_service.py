"""
User persistence operations

Each operation borrows one pooled connection, runs a single statement and,
for mutations, re-reads what the caller gets back. Which row is re-read
depends on the re-read mode (see config.settings.REREAD_MODE).
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, List
from uuid import UUID, uuid4

import asyncpg

from user_service.config.settings import REREAD_MODE, REREAD_AFFECTED, DB_ACQUIRE_TIMEOUT
from user_service.database.connection import acquire_connection
from user_service.models.user import User, NewUser, UpdateUser
from user_service.utils.errors import NotFound, StorageFailure, InvalidUserId

logger = logging.getLogger(__name__)

USER_COLUMNS = "id, user_id, first_name, last_name, email, created_at"

LIST_USERS_SQL = f"SELECT {USER_COLUMNS} FROM users ORDER BY id"
LATEST_USER_SQL = f"SELECT {USER_COLUMNS} FROM users ORDER BY id DESC LIMIT 1"
GET_USER_SQL = f"SELECT {USER_COLUMNS} FROM users WHERE user_id = $1"

INSERT_USER_SQL = """
    INSERT INTO users (user_id, first_name, last_name, email, created_at)
    VALUES ($1, $2, $3, $4, $5)
"""

# NULL parameters keep the stored value
UPDATE_USER_SQL = """
    UPDATE users
    SET first_name = COALESCE($2, first_name),
        last_name = COALESCE($3, last_name),
        email = COALESCE($4, email)
    WHERE user_id = $1
"""

DELETE_USER_SQL = "DELETE FROM users WHERE user_id = $1"

RETURNING_USER = f" RETURNING {USER_COLUMNS}"

STORAGE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, asyncio.TimeoutError)


def parse_user_id(raw_user_id: str) -> UUID:
    """Parse a public identifier supplied by a caller"""
    try:
        return UUID(raw_user_id)
    except (ValueError, TypeError, AttributeError) as e:
        raise InvalidUserId(raw_user_id, reason=str(e)) from e


async def _run(statement: Callable[..., Awaitable[Any]], sql: str, *args: Any) -> Any:
    try:
        return await statement(sql, *args)
    except STORAGE_ERRORS as e:
        logger.error(f"Statement failed: {type(e).__name__}: {e}")
        raise StorageFailure(e) from e


class UserService:
    """CRUD operations on the users table"""

    def __init__(
        self,
        pool: asyncpg.Pool,
        reread_mode: str = REREAD_MODE,
        acquire_timeout: float = DB_ACQUIRE_TIMEOUT,
    ):
        self.pool = pool
        self.reread_mode = reread_mode
        self.acquire_timeout = acquire_timeout

    @property
    def returns_affected_row(self) -> bool:
        return self.reread_mode == REREAD_AFFECTED

    async def list_users(self) -> List[User]:
        """All users ordered by surrogate id; empty list for an empty table"""
        async with acquire_connection(self.pool, "fetch", self.acquire_timeout) as conn:
            rows = await _run(conn.fetch, LIST_USERS_SQL)
        return [User.from_record(row) for row in rows]

    async def get_user(self, raw_user_id: str) -> User:
        user_id = parse_user_id(raw_user_id)

        async with acquire_connection(self.pool, "fetch", self.acquire_timeout) as conn:
            row = await _run(conn.fetchrow, GET_USER_SQL, user_id)

        if row is None:
            raise NotFound()
        return User.from_record(row)

    async def add_user(self, new_user: NewUser) -> List[User]:
        """
        Insert a user with a fresh public identifier and creation time.

        Returns:
            A one-element list: the inserted row in affected mode, otherwise
            the most recently inserted row re-read from the table
        """
        values = (
            uuid4(),
            new_user.first_name,
            new_user.last_name,
            new_user.email,
            datetime.now(),
        )

        async with acquire_connection(self.pool, "add", self.acquire_timeout) as conn:
            if self.returns_affected_row:
                rows = await _run(conn.fetch, INSERT_USER_SQL + RETURNING_USER, *values)
            else:
                await _run(conn.execute, INSERT_USER_SQL, *values)
                rows = await _run(conn.fetch, LATEST_USER_SQL)

        logger.info(f"User added: {values[0]}")
        return [User.from_record(row) for row in rows]

    async def update_user(self, raw_user_id: str, changes: UpdateUser) -> List[User]:
        """
        Merge the provided fields into the user with this public identifier.

        In latest mode an unknown identifier updates nothing and the most
        recent row is still returned. In affected mode it raises NotFound.
        """
        user_id = parse_user_id(raw_user_id)
        values = (user_id, changes.first_name, changes.last_name, changes.email)

        async with acquire_connection(self.pool, "update", self.acquire_timeout) as conn:
            if self.returns_affected_row:
                rows = await _run(conn.fetch, UPDATE_USER_SQL + RETURNING_USER, *values)
                if not rows:
                    raise NotFound()
            else:
                status = await _run(conn.execute, UPDATE_USER_SQL, *values)
                logger.debug(f"Update of {user_id}: {status}")
                rows = await _run(conn.fetch, LATEST_USER_SQL)

        logger.info(f"User updated: {user_id}")
        return [User.from_record(row) for row in rows]

    async def delete_user(self, raw_user_id: str) -> List[User]:
        """
        Delete the user with this public identifier.

        In latest mode the delete is not conditioned on a match: the most
        recent remaining row is returned either way. In affected mode the
        deleted row is returned, or NotFound raised.
        """
        user_id = parse_user_id(raw_user_id)

        async with acquire_connection(self.pool, "delete", self.acquire_timeout) as conn:
            if self.returns_affected_row:
                rows = await _run(conn.fetch, DELETE_USER_SQL + RETURNING_USER, user_id)
                if not rows:
                    raise NotFound()
            else:
                status = await _run(conn.execute, DELETE_USER_SQL, user_id)
                logger.debug(f"Delete of {user_id}: {status}")
                rows = await _run(conn.fetch, LATEST_USER_SQL)

        logger.info(f"User deleted: {user_id}")
        return [User.from_record(row) for row in rows]
