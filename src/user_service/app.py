"""
User Service API
CRUD operations over the users table
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import asyncpg
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_service.config.settings import ALLOWED_ORIGINS, AUTO_MIGRATE, REREAD_MODE, DB_ACQUIRE_TIMEOUT
from user_service.database.connection import create_db_pool, close_db_pool
from user_service.database.schema import ensure_schema
from user_service.api.routes import health, users
from user_service.utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)


def create_app(
    pool: Optional[asyncpg.Pool] = None,
    reread_mode: str = REREAD_MODE,
    acquire_timeout: float = DB_ACQUIRE_TIMEOUT,
) -> FastAPI:
    """
    Build the application.

    When `pool` is given the app uses it as-is and leaves its lifecycle to the
    caller. Otherwise the pool is created on startup from DATABASE_URL and
    closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_pool = app.state.db_pool is None
        if owns_pool:
            app.state.db_pool = await create_db_pool()
        if AUTO_MIGRATE:
            await ensure_schema(app.state.db_pool)
        yield
        if owns_pool:
            await close_db_pool(app.state.db_pool)
            app.state.db_pool = None

    app = FastAPI(
        title="User Service",
        description="Create, read, update and delete users",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.db_pool = pool
    app.state.reread_mode = reread_mode
    app.state.acquire_timeout = acquire_timeout

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    setup_error_handling(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(users.router, tags=["Users"])

    logger.info(f"User Service app created (reread_mode={reread_mode})")
    return app
