"""
pytest configuration and fixtures for the user service suite
"""

import pytest
import pytest_asyncio
import httpx

from user_service.app import create_app
from user_service.config.settings import REREAD_LATEST, REREAD_AFFECTED
from infrastructure import InMemoryUserPool


ADA = {"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"}


@pytest.fixture
def user_pool() -> InMemoryUserPool:
    """Fresh, empty users table per test"""
    return InMemoryUserPool()


def _client_for(app) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")


@pytest_asyncio.fixture
async def client(user_pool):
    """Client for an app that re-reads the latest row after mutations"""
    app = create_app(pool=user_pool, reread_mode=REREAD_LATEST)
    async with _client_for(app) as client:
        yield client


@pytest_asyncio.fixture
async def affected_client(user_pool):
    """Client for an app that returns the row acted upon"""
    app = create_app(pool=user_pool, reread_mode=REREAD_AFFECTED)
    async with _client_for(app) as client:
        yield client


@pytest.fixture
def ada() -> dict:
    return dict(ADA)
