"""
Fixtures for API tests: an HTTP client bound to the app and the in-memory DB.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from wordquest.core.security import create_access_token
from wordquest.database import Database
from wordquest.main import app


ADMIN_HEADERS = {"X-Admin-Key": "test-admin-key"}


@pytest.fixture
async def client(test_db):
    """
    AsyncClient against the app. The lifespan (Mongo connection, scheduler)
    does not run; the app reads the test database through Database.db.
    """
    previous = Database.db
    Database.db = test_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    Database.db = previous


@pytest.fixture
def auth_headers():
    def _headers(player_id: str) -> dict:
        return {"Authorization": f"Bearer {create_access_token(player_id)}"}

    return _headers


@pytest.fixture
def admin_headers():
    return dict(ADMIN_HEADERS)
