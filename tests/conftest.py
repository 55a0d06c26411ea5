"""
Pytest fixtures and configuration for all tests.
"""

import os

# Settings are read once and cached; make sure the required values exist
# before anything imports the application.
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("JWT_SECRET", "test-secret-key-at-least-32-chars-long")
os.environ.setdefault("ADMIN_API_KEY", "test-admin-key")
os.environ.setdefault("SCHEDULER_ENABLED", "false")

import pytest
from typing import AsyncGenerator
from datetime import datetime, timezone
from mongomock_motor import AsyncMongoMockClient
from motor.motor_asyncio import AsyncIOMotorDatabase

TEST_DB_NAME = "wordquest_test"


@pytest.fixture(scope="function")
async def test_db() -> AsyncGenerator[AsyncIOMotorDatabase, None]:
    """
    Provide a clean in-memory database for each test.

    Same async API as Motor; every test gets its own client so nothing
    leaks between tests.
    """
    client = AsyncMongoMockClient()
    db = client[TEST_DB_NAME]

    yield db

    # Cleanup: drop all collections after test
    for collection_name in await db.list_collection_names():
        await db[collection_name].drop()


@pytest.fixture
def current_year() -> int:
    return datetime.now(timezone.utc).year


@pytest.fixture
def make_player(test_db):
    """
    Factory that inserts a player document.

    Defaults to an opted-in "12+" player with normalized_score 0 and the
    profile wizard not yet done; any field can be overridden.
    """
    async def _make(player_id: str, **fields) -> dict:
        doc = {
            "_id": player_id,
            "name": f"Player {player_id}",
            "display_name": f"Anon{player_id}",
            "age_group": "12+",
            "competition_opt_in": True,
            "profile_completed": False,
            "total_raw_score": 0,
            "normalized_score": 0,
            "accuracy": 0.0,
            "questions_answered": 0,
            "weekly_score": 0,
            "monthly_score": 0,
            "streak": 0,
            "words_learned": 0,
            "quests_completed": 0,
            "total_stars": 0,
            "diamonds": 0,
            "emeralds": 0,
            "xp": 0,
            "created_at": datetime.now(timezone.utc),
        }
        doc.update(fields)
        await test_db["players"].insert_one(doc)
        return doc

    return _make


@pytest.fixture
def sample_profile_setup(current_year):
    """Profile wizard data for a 7-year-old."""
    return {
        "birth_year": current_year - 7,
        "grade_level": 2,
        "native_language": "en",
        "competition_opt_in": True,
    }
