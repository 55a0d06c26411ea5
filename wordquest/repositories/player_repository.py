"""
PlayerRepository - MongoDB access for players collection.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from wordquest.models.player import Player


class PlayerRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["players"]

    async def get_by_id(self, player_id: str) -> Optional[Player]:
        doc = await self.collection.find_one({"_id": player_id})
        return Player(**doc) if doc else None

    async def list_all(self) -> list[Player]:
        """Full scan. Leaderboard rebuilds read every player."""
        docs = await self.collection.find({}).to_list(length=None)
        return [Player(**doc) for doc in docs]

    async def list_competitive(self, age_group: Optional[str] = None) -> list[Player]:
        """Opted-in players with a normalized score, optionally one age group."""
        query = {
            "competition_opt_in": True,
            "normalized_score": {"$ne": None},
        }
        if age_group:
            query["age_group"] = age_group

        docs = await self.collection.find(query).to_list(length=None)
        return [Player(**doc) for doc in docs]

    async def create(self, name: str, player_id: Optional[str] = None) -> Player:
        """Create a new player with empty counters."""
        player_doc = Player(
            _id=player_id or uuid.uuid4().hex,
            name=name,
            created_at=datetime.now(timezone.utc),
        ).model_dump(by_alias=True)

        await self.collection.insert_one(player_doc)
        return Player(**player_doc)

    async def update_fields(self, player_id: str, updates: dict) -> Optional[Player]:
        """$set a set of fields and return the updated player."""
        if not updates:
            return await self.get_by_id(player_id)

        result = await self.collection.find_one_and_update(
            {"_id": player_id},
            {"$set": updates},
            return_document=ReturnDocument.AFTER
        )

        return Player(**result) if result else None

    async def credit_currencies(
        self,
        player_id: str,
        diamonds: int = 0,
        emeralds: int = 0,
        xp: int = 0
    ) -> Optional[Player]:
        result = await self.collection.find_one_and_update(
            {"_id": player_id},
            {"$inc": {"diamonds": diamonds, "emeralds": emeralds, "xp": xp}},
            return_document=ReturnDocument.AFTER
        )

        return Player(**result) if result else None

    async def reset_scores(self, field: str) -> int:
        """Zero a period accumulator (weekly_score / monthly_score) for every player."""
        result = await self.collection.update_many(
            {field: {"$ne": 0}},
            {"$set": {field: 0}}
        )
        return result.modified_count

    async def exists(self, player_id: str) -> bool:
        count = await self.collection.count_documents({"_id": player_id}, limit=1)
        return count > 0
