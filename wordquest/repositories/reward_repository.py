"""
RewardRepository - MongoDB access for competition_rewards collection.
"""

from datetime import datetime
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from wordquest.models.reward import RewardRecord


class RewardRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["competition_rewards"]

    async def get_by_id(self, reward_id: str) -> Optional[RewardRecord]:
        doc = await self.collection.find_one({"_id": reward_id})
        return RewardRecord(**doc) if doc else None

    async def get_unclaimed_for_player(self, player_id: str) -> list[RewardRecord]:
        docs = await self.collection.find(
            {"player_id": player_id, "claimed": False}
        ).sort("created_at", 1).to_list(length=None)
        return [RewardRecord(**doc) for doc in docs]

    async def create_if_absent(self, reward: RewardRecord) -> bool:
        """
        Insert the record unless one with the same id already exists.

        Returns True if a new record was created. An existing record is
        left untouched, including its claimed state.
        """
        result = await self.collection.update_one(
            {"_id": reward.id},
            {"$setOnInsert": reward.model_dump(by_alias=True, exclude={"id"})},
            upsert=True
        )
        return result.upserted_id is not None

    async def mark_claimed(self, reward_id: str, player_id: str, claimed_at: datetime) -> bool:
        """
        Flip claimed False -> True for the owner's record.

        Single conditional update, so two concurrent claims cannot both
        succeed.
        """
        result = await self.collection.update_one(
            {"_id": reward_id, "player_id": player_id, "claimed": False},
            {"$set": {"claimed": True, "claimed_at": claimed_at}}
        )
        return result.modified_count == 1
