"""
RewardService - Claiming leaderboard rewards.

A reward goes unclaimed -> claimed exactly once. Claiming checks that the
reward exists, belongs to the caller and is still unclaimed, then credits
the currencies to the player.
"""

import logging
from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase

from wordquest.models.reward import RewardPayload, RewardRecord
from wordquest.repositories.player_repository import PlayerRepository
from wordquest.repositories.reward_repository import RewardRepository
from wordquest.services.profile_service import PlayerNotFoundError

logger = logging.getLogger(__name__)


class RewardServiceError(Exception):
    """Base exception for reward service errors."""
    pass


class RewardClaimError(RewardServiceError):
    """Raised when a reward does not exist, belongs to someone else or was already claimed."""
    pass


class RewardService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.reward_repo = RewardRepository(db)
        self.player_repo = PlayerRepository(db)

    async def get_unclaimed_rewards(self, player_id: str) -> list[RewardRecord]:
        return await self.reward_repo.get_unclaimed_for_player(player_id)

    async def claim_reward(self, player_id: str, reward_id: str) -> RewardPayload:
        """
        Claim a reward for its owner.

        Raises:
            RewardClaimError: missing reward, owner mismatch or already claimed
            PlayerNotFoundError: the owner's player record is gone
        """
        reward = await self.reward_repo.get_by_id(reward_id)
        if not reward or reward.player_id != player_id or reward.claimed:
            raise RewardClaimError("Invalid or already claimed reward")

        if not await self.player_repo.exists(player_id):
            raise PlayerNotFoundError("Player not found")

        # The conditional flip is the guard: a concurrent claim loses here
        # and nothing is credited twice.
        if not await self.reward_repo.mark_claimed(reward_id, player_id, datetime.now(timezone.utc)):
            raise RewardClaimError("Invalid or already claimed reward")

        await self.player_repo.credit_currencies(
            player_id,
            diamonds=reward.reward.diamonds,
            emeralds=reward.reward.emeralds,
            xp=reward.reward.xp,
        )

        logger.info("Reward %s claimed by player %s", reward_id, player_id)
        return reward.reward
