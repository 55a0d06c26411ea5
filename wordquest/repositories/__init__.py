from .player_repository import PlayerRepository
from .leaderboard_repository import LeaderboardRepository
from .reward_repository import RewardRepository

__all__ = [
    "PlayerRepository",
    "LeaderboardRepository",
    "RewardRepository",
]
