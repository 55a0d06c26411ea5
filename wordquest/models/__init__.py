from .player import Player, AgeGroup, AGE_GROUPS
from .leaderboard import LeaderboardEntry, LeaderboardSnapshot, LeaderboardType
from .reward import RewardPayload, RewardRecord
from .challenge import ChallengeParticipant, ChallengeResult, ChallengeScore

__all__ = [
    "Player",
    "AgeGroup",
    "AGE_GROUPS",
    "LeaderboardEntry",
    "LeaderboardSnapshot",
    "LeaderboardType",
    "RewardPayload",
    "RewardRecord",
    "ChallengeParticipant",
    "ChallengeResult",
    "ChallengeScore",
]
