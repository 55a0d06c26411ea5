from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field

from wordquest.models.player import AgeGroup


LeaderboardType = Literal["daily", "weekly", "monthly", "all_time"]
RewardedLeaderboardType = Literal["daily", "weekly", "monthly"]

LEADERBOARD_TYPES: tuple[LeaderboardType, ...] = ("daily", "weekly", "monthly", "all_time")
REWARDED_LEADERBOARD_TYPES: tuple[RewardedLeaderboardType, ...] = ("daily", "weekly", "monthly")


class LeaderboardEntry(BaseModel):
    """Copia puntual de un jugador dentro de un snapshot"""

    player_id: str
    display_name: str
    normalized_score: int
    raw_score: int
    accuracy: float = 0.0
    streak: int = 0
    words_learned: int = 0
    rank: int = Field(..., ge=1)


class LeaderboardSnapshot(BaseModel):
    """Leaderboard precalculado para un (type, age_group); age_group None = global"""

    id: str = Field(..., alias="_id")  # "{type}:{age_group or 'global'}"
    type: LeaderboardType
    age_group: Optional[AgeGroup] = None
    entries: list[LeaderboardEntry] = []  # Top N
    total_players: int = 0  # Tamaño del cohort completo, no solo de entries
    period_start: datetime
    period_end: datetime
    last_updated: datetime

    class Config:
        populate_by_name = True


def snapshot_key(leaderboard_type: str, age_group: Optional[str] = None) -> str:
    """ID determinista del snapshot: como mucho uno por (type, age_group)"""
    return f"{leaderboard_type}:{age_group or 'global'}"
