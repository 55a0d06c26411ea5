from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class RewardPayload(BaseModel):
    """Premio en monedas del juego"""

    diamonds: int = 0
    emeralds: int = 0
    xp: int = 0

    def is_empty(self) -> bool:
        return self.diamonds == 0 and self.emeralds == 0 and self.xp == 0


class RewardRecord(BaseModel):
    """Premio concedido a un jugador por su posición al cierre de un periodo"""

    id: str = Field(..., alias="_id")  # "{competition_type}:{period}:{rank}"
    player_id: str
    competition_type: str  # daily_leaderboard | weekly_leaderboard | monthly_leaderboard
    competition_id: Optional[str] = None  # Snapshot que lo generó
    period_start: Optional[str] = None  # Fecha ISO del inicio del periodo premiado
    rank: Optional[int] = None
    reward: RewardPayload
    claimed: bool = False
    claimed_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        populate_by_name = True
