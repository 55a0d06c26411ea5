from typing import Optional
from pydantic import BaseModel

from wordquest.models.player import AgeGroup


class ChallengeParticipant(BaseModel):
    """Resultado de un jugador en un desafío"""

    player_id: str
    score: float
    age_group: AgeGroup
    accuracy: float
    correct_answers: int
    total_time: int  # milliseconds


class ChallengeScore(BaseModel):
    player_id: str
    normalized_score: int


class ChallengeResult(BaseModel):
    winner_id: Optional[str] = None
    scores: list[ChallengeScore] = []
