"""
Controlador de scoring - Puntos por respuesta y ganador de desafíos

Los rangos (dificultad 1-3, accuracy 0-100) se validan aquí; fuera de rango
la API responde 422 en vez de devolver un valor extrapolado.
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from wordquest.models.challenge import ChallengeParticipant, ChallengeResult
from wordquest.services.ranking import determine_challenge_winner
from wordquest.services.scoring import DEFAULT_MAX_TIME_MS, calculate_answer_points


router = APIRouter(tags=["scoring"])


class AnswerPointsRequest(BaseModel):
    difficulty: int = Field(..., ge=1, le=3)
    time_spent_ms: int = Field(..., ge=0)
    max_time_ms: int = Field(DEFAULT_MAX_TIME_MS, gt=0)
    streak_bonus: float = Field(1.0, ge=1.0, le=2.0)


class AnswerPointsResponse(BaseModel):
    points: int


class ChallengeParticipantRequest(ChallengeParticipant):
    score: float = Field(..., ge=0)
    accuracy: float = Field(..., ge=0, le=100)
    correct_answers: int = Field(..., ge=0)
    total_time: int = Field(..., ge=0)


class ChallengeResolveRequest(BaseModel):
    participants: list[ChallengeParticipantRequest]


@router.post("/scoring/answer-points", response_model=AnswerPointsResponse)
async def answer_points(request: AnswerPointsRequest):
    """
    Puntos de una respuesta correcta según dificultad, velocidad y racha.
    """
    return AnswerPointsResponse(
        points=calculate_answer_points(
            request.difficulty,
            request.time_spent_ms,
            request.max_time_ms,
            request.streak_bonus,
        )
    )


@router.post("/challenges/resolve", response_model=ChallengeResult)
async def resolve_challenge(request: ChallengeResolveRequest):
    """
    Ganador de un desafío: mayor puntuación normalizada, y en empate el más rápido.
    """
    return determine_challenge_winner(request.participants)
