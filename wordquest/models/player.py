from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field


AgeGroup = Literal["6-8", "9-11", "12+"]

AGE_GROUPS: tuple[AgeGroup, ...] = ("6-8", "9-11", "12+")


class Player(BaseModel):
    """Perfil de puntuación de un jugador (colección players)"""

    id: str = Field(..., alias="_id")
    name: str
    display_name: Optional[str] = None  # Nombre anónimo para los leaderboards

    # Demographics
    birth_year: Optional[int] = None
    grade_level: Optional[int] = None  # 1-11
    native_language: Optional[str] = None  # ru | en | uk
    age_group: Optional[AgeGroup] = None

    # Competition
    competition_opt_in: bool = False
    profile_completed: bool = False

    # Scores
    total_raw_score: int = 0
    normalized_score: Optional[int] = None  # Derivado, nunca se escribe a mano
    accuracy: float = 0.0  # 0-100, último valor reportado
    questions_answered: int = 0
    weekly_score: int = 0
    monthly_score: int = 0

    # Display-only counters
    streak: int = 0
    words_learned: int = 0
    quests_completed: int = 0
    total_stars: int = 0

    # Currencies
    diamonds: int = 0
    emeralds: int = 0
    xp: int = 0

    created_at: Optional[datetime] = None

    class Config:
        populate_by_name = True


class PlayerCreate(BaseModel):
    """Datos para registrar un jugador"""
    name: str = Field(..., min_length=1, max_length=50)


class ProfileSetup(BaseModel):
    """Wizard de perfil: todos los campos son obligatorios"""
    birth_year: int
    grade_level: int
    native_language: str
    competition_opt_in: bool


class ProfileUpdate(BaseModel):
    """Actualización parcial del perfil"""
    birth_year: Optional[int] = None
    grade_level: Optional[int] = None
    native_language: Optional[str] = None
    competition_opt_in: Optional[bool] = None


class GameResult(BaseModel):
    """
    Resultado de una partida.

    accuracy fuera de 0-100 se rechaza aquí; las funciones de scoring
    no validan sus entradas.
    """
    raw_score_to_add: int = Field(..., ge=0)
    accuracy: float = Field(..., ge=0, le=100)
    questions_answered: int = Field(..., ge=0)


class PlayerResponse(BaseModel):
    """Vista pública del perfil de un jugador"""
    id: str
    name: str
    display_name: Optional[str] = None
    age_group: Optional[AgeGroup] = None
    competition_opt_in: bool
    profile_completed: bool
    total_raw_score: int
    normalized_score: Optional[int] = None
    weekly_score: int
    monthly_score: int
    streak: int
    words_learned: int
    quests_completed: int
    diamonds: int
    emeralds: int
    xp: int

    @classmethod
    def from_player(cls, player: Player) -> "PlayerResponse":
        return cls(**player.model_dump(include=set(cls.model_fields)))
