"""
Controlador de leaderboards - Endpoints de clasificación

Las tablas de clasificación se precalculan en los jobs periódicos.
Este controlador sirve los snapshots guardados; si todavía no existe
el snapshot, se calcula al vuelo.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from wordquest.core.dependencies import Database, CurrentPlayer
from wordquest.models.leaderboard import LeaderboardEntry
from wordquest.models.player import AgeGroup
from wordquest.services.dashboard_service import DashboardService
from wordquest.services.leaderboard_service import (
    LeaderboardService,
    InvalidLeaderboardTypeError,
)


router = APIRouter(prefix="/leaderboards", tags=["leaderboards"])


class LeaderboardResponse(BaseModel):
    """Snapshot de un leaderboard (recortado a `limit` entradas)."""
    type: str
    age_group: Optional[AgeGroup] = None
    entries: list[LeaderboardEntry]
    total_players: int
    period_start: datetime
    period_end: datetime
    last_updated: datetime


class AgeLeagueResponse(LeaderboardResponse):
    """Leaderboard de una liga de edad."""
    league_name: str
    league_emoji: str
    league_description: str


class NearbyEntry(BaseModel):
    rank: int
    display_name: str
    normalized_score: int
    is_current_player: bool


class PlayerRankResponse(BaseModel):
    """Posición del jugador, percentil y los 3 de arriba / 3 de abajo."""
    type: str
    rank: int
    total: int
    percentile: int
    player: dict
    nearby: list[NearbyEntry]


def _bad_type(e: InvalidLeaderboardTypeError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/leagues", response_model=list[dict])
async def get_age_leagues_summary(db: Database):
    """
    Resumen de las ligas por edad (para el selector de liga).
    """
    return await LeaderboardService(db).get_age_leagues_summary()


@router.get("/leagues/{age_group}", response_model=AgeLeagueResponse)
async def get_age_league_leaderboard(
    age_group: AgeGroup,
    db: Database,
    type: str = Query("weekly", description="daily | weekly | monthly | all_time"),
    limit: Optional[int] = Query(None, ge=1, le=100)
):
    """
    Leaderboard de una liga de edad.
    """
    try:
        return await LeaderboardService(db).get_age_league_leaderboard(age_group, type, limit)
    except InvalidLeaderboardTypeError as e:
        raise _bad_type(e)


@router.get("/top", response_model=list[dict])
async def get_top_players(
    db: Database,
    age_group: Optional[AgeGroup] = Query(None),
    limit: int = Query(10, ge=1, le=100)
):
    """
    Top N en vivo (vista previa rápida del leaderboard).
    """
    return await LeaderboardService(db).get_top_players(limit, age_group)


@router.get("/age-groups/stats", response_model=list[dict])
async def get_age_group_stats(db: Database):
    """
    Estadísticas por grupo de edad para el gráfico comparativo.
    """
    return await DashboardService(db).get_age_group_stats()


@router.get("/{leaderboard_type}", response_model=LeaderboardResponse)
async def get_leaderboard(
    leaderboard_type: str,
    db: Database,
    age_group: Optional[AgeGroup] = Query(None, description="Sin age_group = global"),
    limit: Optional[int] = Query(None, ge=1, le=100)
):
    """
    Obtener un leaderboard: daily, weekly, monthly o all_time.
    """
    try:
        return await LeaderboardService(db).get_leaderboard(leaderboard_type, age_group, limit)
    except InvalidLeaderboardTypeError as e:
        raise _bad_type(e)


@router.get("/{leaderboard_type}/me", response_model=Optional[PlayerRankResponse])
async def get_my_rank(
    leaderboard_type: str,
    player: CurrentPlayer,
    db: Database,
    age_group: Optional[AgeGroup] = Query(None)
):
    """
    Posición del jugador actual.

    Devuelve null si el jugador no participa en el ranking.
    """
    try:
        return await LeaderboardService(db).get_player_rank(player.id, leaderboard_type, age_group)
    except InvalidLeaderboardTypeError as e:
        raise _bad_type(e)
