"""
Controlador de jugadores - Registro, perfil y resultados de partidas
"""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from wordquest.core.dependencies import Database, CurrentPlayer
from wordquest.core.security import create_access_token
from wordquest.models.player import (
    GameResult,
    PlayerCreate,
    PlayerResponse,
    ProfileSetup,
    ProfileUpdate,
)
from wordquest.services.dashboard_service import DashboardService
from wordquest.services.profile_service import (
    ProfileService,
    PlayerNotFoundError,
    InvalidProfileError,
)


router = APIRouter(prefix="/players", tags=["players"])


# Respuesta con JWT
class PlayerAuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    player: PlayerResponse


class GameResultResponse(BaseModel):
    normalized_score: int
    raw_score: int


class DisplayNameResponse(BaseModel):
    display_name: str


def _profile_error_to_http(e: Exception) -> HTTPException:
    if isinstance(e, PlayerNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("", response_model=PlayerAuthResponse, status_code=status.HTTP_201_CREATED)
async def create_player(request: PlayerCreate, db: Database):
    """
    Registra un jugador y devuelve su token.

    El perfil (edad, curso, idioma) se completa después con /players/me/profile/setup.
    """
    player = await ProfileService(db).create_player(request.name)

    return PlayerAuthResponse(
        access_token=create_access_token(player.id),
        player=PlayerResponse.from_player(player),
    )


@router.get("/me", response_model=PlayerResponse)
async def get_me(player: CurrentPlayer):
    """Perfil del jugador autenticado."""
    return PlayerResponse.from_player(player)


@router.post("/me/profile/setup", response_model=PlayerResponse)
async def complete_profile_setup(request: ProfileSetup, player: CurrentPlayer, db: Database):
    """
    Wizard de perfil: calcula grupo de edad, nombre anónimo y puntuación inicial.
    """
    try:
        updated = await ProfileService(db).complete_profile_setup(player.id, request)
    except (PlayerNotFoundError, InvalidProfileError) as e:
        raise _profile_error_to_http(e)

    return PlayerResponse.from_player(updated)


@router.patch("/me/profile", response_model=PlayerResponse)
async def update_profile(request: ProfileUpdate, player: CurrentPlayer, db: Database):
    """Actualización parcial del perfil."""
    try:
        updated = await ProfileService(db).update_player_profile(player.id, request)
    except (PlayerNotFoundError, InvalidProfileError) as e:
        raise _profile_error_to_http(e)

    return PlayerResponse.from_player(updated)


@router.post("/me/results", response_model=GameResultResponse)
async def record_game_result(request: GameResult, player: CurrentPlayer, db: Database):
    """
    Registra el resultado de una partida y recalcula la puntuación normalizada.

    accuracy fuera de 0-100 se rechaza con 422.
    """
    try:
        result = await ProfileService(db).record_game_result(
            player.id,
            request.raw_score_to_add,
            request.accuracy,
            request.questions_answered,
        )
    except PlayerNotFoundError as e:
        raise _profile_error_to_http(e)

    return GameResultResponse(**result)


@router.post("/me/display-name", response_model=DisplayNameResponse)
async def regenerate_display_name(player: CurrentPlayer, db: Database):
    """Genera un nuevo nombre anónimo para los leaderboards."""
    try:
        display_name = await ProfileService(db).regenerate_display_name(player.id)
    except PlayerNotFoundError as e:
        raise _profile_error_to_http(e)

    return DisplayNameResponse(display_name=display_name)


@router.get("/me/comparison", response_model=dict)
async def get_my_comparison(player: CurrentPlayer, db: Database):
    """Comparación del jugador con los de su grupo de edad."""
    comparison = await DashboardService(db).get_player_comparison(player.id)

    if comparison is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Player not found")

    return comparison
