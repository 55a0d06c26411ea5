"""
Controlador de Admin - Disparo manual de los jobs de leaderboards

Sirve cuando el scheduler interno está apagado y los jobs los lanza un
cron externo. Requiere el header X-Admin-Key.
"""

from fastapi import APIRouter, HTTPException, status

from wordquest.core.dependencies import AdminKey, Database
from wordquest.services.leaderboard_service import (
    LeaderboardService,
    InvalidLeaderboardTypeError,
)


router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[AdminKey])


@router.post("/leaderboards/rebuild")
async def rebuild_leaderboards(db: Database):
    """
    Recalcular todos los leaderboards (global y por edad, todos los periodos).
    """
    return await LeaderboardService(db).update_leaderboards()


@router.post("/rewards/{leaderboard_type}/distribute")
async def distribute_rewards(leaderboard_type: str, db: Database):
    """
    Repartir los premios del periodo actual (daily, weekly o monthly).

    Repetirlo dentro del mismo periodo no duplica premios.
    """
    try:
        result = await LeaderboardService(db).distribute_rewards(leaderboard_type)
    except InvalidLeaderboardTypeError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    if not result["success"]:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=result["error"]
        )

    return result


@router.post("/scores/{period}/reset")
async def reset_period_scores(period: str, db: Database):
    """
    Poner a cero weekly_score o monthly_score de todos los jugadores.
    """
    service = LeaderboardService(db)

    if period == "weekly":
        count = await service.reset_weekly_scores()
    elif period == "monthly":
        count = await service.reset_monthly_scores()
    else:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Period must be 'weekly' or 'monthly'"
        )

    return {"success": True, "players_reset": count}
