"""
Controlador de salud - Estado de la API, la BD y el scheduler
"""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from wordquest.database import Database


router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    database: str
    scheduler: str  # running | stopped | disabled
    jobs: list[str] = []


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """
    Comprueba la conexión a la BD y si los jobs de leaderboards están programados.
    """
    scheduler = getattr(request.app.state, "scheduler", None)

    if scheduler is None:
        scheduler_status, jobs = "disabled", []
    else:
        scheduler_status = "running" if scheduler.running else "stopped"
        jobs = [job.id for job in scheduler.get_jobs()]

    return HealthResponse(
        status="ok",
        database="connected" if Database.db is not None else "disconnected",
        scheduler=scheduler_status,
        jobs=jobs,
    )
