"""
Entry point de la API
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wordquest.core.config import get_settings
from wordquest.database import Database, create_indexes
from wordquest.services.scheduler import create_scheduler

from wordquest.controllers.health_controller import router as health_router
from wordquest.controllers.players_controller import router as players_router
from wordquest.controllers.leaderboard_controller import router as leaderboard_router
from wordquest.controllers.rewards_controller import router as rewards_router
from wordquest.controllers.scoring_controller import router as scoring_router
from wordquest.controllers.admin_controller import router as admin_router

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await Database.connect()
    await create_indexes()

    # Los jobs periódicos (rebuild de leaderboards, premios, resets)
    app.state.scheduler = None
    if settings.scheduler_enabled:
        app.state.scheduler = create_scheduler()
        app.state.scheduler.start()
        logger.info("Scheduler started")

    yield

    if app.state.scheduler is not None:
        app.state.scheduler.shutdown(wait=False)
    await Database.disconnect()

# Creo la app
app = FastAPI(
    title="WordQuest Leaderboards API",
    description="Puntuación justa entre edades, leaderboards y premios de WordQuest",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.cors_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Agrego todos los routers de los controllers al app
app.include_router(health_router)
app.include_router(players_router)
app.include_router(leaderboard_router)
app.include_router(rewards_router)
app.include_router(scoring_router)
app.include_router(admin_router)


@app.get("/")
async def root():
    # Endpoint raíz, sirve para verificar que la API está levantada
    return {
        "name": "WordQuest Leaderboards API",
        "version": "1.0.0",
        "docs": "/docs"
    }
