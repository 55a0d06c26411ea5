"""
🔌 Database Connection Setup - MongoDB

Configuración centralizada para conectar a MongoDB
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from wordquest.core.config import get_settings

logger = logging.getLogger(__name__)


class Database:
    """Singleton para la conexión a MongoDB"""

    client: Optional[AsyncIOMotorClient] = None
    db: Optional[AsyncIOMotorDatabase] = None

    @classmethod
    async def connect(cls):
        """Conecta a MongoDB"""
        if cls.client is None:
            settings = get_settings()

            cls.client = AsyncIOMotorClient(
                settings.mongodb_uri,
                maxPoolSize=10,
                minPoolSize=2,
            )
            cls.db = cls.client[settings.mongodb_db_name]

            # Test de conexión
            await cls.client.admin.command("ping")
            logger.info("✅ Connected to MongoDB: %s", settings.mongodb_db_name)

    @classmethod
    async def disconnect(cls):
        """Cierra la conexión"""
        if cls.client is not None:
            cls.client.close()
            cls.client = None
            cls.db = None
            logger.info("❌ Disconnected from MongoDB")

    @classmethod
    def get_db(cls) -> AsyncIOMotorDatabase:
        """Retorna la instancia de la base de datos"""
        if cls.db is None:
            raise RuntimeError("Database not connected. Call Database.connect() first.")
        return cls.db


# ============================================
# 🎯 DEPENDENCY para FastAPI
# ============================================

async def get_database() -> AsyncIOMotorDatabase:
    """
    FastAPI dependency para inyectar la DB

    Uso:
        @router.get("/leaderboards/{leaderboard_type}")
        async def get_leaderboard(
            leaderboard_type: str,
            db: AsyncIOMotorDatabase = Depends(get_database)
        ):
            service = LeaderboardService(db)
            return await service.get_leaderboard(leaderboard_type)
    """
    return Database.get_db()


# ============================================
# 🏗️ CREAR ÍNDICES (idempotente, se llama al arrancar)
# ============================================

async def create_indexes(db: Optional[AsyncIOMotorDatabase] = None):
    """
    Crea los índices necesarios para las queries de ranking y premios
    """
    db = db if db is not None else Database.get_db()

    # Índices para players
    await db.players.create_index("age_group")
    await db.players.create_index("normalized_score")
    await db.players.create_index([("competition_opt_in", 1), ("age_group", 1)])

    # Índices para leaderboards (uno por tipo + grupo de edad)
    await db.leaderboards.create_index("type")
    await db.leaderboards.create_index([("type", 1), ("age_group", 1)], unique=True)

    # Índices para competition_rewards
    await db.competition_rewards.create_index([("player_id", 1), ("claimed", 1)])
    await db.competition_rewards.create_index("competition_id")

    logger.info("✅ Indexes created successfully")
