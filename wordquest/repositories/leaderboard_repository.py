"""
🏆 LeaderboardRepository - Snapshots precalculados

Un documento por (type, age_group). Cada rebuild reemplaza el documento
entero, nunca se parchean entradas sueltas.
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from wordquest.models.leaderboard import LeaderboardSnapshot


class LeaderboardRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["leaderboards"]

    # ============================================
    # 📌 READ
    # ============================================

    async def get(
        self,
        leaderboard_type: str,
        age_group: Optional[str] = None
    ) -> Optional[LeaderboardSnapshot]:
        """Snapshot por tipo; age_group None es el global"""
        doc = await self.collection.find_one({
            "type": leaderboard_type,
            "age_group": age_group,
        })
        return LeaderboardSnapshot(**doc) if doc else None

    async def list_by_type(self, leaderboard_type: str) -> list[LeaderboardSnapshot]:
        docs = await self.collection.find({"type": leaderboard_type}).to_list(length=None)
        return [LeaderboardSnapshot(**doc) for doc in docs]

    # ============================================
    # 📌 WRITE
    # ============================================

    async def replace(self, snapshot: LeaderboardSnapshot) -> bool:
        """
        Reemplaza (o inserta) el snapshot completo

        Retorna True si el documento era nuevo
        """
        doc = snapshot.model_dump(by_alias=True)

        result = await self.collection.replace_one(
            {"_id": snapshot.id},
            doc,
            upsert=True
        )
        return result.upserted_id is not None
