"""
DashboardService - Peer comparisons for the parent/player dashboard.
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from wordquest.models.player import AGE_GROUPS
from wordquest.repositories.player_repository import PlayerRepository
from wordquest.services.ranking import calculate_percentile
from wordquest.services.scoring import AGE_GROUP_INFO, round_half_up


def _average(values: list) -> float:
    return sum(values) / len(values) if values else 0


class DashboardService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.player_repo = PlayerRepository(db)

    async def get_player_comparison(self, player_id: str) -> Optional[dict]:
        """
        Compare a player with the ranked players of their age group.

        Players without an age group are compared with "12+".
        """
        player = await self.player_repo.get_by_id(player_id)
        if not player:
            return None

        age_group = player.age_group or "12+"
        peers = await self.player_repo.list_competitive(age_group)

        peer_scores = [p.normalized_score or 0 for p in peers]
        avg_score = _average(peer_scores)
        player_score = player.normalized_score or 0

        return {
            "player": {
                "id": player.id,
                "display_name": player.display_name or player.name or "Anonymous",
                "normalized_score": player_score,
                "streak": player.streak,
                "words_learned": player.words_learned,
                "age_group": age_group,
            },
            "peer_stats": {
                "total_peers": len(peers),
                "avg_score": round_half_up(avg_score),
                "avg_streak": round_half_up(_average([p.streak for p in peers]) * 10) / 10,
                "avg_words_learned": round_half_up(_average([p.words_learned for p in peers])),
            },
            "comparison": {
                "percentile": calculate_percentile(player_score, peer_scores),
                "score_diff": round_half_up(player_score - avg_score),
                "is_above_average": player_score > avg_score,
            },
        }

    async def get_age_group_stats(self) -> list[dict]:
        """
        Per age group summary of opted-in players, for the comparison chart.

        Opted-in players without a score yet are counted with score 0.
        """
        players = [p for p in await self.player_repo.list_all() if p.competition_opt_in]

        stats = []
        for age_group in AGE_GROUPS:
            group = [p for p in players if p.age_group == age_group]
            scores = [p.normalized_score or 0 for p in group]

            stats.append({
                "age_group": age_group,
                "label": AGE_GROUP_INFO[age_group]["label"],
                "player_count": len(group),
                "avg_score": round_half_up(_average(scores)),
                "avg_streak": round_half_up(_average([p.streak for p in group]) * 10) / 10,
                "top_score": max(scores) if scores else 0,
            })

        return stats
