"""
LeaderboardService - Periodic leaderboard rebuilds, reward distribution and
leaderboard queries.

update_leaderboards() recomputes the global and per-age-group snapshots for
every period type and replaces them wholesale, so re-running it is safe.
distribute_rewards() pays the top of the global snapshot once per period:
reward ids are derived from (type, period start, rank), a second call in the
same period finds the records already there and creates nothing.

NOTE: every period type ranks by normalized_score. weekly_score and
monthly_score are accumulated and reset on schedule but are not read here.
"""

import logging
from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from wordquest.core.config import get_settings
from wordquest.models.leaderboard import (
    LEADERBOARD_TYPES,
    REWARDED_LEADERBOARD_TYPES,
    LeaderboardSnapshot,
    snapshot_key,
)
from wordquest.models.player import AGE_GROUPS
from wordquest.models.reward import RewardRecord
from wordquest.repositories.leaderboard_repository import LeaderboardRepository
from wordquest.repositories.player_repository import PlayerRepository
from wordquest.repositories.reward_repository import RewardRepository
from wordquest.services.ranking import is_ranked_participant, rank_cohort, sort_cohort
from wordquest.services.scoring import get_leaderboard_reward, round_half_up

logger = logging.getLogger(__name__)


AGE_LEAGUES = MappingProxyType({
    "6-8": MappingProxyType({"name": "Young Seekers", "emoji": "🐣", "description": "Grades 1-2"}),
    "9-11": MappingProxyType({"name": "Clever Foxes", "emoji": "🦊", "description": "Grades 3-5"}),
    "12+": MappingProxyType({"name": "Wise Wolves", "emoji": "🐺", "description": "Grades 6+"}),
})

UNKNOWN_LEAGUE = MappingProxyType({"name": "Unknown League", "emoji": "🏆", "description": ""})

NEARBY_RANGE = 3


class LeaderboardServiceError(Exception):
    """Base exception for leaderboard service errors."""
    pass


class InvalidLeaderboardTypeError(LeaderboardServiceError):
    """Raised when a leaderboard type is unknown or not valid for the operation."""
    pass


def period_bounds(
    leaderboard_type: str,
    now: datetime,
    all_time_start: str = "2024-01-01"
) -> tuple[datetime, datetime]:
    """
    (period_start, period_end) for a leaderboard type at `now` (UTC).

    Weeks start on Sunday.
    """
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)

    if leaderboard_type == "daily":
        start = today
    elif leaderboard_type == "weekly":
        # weekday(): Monday=0 ... Sunday=6
        start = today - timedelta(days=(today.weekday() + 1) % 7)
    elif leaderboard_type == "monthly":
        start = today.replace(day=1)
    else:
        start = datetime.fromisoformat(all_time_start).replace(tzinfo=timezone.utc)

    return start, now


class LeaderboardService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.player_repo = PlayerRepository(db)
        self.leaderboard_repo = LeaderboardRepository(db)
        self.reward_repo = RewardRepository(db)
        self.settings = get_settings()

    def _validate_type(self, leaderboard_type: str, allowed=LEADERBOARD_TYPES):
        if leaderboard_type not in allowed:
            raise InvalidLeaderboardTypeError(
                f"Invalid leaderboard type '{leaderboard_type}'. Must be one of: {', '.join(allowed)}"
            )

    async def _competitive_players(self) -> list:
        players = await self.player_repo.list_all()
        return [p for p in players if is_ranked_participant(p)]

    # ============================================
    # 🔄 PERIODIC JOBS
    # ============================================

    async def update_leaderboards(self, now: Optional[datetime] = None) -> dict:
        """
        Rebuild every leaderboard snapshot.

        1. Load all players and keep the ranked participants
        2. Rank the global cohort and each age group (top N per snapshot)
        3. Replace the snapshot for each (type, age_group) key

        Each replace is its own atomic write; if the run dies halfway the
        next run repairs the stale snapshots.
        """
        now = now or datetime.now(timezone.utc)
        size = self.settings.leaderboard_snapshot_size

        competitive = await self._competitive_players()

        cohorts = {None: competitive}
        for age_group in AGE_GROUPS:
            cohorts[age_group] = [p for p in competitive if p.age_group == age_group]
        ranked = {
            age_group: rank_cohort(players, limit=size)
            for age_group, players in cohorts.items()
        }

        snapshots_created = 0
        for leaderboard_type in LEADERBOARD_TYPES:
            period_start, period_end = period_bounds(
                leaderboard_type, now, self.settings.all_time_period_start
            )

            for age_group, entries in ranked.items():
                snapshot = LeaderboardSnapshot(
                    _id=snapshot_key(leaderboard_type, age_group),
                    type=leaderboard_type,
                    age_group=age_group,
                    entries=entries,
                    total_players=len(cohorts[age_group]),
                    period_start=period_start,
                    period_end=period_end,
                    last_updated=now,
                )
                if await self.leaderboard_repo.replace(snapshot):
                    snapshots_created += 1

        logger.info(
            "Leaderboards updated: %d ranked players, %d new snapshots",
            len(competitive), snapshots_created
        )

        return {"success": True, "players_processed": len(competitive)}

    async def distribute_rewards(self, leaderboard_type: str) -> dict:
        """
        Create reward records for the top of the global leaderboard.

        Only daily, weekly and monthly leaderboards pay out. Records are
        keyed by (type, period start, rank), so calling this again in the
        same period does not pay twice.
        """
        self._validate_type(leaderboard_type, REWARDED_LEADERBOARD_TYPES)

        snapshot = await self.leaderboard_repo.get(leaderboard_type, None)
        if not snapshot:
            logger.warning("No global %s leaderboard to distribute rewards from", leaderboard_type)
            return {"success": False, "error": "Leaderboard not found"}

        competition_type = f"{leaderboard_type}_leaderboard"
        period = snapshot.period_start.date().isoformat()
        now = datetime.now(timezone.utc)

        rewards_created = 0
        for entry in snapshot.entries[:self.settings.reward_top_n]:
            reward = get_leaderboard_reward(entry.rank, leaderboard_type)
            if reward.is_empty():
                continue

            record = RewardRecord(
                _id=f"{competition_type}:{period}:{entry.rank}",
                player_id=entry.player_id,
                competition_type=competition_type,
                competition_id=snapshot.id,
                period_start=period,
                rank=entry.rank,
                reward=reward,
                claimed=False,
                created_at=now,
            )
            if await self.reward_repo.create_if_absent(record):
                rewards_created += 1

        logger.info(
            "Distributed %s rewards for period %s: %d new records",
            leaderboard_type, period, rewards_created
        )

        return {"success": True, "rewards_created": rewards_created}

    async def reset_weekly_scores(self) -> int:
        count = await self.player_repo.reset_scores("weekly_score")
        logger.info("Weekly scores reset for %d players", count)
        return count

    async def reset_monthly_scores(self) -> int:
        count = await self.player_repo.reset_scores("monthly_score")
        logger.info("Monthly scores reset for %d players", count)
        return count

    # ============================================
    # 📊 QUERIES
    # ============================================

    async def get_leaderboard(
        self,
        leaderboard_type: str,
        age_group: Optional[str] = None,
        limit: Optional[int] = None
    ) -> dict:
        """
        Leaderboard view for the UI.

        Served from the stored snapshot. If the snapshot does not exist yet
        the ranking is computed on the fly from the players.
        """
        self._validate_type(leaderboard_type)
        limit = limit or self.settings.leaderboard_default_limit

        snapshot = await self.leaderboard_repo.get(leaderboard_type, age_group)
        if snapshot:
            return {
                "type": leaderboard_type,
                "age_group": age_group,
                "entries": snapshot.entries[:limit],
                "total_players": snapshot.total_players,
                "period_start": snapshot.period_start,
                "period_end": snapshot.period_end,
                "last_updated": snapshot.last_updated,
            }

        competitive = await self._competitive_players()
        if age_group:
            competitive = [p for p in competitive if p.age_group == age_group]

        now = datetime.now(timezone.utc)
        period_start, period_end = period_bounds(
            leaderboard_type, now, self.settings.all_time_period_start
        )
        return {
            "type": leaderboard_type,
            "age_group": age_group,
            "entries": rank_cohort(competitive, limit=limit),
            "total_players": len(competitive),
            "period_start": period_start,
            "period_end": period_end,
            "last_updated": now,
        }

    async def get_age_league_leaderboard(
        self,
        age_group: str,
        leaderboard_type: str = "weekly",
        limit: Optional[int] = None
    ) -> dict:
        """Age group leaderboard with its league name and emoji."""
        leaderboard = await self.get_leaderboard(leaderboard_type, age_group, limit)
        league = AGE_LEAGUES.get(age_group, UNKNOWN_LEAGUE)

        return {
            **leaderboard,
            "league_name": league["name"],
            "league_emoji": league["emoji"],
            "league_description": league["description"],
        }

    async def get_age_leagues_summary(self) -> list[dict]:
        """Player count and current leader of each age league."""
        competitive = await self._competitive_players()

        leagues = []
        for age_group, league in AGE_LEAGUES.items():
            league_players = sort_cohort(p for p in competitive if p.age_group == age_group)
            top = league_players[0] if league_players else None

            leagues.append({
                "age_group": age_group,
                "name": league["name"],
                "emoji": league["emoji"],
                "description": league["description"],
                "player_count": len(league_players),
                "top_player": {
                    "display_name": top.display_name or top.name or "Anonymous",
                    "normalized_score": top.normalized_score or 0,
                } if top else None,
            })

        return leagues

    async def get_top_players(
        self,
        limit: int = 10,
        age_group: Optional[str] = None
    ) -> list[dict]:
        competitive = await self._competitive_players()
        if age_group:
            competitive = [p for p in competitive if p.age_group == age_group]

        return [
            {
                "rank": rank,
                "id": player.id,
                "display_name": player.display_name or "Anonymous",
                "normalized_score": player.normalized_score or 0,
                "age_group": player.age_group,
            }
            for rank, player in enumerate(sort_cohort(competitive)[:limit], start=1)
        ]

    async def get_player_rank(
        self,
        player_id: str,
        leaderboard_type: str = "all_time",
        age_group: Optional[str] = None
    ) -> Optional[dict]:
        """
        Player's live position among ranked participants.

        Returns None if the player does not exist, has not opted in, or is
        not part of the ranked cohort (e.g. other age group, no score yet).
        """
        self._validate_type(leaderboard_type)

        player = await self.player_repo.get_by_id(player_id)
        if not player or not player.competition_opt_in:
            return None

        competitive = await self._competitive_players()
        if age_group:
            competitive = [p for p in competitive if p.age_group == age_group]

        ordered = sort_cohort(competitive)
        index = next((i for i, p in enumerate(ordered) if p.id == player_id), None)
        if index is None:
            return None

        rank = index + 1
        total = len(ordered)
        start = max(0, index - NEARBY_RANGE)
        end = min(total, index + NEARBY_RANGE + 1)

        return {
            "type": leaderboard_type,
            "rank": rank,
            "total": total,
            "percentile": round_half_up((total - rank) / total * 100),
            "player": {
                "id": player.id,
                "display_name": player.display_name or player.name or "Anonymous",
                "normalized_score": player.normalized_score or 0,
                "streak": player.streak,
            },
            "nearby": [
                {
                    "rank": start + offset + 1,
                    "display_name": p.display_name or p.name or "Anonymous",
                    "normalized_score": p.normalized_score or 0,
                    "is_current_player": p.id == player_id,
                }
                for offset, p in enumerate(ordered[start:end])
            ],
        }
