"""
Scheduler - Periodic leaderboard jobs (APScheduler, UTC).

| job                        | when                       |
|----------------------------|----------------------------|
| update-leaderboards        | every hour at :15          |
| daily-leaderboard-rewards  | every day 23:55            |
| weekly-leaderboard-rewards | Sunday 23:55               |
| monthly-leaderboard-rewards| last day of month 23:55    |
| reset-weekly-scores        | Monday 00:00               |
| reset-monthly-scores       | 1st of month 00:00         |

Daily and monthly reward jobs fire just before their period closes, so
they pay out on the final scores of that day or month. Weeks start on
Sunday: the Sunday 23:55 weekly job pays out at the end of the first day
of a week, and its records carry that week's start date. Each job runs
alone (max_instances=1).
"""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from wordquest.database import Database
from wordquest.services.leaderboard_service import LeaderboardService

logger = logging.getLogger(__name__)


async def update_leaderboards_job():
    service = LeaderboardService(Database.get_db())
    await service.update_leaderboards()


async def distribute_rewards_job(leaderboard_type: str):
    service = LeaderboardService(Database.get_db())
    # Rebuild first so the payout reflects the latest scores of the period
    await service.update_leaderboards()
    await service.distribute_rewards(leaderboard_type)


async def reset_weekly_scores_job():
    await LeaderboardService(Database.get_db()).reset_weekly_scores()


async def reset_monthly_scores_job():
    await LeaderboardService(Database.get_db()).reset_monthly_scores()


JOBS = (
    ("update-leaderboards", update_leaderboards_job, {"minute": 15}, None),
    ("daily-leaderboard-rewards", distribute_rewards_job,
     {"hour": 23, "minute": 55}, ["daily"]),
    ("weekly-leaderboard-rewards", distribute_rewards_job,
     {"day_of_week": "sun", "hour": 23, "minute": 55}, ["weekly"]),
    ("monthly-leaderboard-rewards", distribute_rewards_job,
     {"day": "last", "hour": 23, "minute": 55}, ["monthly"]),
    ("reset-weekly-scores", reset_weekly_scores_job,
     {"day_of_week": "mon", "hour": 0, "minute": 0}, None),
    ("reset-monthly-scores", reset_monthly_scores_job,
     {"day": 1, "hour": 0, "minute": 0}, None),
)


def create_scheduler() -> AsyncIOScheduler:
    """Build a scheduler with all leaderboard jobs registered (not started)."""
    scheduler = AsyncIOScheduler(timezone="UTC")

    for job_id, func, cron, args in JOBS:
        scheduler.add_job(
            func,
            trigger="cron",
            id=job_id,
            args=args,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            **cron
        )
        logger.info("Scheduled job %s (%s)", job_id, cron)

    return scheduler
