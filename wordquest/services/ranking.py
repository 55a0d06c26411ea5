"""
Ranking - Ordering of cohorts, percentiles and challenge winners.

Leaderboard-wide ranking sorts by normalized score (desc) and breaks ties
by player id (asc), so rebuilding a leaderboard from the same players
always produces the same entries. Challenges break ties by total time:
the faster player wins.
"""

from typing import Iterable, Optional, Sequence

from wordquest.models.challenge import ChallengeParticipant, ChallengeResult, ChallengeScore
from wordquest.models.leaderboard import LeaderboardEntry
from wordquest.models.player import Player
from wordquest.services.scoring import calculate_normalized_score, round_half_up


def is_ranked_participant(player: Player) -> bool:
    """Only opted-in players with a normalized score are ranked."""
    return player.competition_opt_in is True and player.normalized_score is not None


def sort_cohort(players: Iterable[Player]) -> list[Player]:
    return sorted(players, key=lambda p: (-(p.normalized_score or 0), p.id))


def to_entry(player: Player, rank: int) -> LeaderboardEntry:
    return LeaderboardEntry(
        player_id=player.id,
        display_name=player.display_name or player.name or "Anonymous",
        normalized_score=player.normalized_score or 0,
        raw_score=player.total_raw_score or 0,
        accuracy=player.accuracy or 0.0,
        streak=player.streak or 0,
        words_learned=player.words_learned or 0,
        rank=rank,
    )


def rank_cohort(
    players: Iterable[Player],
    limit: Optional[int] = None
) -> list[LeaderboardEntry]:
    """
    Rank a cohort of participants.

    Callers pass an already filtered cohort (see is_ranked_participant),
    optionally restricted to one age group. rank == position + 1.
    """
    ordered = sort_cohort(players)
    if limit is not None:
        ordered = ordered[:limit]

    return [to_entry(player, rank) for rank, player in enumerate(ordered, start=1)]


def calculate_percentile(player_score: float, all_scores: Sequence[float]) -> int:
    """
    Share of scores strictly below player_score, 0-100.

    An empty cohort returns 100.
    """
    if len(all_scores) == 0:
        return 100

    below_count = sum(1 for score in all_scores if score < player_score)
    return round_half_up(below_count / len(all_scores) * 100)


def determine_challenge_winner(
    participants: Sequence[ChallengeParticipant]
) -> ChallengeResult:
    """
    Winner of a challenge by normalized score, faster total time on ties.

    Returns winner_id None for an empty challenge.
    """
    if not participants:
        return ChallengeResult(winner_id=None, scores=[])

    scored = [
        (
            calculate_normalized_score(
                p.score,
                p.age_group,
                p.accuracy,
                p.correct_answers
            ),
            p.total_time,
            p.player_id,
        )
        for p in participants
    ]

    # Sort by normalized score (descending), then by time (ascending)
    scored.sort(key=lambda s: (-s[0], s[1]))

    return ChallengeResult(
        winner_id=scored[0][2],
        scores=[
            ChallengeScore(player_id=player_id, normalized_score=normalized)
            for normalized, _, player_id in scored
        ],
    )
