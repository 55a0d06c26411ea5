"""
Scoring - Fair cross-age scoring for WordQuest.

Normalizes raw game scores so players of different ages can compete on the
same leaderboard. Younger players get a multiplier because the same
questions are harder for them.

Sistema de puntos por respuesta:
- 100 puntos base
- hasta +50 por velocidad
- x1.0 / x1.2 / x1.4 según dificultad (1-3)
- x racha actual (1.0 - 2.0)

These functions are pure: they do not validate ranges. Range checks for
accuracy and difficulty live in the request models of the API.
"""

import math
import random
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Optional

from wordquest.models.player import AgeGroup
from wordquest.models.reward import RewardPayload


AGE_GROUP_INFO = MappingProxyType({
    "6-8": MappingProxyType({"min": 6, "max": 8, "label": "6-8 years"}),
    "9-11": MappingProxyType({"min": 9, "max": 11, "label": "9-11 years"}),
    "12+": MappingProxyType({"min": 12, "max": 99, "label": "12+ years"}),
})

# Younger players get a bonus
AGE_DIFFICULTY_MULTIPLIER = MappingProxyType({
    "6-8": 1.5,
    "9-11": 1.2,
    "12+": 1.0,
})

# (threshold, bonus), checked top-down
ACCURACY_BONUSES = (
    (90, 1.2),
    (80, 1.1),
)

VOLUME_BONUS_FACTOR = 100  # Questions answered to reach max bonus
MAX_VOLUME_BONUS = 1.5

BASE_ANSWER_POINTS = 100
MAX_SPEED_BONUS = 50
DEFAULT_MAX_TIME_MS = 30000

_EMPTY_REWARD = MappingProxyType({"diamonds": 0, "emeralds": 0, "xp": 0})

LEADERBOARD_REWARDS = MappingProxyType({
    "daily": MappingProxyType({
        1: MappingProxyType({"diamonds": 50, "emeralds": 25, "xp": 200}),
        2: MappingProxyType({"diamonds": 30, "emeralds": 15, "xp": 150}),
        3: MappingProxyType({"diamonds": 20, "emeralds": 10, "xp": 100}),
        "top10": MappingProxyType({"diamonds": 10, "emeralds": 5, "xp": 50}),
    }),
    "weekly": MappingProxyType({
        1: MappingProxyType({"diamonds": 200, "emeralds": 100, "xp": 500}),
        2: MappingProxyType({"diamonds": 150, "emeralds": 75, "xp": 400}),
        3: MappingProxyType({"diamonds": 100, "emeralds": 50, "xp": 300}),
        "top10": MappingProxyType({"diamonds": 50, "emeralds": 25, "xp": 150}),
    }),
    "monthly": MappingProxyType({
        1: MappingProxyType({"diamonds": 500, "emeralds": 250, "xp": 1000}),
        2: MappingProxyType({"diamonds": 350, "emeralds": 175, "xp": 750}),
        3: MappingProxyType({"diamonds": 250, "emeralds": 125, "xp": 500}),
        "top10": MappingProxyType({"diamonds": 100, "emeralds": 50, "xp": 250}),
    }),
})

_NAME_ADJECTIVES = (
    "Swift", "Clever", "Bright", "Magic", "Star",
    "Cosmic", "Golden", "Crystal", "Silver", "Mystic",
)
_NAME_NOUNS = (
    "Wizard", "Mage", "Scholar", "Sage", "Learner",
    "Knight", "Phoenix", "Dragon", "Owl", "Fox",
)


def round_half_up(value: float) -> int:
    """Round .5 up (towards +inf) instead of Python's round-half-to-even."""
    return int(math.floor(value + 0.5))


def calculate_age(birth_year: int, current_year: Optional[int] = None) -> int:
    if current_year is None:
        current_year = datetime.now(timezone.utc).year
    return current_year - birth_year


def calculate_age_group(birth_year: int, current_year: Optional[int] = None) -> AgeGroup:
    """Age group from birth year. Any year maps to some group."""
    age = calculate_age(birth_year, current_year)

    if age <= 8:
        return "6-8"
    if age <= 11:
        return "9-11"
    return "12+"


def accuracy_bonus(accuracy: float) -> float:
    for threshold, bonus in ACCURACY_BONUSES:
        if accuracy >= threshold:
            return bonus
    return 1.0


def volume_bonus(questions_answered: float) -> float:
    return min(1 + questions_answered / VOLUME_BONUS_FACTOR, MAX_VOLUME_BONUS)


def calculate_normalized_score(
    raw_score: float,
    age_group: str,
    accuracy: float,
    questions_answered: float
) -> int:
    """
    Normalized score for fair competition across ages.

    normalized = raw * age_multiplier * accuracy_bonus * volume_bonus

    Args:
        raw_score: Raw points earned (>= 0)
        age_group: "6-8", "9-11" or "12+" (unknown groups use 1.0)
        accuracy: Accuracy percentage, expected 0-100
        questions_answered: Total questions answered

    Returns:
        Normalized score, rounded half-up
    """
    age_multiplier = AGE_DIFFICULTY_MULTIPLIER.get(age_group, 1.0)

    normalized = (
        raw_score
        * age_multiplier
        * accuracy_bonus(accuracy)
        * volume_bonus(questions_answered)
    )

    return round_half_up(normalized)


def calculate_answer_points(
    difficulty: float,
    time_spent_ms: float,
    max_time_ms: float = DEFAULT_MAX_TIME_MS,
    streak_bonus: float = 1.0
) -> int:
    """
    Points for a single correct answer.

    Args:
        difficulty: Question difficulty (1-3)
        time_spent_ms: Time spent answering
        max_time_ms: Time limit for the question
        streak_bonus: Current streak multiplier

    Returns:
        Points earned
    """
    difficulty_multiplier = 0.8 + difficulty * 0.2  # 1.0, 1.2, 1.4

    if max_time_ms > 0:
        speed_ratio = max(0, (max_time_ms - time_spent_ms) / max_time_ms)
    else:
        speed_ratio = 0
    speed_bonus = math.floor(speed_ratio * MAX_SPEED_BONUS)

    points = (BASE_ANSWER_POINTS + speed_bonus) * difficulty_multiplier * streak_bonus

    return round_half_up(points)


def get_leaderboard_reward(rank: int, leaderboard_type: str) -> RewardPayload:
    """
    Reward for a final leaderboard position.

    Only daily, weekly and monthly leaderboards pay out. Ranks past 10
    get nothing.
    """
    if leaderboard_type not in LEADERBOARD_REWARDS:
        raise ValueError(f"No rewards defined for leaderboard type '{leaderboard_type}'")

    type_rewards = LEADERBOARD_REWARDS[leaderboard_type]

    if rank in (1, 2, 3):
        return RewardPayload(**type_rewards[rank])
    if 1 <= rank <= 10:
        return RewardPayload(**type_rewards["top10"])

    return RewardPayload(**_EMPTY_REWARD)


def generate_display_name(rng: Optional[random.Random] = None) -> str:
    """Anonymous leaderboard name: [Adjective][Noun][Number]"""
    rng = rng or random
    adjective = rng.choice(_NAME_ADJECTIVES)
    noun = rng.choice(_NAME_NOUNS)
    return f"{adjective}{noun}{rng.randrange(1000)}"
