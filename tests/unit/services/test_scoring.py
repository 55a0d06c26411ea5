"""
Unit tests for the scoring functions (age groups, normalization, answer
points, reward table).
"""

import random
import re

import pytest

from wordquest.models.reward import RewardPayload
from wordquest.services.scoring import (
    AGE_DIFFICULTY_MULTIPLIER,
    LEADERBOARD_REWARDS,
    calculate_age,
    calculate_age_group,
    calculate_answer_points,
    calculate_normalized_score,
    generate_display_name,
    get_leaderboard_reward,
    round_half_up,
)


class TestAgeGroup:
    """Age group boundaries from birth year."""

    def test_calculate_age(self):
        assert calculate_age(2016, current_year=2026) == 10

    @pytest.mark.parametrize("birth_year,expected", [
        (2020, "6-8"),   # 6
        (2018, "6-8"),   # 8
        (2017, "9-11"),  # 9
        (2015, "9-11"),  # 11
        (2014, "12+"),   # 12
        (2000, "12+"),
    ])
    def test_boundaries(self, birth_year, expected):
        assert calculate_age_group(birth_year, current_year=2026) == expected

    def test_any_birth_year_maps_to_a_group(self):
        """Implausible years are not an error here."""
        assert calculate_age_group(2030, current_year=2026) == "6-8"
        assert calculate_age_group(1900, current_year=2026) == "12+"

    def test_defaults_to_current_year(self, current_year):
        assert calculate_age_group(current_year - 10) == "9-11"


class TestNormalizedScore:
    """Fair cross-age normalization."""

    def test_end_to_end_example(self):
        """Same performance, younger player scores higher."""
        assert calculate_normalized_score(200, "6-8", 95, 20) == 432
        assert calculate_normalized_score(200, "12+", 95, 20) == 288

    def test_volume_bonus_is_capped(self):
        capped = calculate_normalized_score(100, "12+", 50, 1000)
        saturated = calculate_normalized_score(100, "12+", 50, 10000)

        assert capped == 150
        assert saturated == 150

    def test_accuracy_tiers(self):
        assert calculate_normalized_score(100, "12+", 79.9, 0) == 100
        assert calculate_normalized_score(100, "12+", 80, 0) == 110
        assert calculate_normalized_score(100, "12+", 89.9, 0) == 110
        assert calculate_normalized_score(100, "12+", 90, 0) == 120

    def test_monotonic_in_raw_score(self):
        previous = -1
        for raw in range(0, 1000, 7):
            score = calculate_normalized_score(raw, "9-11", 85, 40)
            assert score >= previous
            previous = score

    def test_monotonic_in_accuracy_tiers(self):
        scores = [calculate_normalized_score(250, "9-11", acc, 30) for acc in (0, 50, 80, 85, 90, 100)]
        assert scores == sorted(scores)

    @pytest.mark.parametrize("raw,accuracy,questions", [
        (0, 0, 0),
        (100, 85, 50),
        (777, 92, 150),
        (1, 10, 3),
    ])
    def test_age_fairness_ordering(self, raw, accuracy, questions):
        young = calculate_normalized_score(raw, "6-8", accuracy, questions)
        middle = calculate_normalized_score(raw, "9-11", accuracy, questions)
        older = calculate_normalized_score(raw, "12+", accuracy, questions)

        assert young >= middle >= older

    def test_unknown_age_group_uses_base_multiplier(self):
        assert calculate_normalized_score(100, "adult", 0, 0) == 100

    def test_zero_raw_score(self):
        assert calculate_normalized_score(0, "6-8", 100, 100) == 0

    def test_rounds_half_up(self):
        # 3 * 1.5 = 4.5; Python's round() would give 4
        assert calculate_normalized_score(3, "6-8", 0, 0) == 5

    def test_accuracy_is_not_clamped(self):
        """Out-of-range accuracy is the caller's problem: it just hits a tier."""
        assert calculate_normalized_score(100, "12+", 150, 0) == 120
        assert calculate_normalized_score(100, "12+", -20, 0) == 100

    def test_deterministic(self):
        results = {calculate_normalized_score(321, "9-11", 88, 42) for _ in range(20)}
        assert len(results) == 1


class TestAnswerPoints:
    """Per-answer points with speed, difficulty and streak."""

    def test_no_speed_bonus_at_time_limit(self):
        assert calculate_answer_points(1, 30000, 30000, 1.0) == 100

    def test_instant_answer_gets_full_speed_bonus(self):
        assert calculate_answer_points(1, 0) == 150

    def test_half_time_medium_difficulty(self):
        # speed bonus 25, x1.2
        assert calculate_answer_points(2, 15000) == 150

    def test_hard_question_with_streak(self):
        # (100 + 50) * 1.4 * 2.0
        assert calculate_answer_points(3, 0, 30000, 2.0) == 420

    def test_over_time_gives_no_negative_bonus(self):
        assert calculate_answer_points(1, 45000) == 100

    def test_speed_bonus_is_floored(self):
        assert calculate_answer_points(1, 29999) == 100

    def test_zero_time_limit_gives_no_speed_bonus(self):
        assert calculate_answer_points(1, 100, max_time_ms=0) == 100

    def test_difficulty_is_not_validated(self):
        """Difficulty 5 extrapolates to x1.8 instead of failing."""
        assert calculate_answer_points(5, 0) == 270

    def test_deterministic(self):
        results = {calculate_answer_points(2, 12345, 30000, 1.5) for _ in range(20)}
        assert len(results) == 1


class TestLeaderboardReward:
    """Fixed reward table by rank tier."""

    def test_daily_first_place(self):
        assert get_leaderboard_reward(1, "daily") == RewardPayload(diamonds=50, emeralds=25, xp=200)

    def test_daily_outside_top_ten(self):
        assert get_leaderboard_reward(11, "daily") == RewardPayload(diamonds=0, emeralds=0, xp=0)
        assert get_leaderboard_reward(11, "daily").is_empty()

    def test_weekly_top_ten_bucket(self):
        assert get_leaderboard_reward(7, "weekly") == RewardPayload(diamonds=50, emeralds=25, xp=150)

    def test_rank_ten_is_still_paid(self):
        assert get_leaderboard_reward(10, "daily") == RewardPayload(diamonds=10, emeralds=5, xp=50)

    def test_monthly_podium(self):
        assert get_leaderboard_reward(1, "monthly") == RewardPayload(diamonds=500, emeralds=250, xp=1000)
        assert get_leaderboard_reward(2, "monthly") == RewardPayload(diamonds=350, emeralds=175, xp=750)
        assert get_leaderboard_reward(3, "monthly") == RewardPayload(diamonds=250, emeralds=125, xp=500)

    def test_rewards_grow_with_period_length(self):
        for rank in (1, 2, 3, 5):
            daily = get_leaderboard_reward(rank, "daily")
            weekly = get_leaderboard_reward(rank, "weekly")
            monthly = get_leaderboard_reward(rank, "monthly")
            assert daily.diamonds < weekly.diamonds < monthly.diamonds
            assert daily.xp < weekly.xp < monthly.xp

    def test_all_time_has_no_rewards(self):
        with pytest.raises(ValueError):
            get_leaderboard_reward(1, "all_time")


class TestTables:
    """Lookup tables are read-only."""

    def test_age_multipliers_are_immutable(self):
        with pytest.raises(TypeError):
            AGE_DIFFICULTY_MULTIPLIER["6-8"] = 3.0

    def test_reward_table_is_immutable(self):
        with pytest.raises(TypeError):
            LEADERBOARD_REWARDS["daily"][1] = {"diamonds": 1}


class TestHelpers:

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4999) == 2
        assert round_half_up(0) == 0

    def test_display_name_format(self):
        name = generate_display_name()
        assert re.fullmatch(r"[A-Z][a-z]+[A-Z][a-z]+\d{1,3}", name)

    def test_display_name_is_reproducible_with_seed(self):
        assert generate_display_name(random.Random(7)) == generate_display_name(random.Random(7))
