"""
ProfileService - Player demographics and score updates.

normalized_score is derived: every write that changes total_raw_score,
accuracy, question volume or age group recomputes it here.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from wordquest.models.player import Player, ProfileSetup, ProfileUpdate
from wordquest.repositories.player_repository import PlayerRepository
from wordquest.services.scoring import (
    calculate_age_group,
    calculate_normalized_score,
    generate_display_name,
)

logger = logging.getLogger(__name__)


MIN_PLAYER_AGE = 4
MAX_PLAYER_AGE = 20
MIN_GRADE = 1
MAX_GRADE = 11
VALID_LANGUAGES = ("ru", "en", "uk")


class ProfileServiceError(Exception):
    """Base exception for profile service errors."""
    pass


class PlayerNotFoundError(ProfileServiceError):
    """Raised when player is not found."""
    pass


class InvalidProfileError(ProfileServiceError):
    """Raised when profile data is invalid."""
    pass


def validate_birth_year(birth_year: int, current_year: Optional[int] = None):
    current_year = current_year or datetime.now(timezone.utc).year
    if birth_year > current_year - MIN_PLAYER_AGE or birth_year < current_year - MAX_PLAYER_AGE:
        raise InvalidProfileError(
            f"Invalid birth year. Player must be between {MIN_PLAYER_AGE} and {MAX_PLAYER_AGE} years old."
        )


def validate_grade_level(grade_level: int):
    if grade_level < MIN_GRADE or grade_level > MAX_GRADE:
        raise InvalidProfileError(f"Grade level must be between {MIN_GRADE} and {MAX_GRADE}")


def validate_language(language: str):
    if language not in VALID_LANGUAGES:
        raise InvalidProfileError(
            f"Invalid language. Must be one of: {', '.join(VALID_LANGUAGES)}"
        )


def base_raw_score(player: Player) -> int:
    """Raw score credited at profile completion for progress made before it."""
    return player.total_stars * 100 + player.words_learned * 10


class ProfileService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.player_repo = PlayerRepository(db)

    async def _get_player(self, player_id: str) -> Player:
        player = await self.player_repo.get_by_id(player_id)
        if not player:
            raise PlayerNotFoundError("Player not found")
        return player

    async def create_player(self, name: str) -> Player:
        player = await self.player_repo.create(name.strip())
        logger.info("Player %s created", player.id)
        return player

    async def get_player(self, player_id: str) -> Optional[Player]:
        return await self.player_repo.get_by_id(player_id)

    async def complete_profile_setup(self, player_id: str, setup: ProfileSetup) -> Player:
        """
        Wizard flow: set demographics, age group and display name, and
        compute the initial normalized score.

        The initial score assumes 100% accuracy and uses quests completed
        as the question volume. Raw score already earned is kept: the
        progress credit only applies when it is larger. A player with
        recorded results keeps their accuracy and volume.

        Raises:
            PlayerNotFoundError: unknown player
            InvalidProfileError: invalid data, or the profile is already completed
        """
        player = await self._get_player(player_id)

        if player.profile_completed:
            raise InvalidProfileError("Profile already completed")

        validate_birth_year(setup.birth_year)
        validate_grade_level(setup.grade_level)
        validate_language(setup.native_language)

        age_group = calculate_age_group(setup.birth_year)
        raw_score = max(player.total_raw_score, base_raw_score(player))

        if player.questions_answered > 0:
            accuracy, questions = player.accuracy, player.questions_answered
        else:
            accuracy, questions = 100, player.quests_completed

        normalized_score = calculate_normalized_score(
            raw_score,
            age_group,
            accuracy,
            questions
        )

        updated = await self.player_repo.update_fields(player_id, {
            "birth_year": setup.birth_year,
            "grade_level": setup.grade_level,
            "native_language": setup.native_language,
            "age_group": age_group,
            "display_name": player.display_name or generate_display_name(),
            "competition_opt_in": setup.competition_opt_in,
            "profile_completed": True,
            "total_raw_score": raw_score,
            "accuracy": accuracy,
            "questions_answered": questions,
            "normalized_score": normalized_score,
        })

        logger.info("Profile completed for player %s (age group %s)", player_id, age_group)
        return updated

    async def update_player_profile(self, player_id: str, update: ProfileUpdate) -> Player:
        """
        Partial profile update.

        A new birth year re-derives the age group and, with it, the
        normalized score. Opting in without a display name generates one.
        """
        player = await self._get_player(player_id)
        updates = {}

        if update.birth_year is not None:
            validate_birth_year(update.birth_year)
            updates["birth_year"] = update.birth_year

            age_group = calculate_age_group(update.birth_year)
            updates["age_group"] = age_group
            if age_group != player.age_group and player.normalized_score is not None:
                updates["normalized_score"] = calculate_normalized_score(
                    player.total_raw_score,
                    age_group,
                    player.accuracy,
                    player.questions_answered
                )

        if update.grade_level is not None:
            validate_grade_level(update.grade_level)
            updates["grade_level"] = update.grade_level

        if update.native_language is not None:
            validate_language(update.native_language)
            updates["native_language"] = update.native_language

        if update.competition_opt_in is not None:
            updates["competition_opt_in"] = update.competition_opt_in
            if update.competition_opt_in and not player.display_name:
                updates["display_name"] = generate_display_name()

        updates["profile_completed"] = True

        return await self.player_repo.update_fields(player_id, updates)

    async def record_game_result(
        self,
        player_id: str,
        raw_score_to_add: int,
        accuracy: float,
        questions_answered: int
    ) -> dict:
        """
        Add a game's raw score and recompute the normalized score.

        The weekly and monthly accumulators grow by the same amount.
        Players without an age group are scored as "12+".
        """
        player = await self._get_player(player_id)

        new_raw_score = (player.total_raw_score or 0) + raw_score_to_add
        age_group = player.age_group or "12+"

        normalized_score = calculate_normalized_score(
            new_raw_score,
            age_group,
            accuracy,
            questions_answered
        )

        await self.player_repo.update_fields(player_id, {
            "total_raw_score": new_raw_score,
            "weekly_score": player.weekly_score + raw_score_to_add,
            "monthly_score": player.monthly_score + raw_score_to_add,
            "accuracy": accuracy,
            "questions_answered": questions_answered,
            "normalized_score": normalized_score,
        })

        return {"normalized_score": normalized_score, "raw_score": new_raw_score}

    async def regenerate_display_name(self, player_id: str) -> str:
        await self._get_player(player_id)

        display_name = generate_display_name()
        await self.player_repo.update_fields(player_id, {"display_name": display_name})
        return display_name
