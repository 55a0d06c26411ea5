"""
Controlador de premios - Consultar y reclamar premios de leaderboard
"""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from wordquest.core.dependencies import Database, CurrentPlayer
from wordquest.models.reward import RewardPayload, RewardRecord
from wordquest.services.profile_service import PlayerNotFoundError
from wordquest.services.reward_service import RewardService, RewardClaimError


router = APIRouter(prefix="/rewards", tags=["rewards"])


class ClaimRewardResponse(BaseModel):
    success: bool = True
    reward: RewardPayload


@router.get("/unclaimed", response_model=list[RewardRecord])
async def get_unclaimed_rewards(player: CurrentPlayer, db: Database):
    """
    Premios pendientes de reclamar del jugador actual.
    """
    return await RewardService(db).get_unclaimed_rewards(player.id)


@router.post("/{reward_id}/claim", response_model=ClaimRewardResponse)
async def claim_reward(reward_id: str, player: CurrentPlayer, db: Database):
    """
    Reclamar un premio.

    Solo el dueño puede reclamarlo y solo una vez.
    """
    try:
        reward = await RewardService(db).claim_reward(player.id, reward_id)
    except RewardClaimError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e)
        )
    except PlayerNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return ClaimRewardResponse(reward=reward)
