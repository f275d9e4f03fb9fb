"""Challenge and reward endpoints."""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from libs.db.session import get_async_db
from services.league_service.models import GymnastLevel
from services.league_service.routers._helpers import get_current_principal
from services.league_service.schemas import (
    ChallengeCompletionResponse,
    ChallengeCreate,
    ChallengeResponse,
    RedemptionResponse,
    RewardCreate,
    RewardResponse,
)
from services.league_service.services import gamification
from services.league_service.services.gate import Principal
from sqlalchemy.ext.asyncio import AsyncSession

challenge_router = APIRouter(prefix="/challenges", tags=["challenges"])
reward_router = APIRouter(prefix="/rewards", tags=["rewards"])


# ============================================================================
# CHALLENGES
# ============================================================================


@challenge_router.post(
    "", response_model=ChallengeResponse, status_code=status.HTTP_201_CREATED
)
async def create_challenge(
    payload: ChallengeCreate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    return await gamification.create_challenge(db, principal, payload=payload)


@challenge_router.get("", response_model=List[ChallengeResponse])
async def list_challenges(
    level: Optional[GymnastLevel] = None,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    """Active challenges, optionally only those open to one level."""
    return await gamification.list_challenges(db, level=level)


@challenge_router.post(
    "/{challenge_id}/complete",
    response_model=ChallengeCompletionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def complete_challenge(
    challenge_id: uuid.UUID,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    """Mark a challenge complete for the caller's gymnast and award its points."""
    completion, gymnast, challenge = await gamification.complete_challenge(
        db, principal, challenge_id=challenge_id
    )
    return ChallengeCompletionResponse(
        id=completion.id,
        challenge_id=completion.challenge_id,
        gymnast_id=completion.gymnast_id,
        completed_at=completion.completed_at,
        points_awarded=challenge.points,
        total_points=gymnast.points,
    )


# ============================================================================
# REWARDS
# ============================================================================


@reward_router.post(
    "", response_model=RewardResponse, status_code=status.HTTP_201_CREATED
)
async def create_reward(
    payload: RewardCreate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    return await gamification.create_reward(db, principal, payload=payload)


@reward_router.get("", response_model=List[RewardResponse])
async def list_rewards(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    return await gamification.list_active_rewards(db)


@reward_router.post(
    "/{reward_id}/redeem",
    response_model=RedemptionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def redeem_reward(
    reward_id: uuid.UUID,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    redemption, gymnast = await gamification.redeem_reward(
        db, principal, reward_id=reward_id
    )
    return RedemptionResponse(
        id=redemption.id,
        reward_id=redemption.reward_id,
        gymnast_id=redemption.gymnast_id,
        points_spent=redemption.points_spent,
        status=redemption.status,
        redeemed_at=redemption.redeemed_at,
        remaining_points=gymnast.points,
    )
