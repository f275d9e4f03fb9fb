"""Challenges, rewards and gymnast points.

Points only move for approved gymnasts: completing a challenge adds its
points, redeeming a reward deducts its cost, and staff can adjust a balance
manually. Balances never go below zero.
"""

import uuid
from typing import Optional

from libs.common.errors import (
    ConflictError,
    NotFound,
    PermissionDenied,
    ValidationFailed,
)
from libs.common.logging import get_logger
from services.league_service.models import (
    Challenge,
    ChallengeCompletion,
    Gymnast,
    GymnastLevel,
    RedemptionStatus,
    Reward,
    RewardRedemption,
    UserRole,
)
from services.league_service.schemas import ChallengeCreate, RewardCreate
from services.league_service.services import accounts
from services.league_service.services.gate import (
    Principal,
    require_gym_access,
    require_role,
)
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


async def _approved_gymnast_for(db: AsyncSession, principal: Principal) -> Gymnast:
    gymnast = await accounts.get_gymnast_for_user(db, principal.user_id)
    if gymnast is None:
        raise ValidationFailed("No gymnast profile is linked to this account")
    if not gymnast.approved:
        raise PermissionDenied("Gymnast account is awaiting approval")
    return gymnast


# ---------------------------------------------------------------------------
# Challenges
# ---------------------------------------------------------------------------


async def create_challenge(
    db: AsyncSession, principal: Principal, *, payload: ChallengeCreate
) -> Challenge:
    """League-wide challenge (admin) or a coach challenge for one gym."""
    require_role(principal, UserRole.ADMIN, UserRole.GYM_ADMIN, UserRole.COACH)

    is_coach_challenge = not principal.is_admin
    if is_coach_challenge:
        if payload.from_gym_id is None:
            raise ValidationFailed(
                "from_gym_id is required for coach challenges", field="from_gym_id"
            )
        await accounts.get_gym_or_404(db, payload.from_gym_id)
        await require_gym_access(db, principal, payload.from_gym_id)

    challenge = Challenge(
        title=payload.title,
        description=payload.description,
        points=payload.points,
        levels=[level.value for level in payload.levels],
        created_by=principal.user_id,
        is_coach_challenge=is_coach_challenge,
        from_gym_id=payload.from_gym_id,
        active=True,
    )
    db.add(challenge)
    await db.commit()
    logger.info(
        "Challenge %s (%d pts) created by %s",
        challenge.id,
        challenge.points,
        principal.user_id,
    )
    return challenge


async def list_challenges(
    db: AsyncSession,
    *,
    level: Optional[GymnastLevel] = None,
    active_only: bool = True,
) -> list[Challenge]:
    query = select(Challenge).order_by(Challenge.created_at.desc())
    if active_only:
        query = query.where(Challenge.active.is_(True))
    result = await db.execute(query)
    challenges = list(result.scalars().all())
    # JSON list membership is not portable in SQL; filter here.
    if level is not None:
        challenges = [c for c in challenges if c.targets_level(level.value)]
    return challenges


async def complete_challenge(
    db: AsyncSession, principal: Principal, *, challenge_id: uuid.UUID
) -> tuple[ChallengeCompletion, Gymnast, Challenge]:
    """Record a completion for the caller's gymnast and award the points."""
    gymnast = await _approved_gymnast_for(db, principal)

    challenge = await db.get(Challenge, challenge_id)
    if challenge is None or not challenge.active:
        raise NotFound("Challenge not found")
    if not challenge.targets_level(gymnast.level.value):
        raise ValidationFailed("This challenge is not available for your level")

    existing = await db.execute(
        select(ChallengeCompletion).where(
            ChallengeCompletion.challenge_id == challenge_id,
            ChallengeCompletion.gymnast_id == gymnast.id,
        )
    )
    if existing.scalar_one_or_none() is not None:
        raise ConflictError("Challenge already completed")

    completion = ChallengeCompletion(challenge_id=challenge_id, gymnast_id=gymnast.id)
    db.add(completion)
    gymnast.points += challenge.points
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent completion of the same challenge.
        await db.rollback()
        raise ConflictError("Challenge already completed")

    logger.info(
        "Gymnast %s completed challenge %s (+%d pts, total %d)",
        gymnast.id,
        challenge.id,
        challenge.points,
        gymnast.points,
    )
    return completion, gymnast, challenge


# ---------------------------------------------------------------------------
# Rewards
# ---------------------------------------------------------------------------


async def create_reward(
    db: AsyncSession, principal: Principal, *, payload: RewardCreate
) -> Reward:
    require_role(principal, UserRole.ADMIN)
    reward = Reward(**payload.model_dump(), active=True)
    db.add(reward)
    await db.commit()
    return reward


async def list_active_rewards(db: AsyncSession) -> list[Reward]:
    result = await db.execute(
        select(Reward)
        .where(Reward.active.is_(True))
        .order_by(Reward.points_cost, Reward.name)
    )
    return list(result.scalars().all())


async def redeem_reward(
    db: AsyncSession, principal: Principal, *, reward_id: uuid.UUID
) -> tuple[RewardRedemption, Gymnast]:
    gymnast = await _approved_gymnast_for(db, principal)

    reward = await db.get(Reward, reward_id)
    if reward is None or not reward.active:
        raise NotFound("Reward not found")
    if gymnast.points < reward.points_cost:
        raise ValidationFailed(
            f"Insufficient points: {reward.points_cost} required, "
            f"{gymnast.points} available"
        )

    redemption = RewardRedemption(
        reward_id=reward.id,
        gymnast_id=gymnast.id,
        points_spent=reward.points_cost,
        status=RedemptionStatus.PENDING,
    )
    db.add(redemption)
    gymnast.points = max(0, gymnast.points - reward.points_cost)
    await db.commit()

    logger.info(
        "Gymnast %s redeemed reward %s (-%d pts)",
        gymnast.id,
        reward.id,
        reward.points_cost,
    )
    return redemption, gymnast


# ---------------------------------------------------------------------------
# Manual adjustment
# ---------------------------------------------------------------------------


async def adjust_points(
    db: AsyncSession,
    principal: Principal,
    *,
    gymnast_id: uuid.UUID,
    delta: int,
    reason: Optional[str] = None,
) -> Gymnast:
    gymnast = await accounts.get_gymnast_or_404(db, gymnast_id)
    await require_gym_access(db, principal, gymnast.gym_id)
    if not gymnast.approved and delta > 0:
        raise PermissionDenied("Unapproved gymnasts cannot earn points")

    previous = gymnast.points
    gymnast.points = max(0, previous + delta)
    await db.commit()

    logger.info(
        "Points for gymnast %s adjusted %d -> %d by %s",
        gymnast_id,
        previous,
        gymnast.points,
        principal.user_id,
        extra={"extra_fields": {"reason": reason}},
    )
    return gymnast
