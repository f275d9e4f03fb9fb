"""Gym registration, flags, coaches and rosters."""

import uuid
from typing import List

from fastapi import APIRouter, Depends, Request, status
from libs.common.config import get_settings
from libs.common.rate_limit import limiter
from libs.db.session import get_async_db
from services.league_service.routers._helpers import get_current_principal
from services.league_service.schemas import (
    CoachAssociationCreate,
    CoachAssociationResponse,
    GymApprovalUpdate,
    GymCreate,
    GymnastResponse,
    GymPaymentUpdate,
    GymResponse,
    GymSelfRegistrationUpdate,
)
from services.league_service.services import accounts
from services.league_service.services.gate import Principal
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/gyms", tags=["gyms"])
settings = get_settings()


@router.post("", response_model=GymResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.REGISTRATION_RATE_LIMIT)
async def register_gym(
    request: Request,
    payload: GymCreate,
    db: AsyncSession = Depends(get_async_db),
):
    """
    Register a gym (public).

    The gym starts unapproved; the contact email must not already belong to
    another gym or a user account.
    """
    return await accounts.create_gym(db, data=payload.model_dump())


@router.get("", response_model=List[GymResponse])
async def list_gyms(
    approved_only: bool = False,
    db: AsyncSession = Depends(get_async_db),
):
    """List gyms by name (public)."""
    return await accounts.list_gyms(db, approved_only=approved_only)


@router.get("/mine", response_model=List[GymResponse])
async def list_my_gyms(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    """Gyms the caller coaches at."""
    return await accounts.gyms_for_user(db, principal.user_id)


@router.patch("/{gym_id}/approve", response_model=GymResponse)
async def approve_gym(
    gym_id: uuid.UUID,
    payload: GymApprovalUpdate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    return await accounts.set_gym_approval(
        db, principal, gym_id=gym_id, approved=payload.approved
    )


@router.patch("/{gym_id}/payment", response_model=GymResponse)
async def update_gym_payment(
    gym_id: uuid.UUID,
    payload: GymPaymentUpdate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    return await accounts.set_gym_payment(
        db, principal, gym_id=gym_id, paid=payload.membership_paid
    )


@router.patch("/{gym_id}/self-registration", response_model=GymResponse)
async def update_gym_self_registration(
    gym_id: uuid.UUID,
    payload: GymSelfRegistrationUpdate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    """Open or close public self-registration for a gym (gym staff or admin)."""
    return await accounts.set_gym_self_registration(
        db, principal, gym_id=gym_id, allowed=payload.allow_self_registration
    )


@router.delete("/{gym_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_gym(
    gym_id: uuid.UUID,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    await accounts.delete_gym(db, principal, gym_id=gym_id)


@router.post(
    "/{gym_id}/coaches",
    response_model=CoachAssociationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_coach(
    gym_id: uuid.UUID,
    payload: CoachAssociationCreate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    """Associate a user with the gym (admin or the gym's own gym admin)."""
    return await accounts.add_coach_to_gym(
        db,
        principal,
        gym_id=gym_id,
        user_id=payload.user_id,
        is_admin=payload.is_admin,
    )


@router.get("/{gym_id}/coaches", response_model=List[CoachAssociationResponse])
async def list_coaches(
    gym_id: uuid.UUID,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    return await accounts.list_coaches(db, principal, gym_id=gym_id)


@router.get("/{gym_id}/gymnasts", response_model=List[GymnastResponse])
async def list_gym_gymnasts(
    gym_id: uuid.UUID,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    return await accounts.list_gymnasts_for_gym(db, principal, gym_id=gym_id)
