"""Gymnast entry, approval and point adjustment."""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from libs.db.session import get_async_db
from services.league_service.models import APPLICANT_FIELDS
from services.league_service.routers._helpers import get_current_principal
from services.league_service.schemas import (
    GymnastApprovalUpdate,
    GymnastCreate,
    GymnastResponse,
    PointsAdjustment,
    ScoreResponse,
)
from services.league_service.services import accounts, gamification, scores
from services.league_service.services.gate import Principal
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/gymnasts", tags=["gymnasts"])


@router.post("", response_model=GymnastResponse, status_code=status.HTTP_201_CREATED)
async def create_gymnast(
    payload: GymnastCreate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    """Add a gymnast to a gym directly (gym staff or admin)."""
    return await accounts.create_gymnast_for_gym(
        db,
        principal,
        gym_id=payload.gym_id,
        fields=payload.model_dump(include=set(APPLICANT_FIELDS)),
        approved=payload.approved,
        user_id=payload.user_id,
    )


@router.patch("/{gymnast_id}/approve", response_model=GymnastResponse)
async def approve_gymnast(
    gymnast_id: uuid.UUID,
    payload: Optional[GymnastApprovalUpdate] = None,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    """
    Set a gymnast's approval flag (staff of the gymnast's gym, or admin).

    An empty body approves.
    """
    approved = payload.approved if payload is not None else True
    return await accounts.set_gymnast_approval(
        db, principal, gymnast_id=gymnast_id, approved=approved
    )


@router.patch("/{gymnast_id}/points", response_model=GymnastResponse)
async def adjust_gymnast_points(
    gymnast_id: uuid.UUID,
    payload: PointsAdjustment,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    return await gamification.adjust_points(
        db,
        principal,
        gymnast_id=gymnast_id,
        delta=payload.delta,
        reason=payload.reason,
    )


@router.delete("/{gymnast_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_gymnast(
    gymnast_id: uuid.UUID,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    await accounts.delete_gymnast(db, principal, gymnast_id=gymnast_id)


@router.get("/{gymnast_id}/scores", response_model=List[ScoreResponse])
async def list_gymnast_scores(
    gymnast_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_db),
):
    """A gymnast's scores, newest first. No login required."""
    return await scores.list_for_gymnast(db, gymnast_id=gymnast_id)
