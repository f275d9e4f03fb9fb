"""Roster upload endpoints."""

import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from libs.common.emails.client import EmailClient, get_email_client
from libs.db.session import get_async_db
from services.league_service.routers._helpers import get_current_principal
from services.league_service.schemas import (
    RosterProcessRequest,
    RosterProcessResult,
    RosterUploadCreate,
    RosterUploadResponse,
)
from services.league_service.services import roster_processor
from services.league_service.services.gate import Principal
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(tags=["roster"])


@router.post(
    "/roster-upload",
    response_model=RosterUploadResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_roster_upload(
    payload: RosterUploadCreate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    """Record a roster upload for a gym; rows are sent separately to /process."""
    return await roster_processor.create_upload_record(db, principal, payload=payload)


@router.post(
    "/roster-upload/{upload_id}/process", response_model=RosterProcessResult
)
async def process_roster_upload(
    upload_id: uuid.UUID,
    payload: RosterProcessRequest,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
    email_client: EmailClient = Depends(get_email_client),
):
    """
    Import the rows of a pending upload as approved gymnasts.

    Invalid rows are skipped and reported; the response lists at most the
    first ten row errors.
    """
    return await roster_processor.process(
        db,
        email_client,
        principal,
        upload_id=upload_id,
        rows=payload.rows,
    )


@router.get("/roster-uploads/gym/{gym_id}", response_model=List[RosterUploadResponse])
async def list_gym_uploads(
    gym_id: uuid.UUID,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    return await roster_processor.list_for_gym(db, principal, gym_id=gym_id)
