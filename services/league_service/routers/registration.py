"""Registration request endpoints: public submission and staff review."""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from libs.common.config import get_settings
from libs.common.emails.client import EmailClient, get_email_client
from libs.common.rate_limit import limiter
from libs.db.session import get_async_db
from services.league_service.models import RegistrationStatus
from services.league_service.routers._helpers import get_current_principal
from services.league_service.schemas import (
    GymnastResponse,
    RegistrationApprovalResponse,
    RegistrationReject,
    RegistrationRequestCreate,
    RegistrationRequestResponse,
)
from services.league_service.services import registration_workflow
from services.league_service.services.gate import Principal
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/registration-requests", tags=["registration"])
settings = get_settings()


@router.post(
    "",
    response_model=RegistrationRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.REGISTRATION_RATE_LIMIT)
async def submit_registration_request(
    request: Request,
    payload: RegistrationRequestCreate,
    db: AsyncSession = Depends(get_async_db),
    email_client: EmailClient = Depends(get_email_client),
):
    """
    Submit a gymnast registration request to a gym (public).

    The gym must accept self-registration. Its coaches are alerted by email.
    """
    return await registration_workflow.submit(db, email_client, payload=payload)


@router.get("/pending", response_model=List[RegistrationRequestResponse])
async def list_pending_requests(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    """List pending requests across all gyms (admin only)."""
    return await registration_workflow.list_pending(db, principal)


@router.get("/gym/{gym_id}", response_model=List[RegistrationRequestResponse])
async def list_gym_requests(
    gym_id: uuid.UUID,
    status_filter: Optional[RegistrationStatus] = Query(None, alias="status"),
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    """List a gym's registration requests, newest first."""
    return await registration_workflow.list_for_gym(
        db, principal, gym_id=gym_id, status=status_filter
    )


@router.post("/{request_id}/approve", response_model=RegistrationApprovalResponse)
async def approve_request(
    request_id: uuid.UUID,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
    email_client: EmailClient = Depends(get_email_client),
):
    """Approve a pending request and create the gymnast."""
    registration, gymnast = await registration_workflow.approve(
        db, email_client, principal, request_id=request_id
    )
    return RegistrationApprovalResponse(
        request=RegistrationRequestResponse.model_validate(registration),
        gymnast=GymnastResponse.model_validate(gymnast),
    )


@router.post("/{request_id}/reject", response_model=RegistrationRequestResponse)
async def reject_request(
    request_id: uuid.UUID,
    payload: Optional[RegistrationReject] = None,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
    email_client: EmailClient = Depends(get_email_client),
):
    """Reject a pending request with an optional reason."""
    return await registration_workflow.reject(
        db,
        email_client,
        principal,
        request_id=request_id,
        reason=payload.reason if payload else None,
    )
