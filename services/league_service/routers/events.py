"""Competition events and registrations."""

import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from libs.db.session import get_async_db
from services.league_service.routers._helpers import get_current_principal
from services.league_service.schemas import (
    EventCreate,
    EventRegistrationCreate,
    EventRegistrationResponse,
    EventResponse,
)
from services.league_service.services import events as event_service
from services.league_service.services.gate import Principal
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/events", tags=["events"])


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    payload: EventCreate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    """Create an event with its sessions; it stays hidden until approved."""
    return await event_service.create_event(db, principal, payload=payload)


@router.get("", response_model=List[EventResponse])
async def list_events(
    approved_only: bool = True,
    db: AsyncSession = Depends(get_async_db),
):
    return await event_service.list_events(db, approved_only=approved_only)


@router.patch("/{event_id}/approve", response_model=EventResponse)
async def approve_event(
    event_id: uuid.UUID,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    return await event_service.approve_event(db, principal, event_id=event_id)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: uuid.UUID,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    await event_service.delete_event(db, principal, event_id=event_id)


@router.post(
    "/{event_id}/register",
    response_model=List[EventRegistrationResponse],
    status_code=status.HTTP_201_CREATED,
)
async def register_for_event(
    event_id: uuid.UUID,
    payload: EventRegistrationCreate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    """Register an approved gymnast while the event's registration window is open."""
    return await event_service.register_gymnast(
        db,
        principal,
        event_id=event_id,
        gymnast_id=payload.gymnast_id,
        session_ids=payload.session_ids,
    )
