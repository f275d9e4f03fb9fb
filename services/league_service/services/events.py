"""Competition events and gymnast event registration."""

import uuid

from libs.common.datetime_utils import utc_today
from libs.common.errors import (
    ConflictError,
    NotFound,
    PermissionDenied,
    ValidationFailed,
)
from libs.common.logging import get_logger
from services.league_service.models import (
    Event,
    EventRegistration,
    EventSession,
    Score,
    UserRole,
)
from services.league_service.schemas import EventCreate
from services.league_service.services import accounts
from services.league_service.services.gate import (
    Principal,
    require_gym_access,
    require_role,
)
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


async def get_event_or_404(db: AsyncSession, event_id: uuid.UUID) -> Event:
    event = await db.get(Event, event_id)
    if event is None:
        raise NotFound("Event not found")
    return event


async def create_event(
    db: AsyncSession, principal: Principal, *, payload: EventCreate
) -> Event:
    """Create an unapproved event with its sessions.

    Admins may create league events without a host; gym staff must host the
    event at one of their gyms.
    """
    if payload.host_gym_id is not None:
        await accounts.get_gym_or_404(db, payload.host_gym_id)
        await require_gym_access(db, principal, payload.host_gym_id)
    elif not principal.is_admin:
        raise ValidationFailed("host_gym_id is required", field="host_gym_id")

    if payload.registration_open_date > payload.registration_close_date:
        raise ValidationFailed(
            "Registration must open before it closes",
            field="registration_open_date",
        )
    if payload.registration_close_date > payload.date:
        raise ValidationFailed(
            "Registration must close on or before the event date",
            field="registration_close_date",
        )

    event = Event(
        host_gym_id=payload.host_gym_id,
        name=payload.name,
        date=payload.date,
        location=payload.location,
        registration_open_date=payload.registration_open_date,
        registration_close_date=payload.registration_close_date,
        estimate_deadline=payload.estimate_deadline,
        approved=False,
        sessions=[
            EventSession(
                name=session.name,
                time=session.time,
                levels=[level.value for level in session.levels],
                max_spectators=session.max_spectators,
            )
            for session in payload.sessions
        ],
    )
    db.add(event)
    await db.commit()
    logger.info(
        "Event %s created by %s with %d sessions",
        event.id,
        principal.user_id,
        len(payload.sessions),
    )
    return event


async def list_events(db: AsyncSession, *, approved_only: bool = False) -> list[Event]:
    query = select(Event).order_by(Event.date, Event.name)
    if approved_only:
        query = query.where(Event.approved.is_(True))
    result = await db.execute(query)
    return list(result.scalars().all())


async def approve_event(
    db: AsyncSession, principal: Principal, *, event_id: uuid.UUID
) -> Event:
    require_role(principal, UserRole.ADMIN)
    event = await get_event_or_404(db, event_id)
    event.approved = True
    await db.commit()
    return event


async def delete_event(
    db: AsyncSession, principal: Principal, *, event_id: uuid.UUID
) -> None:
    require_role(principal, UserRole.ADMIN)
    event = await get_event_or_404(db, event_id)
    await db.execute(
        delete(EventRegistration).where(EventRegistration.event_id == event_id)
    )
    await db.execute(
        update(Score).where(Score.event_id == event_id).values(event_id=None)
    )
    await db.delete(event)
    await db.commit()
    logger.info("Deleted event %s by %s", event_id, principal.user_id)


async def register_gymnast(
    db: AsyncSession,
    principal: Principal,
    *,
    event_id: uuid.UUID,
    gymnast_id: uuid.UUID,
    session_ids: list[uuid.UUID],
) -> list[EventRegistration]:
    """Register a gymnast for an event, one row per chosen session.

    With no sessions given, a single event-level registration is recorded.
    """
    event = await get_event_or_404(db, event_id)
    gymnast = await accounts.get_gymnast_or_404(db, gymnast_id)
    await require_gym_access(db, principal, gymnast.gym_id)

    if not event.approved:
        raise ValidationFailed("Event is not open for registration yet")
    if not event.registration_open_on(utc_today()):
        raise ValidationFailed("Event registration window is closed")
    if not gymnast.approved:
        raise PermissionDenied("Gymnast must be approved before registering")

    sessions_by_id = {session.id: session for session in event.sessions}
    unknown = [sid for sid in session_ids if sid not in sessions_by_id]
    if unknown:
        raise ValidationFailed(
            "Session does not belong to this event", field="session_ids"
        )
    for sid in session_ids:
        levels = sessions_by_id[sid].levels
        if levels and gymnast.level.value not in levels:
            raise ValidationFailed(
                f"Session {sessions_by_id[sid].name} is not open to level "
                f"{gymnast.level.value}",
                field="session_ids",
            )

    existing = await db.execute(
        select(EventRegistration.session_id).where(
            EventRegistration.event_id == event_id,
            EventRegistration.gymnast_id == gymnast_id,
        )
    )
    already = set(existing.scalars().all())
    targets = list(dict.fromkeys(session_ids)) or [None]
    if any(sid in already for sid in targets):
        raise ConflictError("Gymnast is already registered for this event")

    registrations = [
        EventRegistration(
            event_id=event_id,
            gymnast_id=gymnast_id,
            session_id=sid,
            registered_by=principal.user_id,
            approved=False,
        )
        for sid in targets
    ]
    db.add_all(registrations)
    await db.commit()
    logger.info(
        "Gymnast %s registered for event %s (%d sessions)",
        gymnast_id,
        event_id,
        len(session_ids),
    )
    return registrations
