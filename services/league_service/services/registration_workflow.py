"""Registration request workflow.

    pending --approve--> approved   (creates an approved gymnast)
    pending --reject-->  rejected

Both resolutions are terminal; resolving an already-resolved request raises
ConflictError and leaves the request untouched. Approval creates the gymnast
and marks the request in a single commit. Notifications are sent after the
commit and never affect the outcome.
"""

import uuid
from typing import Optional

from libs.common.config import get_settings
from libs.common.datetime_utils import utc_now
from libs.common.errors import ConflictError, NotFound, PermissionDenied
from libs.common.logging import get_logger
from services.league_service.models import (
    APPLICANT_FIELDS,
    Gym,
    Gymnast,
    RegistrationRequest,
    RegistrationStatus,
    UserRole,
)
from services.league_service.schemas import RegistrationRequestCreate
from services.league_service.services import accounts
from services.league_service.services.gate import (
    Principal,
    require_gym_access,
    require_role,
)
from services.league_service.services.notifications import Notifier, notify
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


def _unique_emails(emails: list[Optional[str]]) -> list[str]:
    seen: set[str] = set()
    unique = []
    for email in emails:
        if email and email.lower() not in seen:
            seen.add(email.lower())
            unique.append(email)
    return unique


async def submit(
    db: AsyncSession,
    notifier: Notifier,
    *,
    payload: RegistrationRequestCreate,
) -> RegistrationRequest:
    """Record a self-registration request and alert the gym's staff."""
    gym = await accounts.get_gym_or_404(db, payload.gym_id)
    if not gym.allow_self_registration:
        raise PermissionDenied("This gym is not accepting self-registrations")

    request = RegistrationRequest(
        gym_id=gym.id,
        status=RegistrationStatus.PENDING,
        **payload.model_dump(include=set(APPLICANT_FIELDS)),
    )
    db.add(request)
    await db.commit()

    logger.info(
        "Registration request %s submitted for gym %s",
        request.id,
        gym.id,
        extra={"extra_fields": {"level": request.level.value}},
    )

    recipients = _unique_emails(
        await accounts.staff_emails_for_gym(db, gym.id) + [gym.email]
    )
    review_url = f"{get_settings().FRONTEND_URL.rstrip('/')}/coach-dashboard"
    for email in recipients:
        await notify(
            notifier,
            "coach_registration_alert",
            email,
            {
                "applicant_name": request.full_name,
                "gym_name": gym.name,
                "level": request.level.value,
                "review_url": review_url,
            },
        )

    return request


async def _load_for_review(
    db: AsyncSession, principal: Principal, request_id: uuid.UUID
) -> RegistrationRequest:
    request = await db.get(RegistrationRequest, request_id)
    if request is None:
        raise NotFound("Registration request not found")

    await require_gym_access(db, principal, request.gym_id)

    if request.is_resolved:
        raise ConflictError(
            f"Registration request is already {request.status.value}",
            field="status",
        )
    return request


async def approve(
    db: AsyncSession,
    notifier: Notifier,
    principal: Principal,
    *,
    request_id: uuid.UUID,
) -> tuple[RegistrationRequest, Gymnast]:
    """Approve a pending request, creating its approved gymnast."""
    request = await _load_for_review(db, principal, request_id)
    gym = await db.get(Gym, request.gym_id)

    try:
        gymnast = await accounts.create_gymnast(
            db,
            gym_id=request.gym_id,
            fields={name: getattr(request, name) for name in APPLICANT_FIELDS},
            approved=True,
        )
        request.status = RegistrationStatus.APPROVED
        request.reviewed_by = principal.user_id
        request.reviewed_at = utc_now()
        request.gymnast_id = gymnast.id
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        "Registration request %s approved by %s; gymnast %s created",
        request.id,
        principal.user_id,
        gymnast.id,
    )

    await notify(
        notifier,
        "gymnast_welcome",
        gymnast.contact_email,
        {
            "gymnast_name": gymnast.full_name,
            "gym_name": gym.name,
            "level": gymnast.level.value,
            "login_url": get_settings().login_url,
        },
    )

    return request, gymnast


async def reject(
    db: AsyncSession,
    notifier: Notifier,
    principal: Principal,
    *,
    request_id: uuid.UUID,
    reason: Optional[str] = None,
) -> RegistrationRequest:
    """Reject a pending request, storing the optional reason."""
    request = await _load_for_review(db, principal, request_id)
    gym = await db.get(Gym, request.gym_id)

    request.status = RegistrationStatus.REJECTED
    request.reviewed_by = principal.user_id
    request.reviewed_at = utc_now()
    request.rejection_reason = reason
    await db.commit()

    logger.info(
        "Registration request %s rejected by %s", request.id, principal.user_id
    )

    await notify(
        notifier,
        "registration_rejected",
        request.contact_email,
        {
            "applicant_name": request.full_name,
            "gym_name": gym.name,
            "reason": reason,
        },
    )

    return request


async def list_for_gym(
    db: AsyncSession,
    principal: Principal,
    *,
    gym_id: uuid.UUID,
    status: Optional[RegistrationStatus] = None,
) -> list[RegistrationRequest]:
    await accounts.get_gym_or_404(db, gym_id)
    await require_gym_access(db, principal, gym_id)

    query = select(RegistrationRequest).where(RegistrationRequest.gym_id == gym_id)
    if status is not None:
        query = query.where(RegistrationRequest.status == status)
    result = await db.execute(
        query.order_by(
            RegistrationRequest.created_at.desc(), RegistrationRequest.id.desc()
        )
    )
    return list(result.scalars().all())


async def list_pending(
    db: AsyncSession, principal: Principal
) -> list[RegistrationRequest]:
    """All pending requests across the league, oldest first."""
    require_role(principal, UserRole.ADMIN)
    result = await db.execute(
        select(RegistrationRequest)
        .where(RegistrationRequest.status == RegistrationStatus.PENDING)
        .order_by(RegistrationRequest.created_at)
    )
    return list(result.scalars().all())
