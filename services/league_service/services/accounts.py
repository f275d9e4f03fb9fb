"""Users, gyms, coach associations and gymnast records."""

import uuid
from typing import Any, Optional

from libs.common.errors import ConflictError, NotFound, ValidationFailed
from libs.common.logging import get_logger
from services.league_service.models import (
    APPLICANT_FIELDS,
    ChallengeCompletion,
    CoachAssociation,
    Event,
    EventRegistration,
    Gym,
    Gymnast,
    RegistrationRequest,
    RewardRedemption,
    RosterUpload,
    Score,
    User,
    UserRole,
)
from services.league_service.services.gate import (
    STAFF_ROLES,
    Principal,
    require_gym_access,
    require_gym_admin,
    require_role,
)
from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


async def get_gym_or_404(db: AsyncSession, gym_id: uuid.UUID) -> Gym:
    gym = await db.get(Gym, gym_id)
    if gym is None:
        raise NotFound("Gym not found")
    return gym


async def get_gymnast_or_404(db: AsyncSession, gymnast_id: uuid.UUID) -> Gymnast:
    gymnast = await db.get(Gymnast, gymnast_id)
    if gymnast is None:
        raise NotFound("Gymnast not found")
    return gymnast


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(
        select(User).where(func.lower(User.email) == email.lower())
    )
    return result.scalar_one_or_none()


async def get_gym_by_email(db: AsyncSession, email: str) -> Optional[Gym]:
    result = await db.execute(
        select(Gym).where(func.lower(Gym.email) == email.lower())
    )
    return result.scalar_one_or_none()


async def get_gymnast_for_user(db: AsyncSession, user_id: str) -> Optional[Gymnast]:
    result = await db.execute(select(Gymnast).where(Gymnast.user_id == user_id))
    return result.scalar_one_or_none()


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


async def upsert_user(
    db: AsyncSession,
    *,
    user_id: str,
    email: Optional[str],
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
) -> User:
    """Create the user on first sight, or refresh their name and email.

    New users start as spectators. An email already registered as a gym's
    admin address cannot back a new user.
    """
    user = await db.get(User, user_id)

    if user is None:
        if email and await get_gym_by_email(db, email):
            raise ConflictError(
                "This email is already registered as a gym admin. "
                "Please use a different email or contact support.",
                field="email",
            )
        user = User(
            id=user_id,
            email=email,
            first_name=first_name,
            last_name=last_name,
            role=UserRole.SPECTATOR,
        )
        db.add(user)
        await db.commit()
        logger.info("Provisioned user %s", user_id)
        return user

    changed = False
    if email and email != user.email:
        other = await get_user_by_email(db, email)
        if other is not None and other.id != user.id:
            raise ConflictError(
                f"An account with email {email} already exists", field="email"
            )
        user.email = email
        changed = True
    if first_name and first_name != user.first_name:
        user.first_name = first_name
        changed = True
    if last_name and last_name != user.last_name:
        user.last_name = last_name
        changed = True

    if changed:
        await db.commit()
    return user


async def list_users(db: AsyncSession, principal: Principal) -> list[User]:
    require_role(principal, UserRole.ADMIN)
    result = await db.execute(select(User).order_by(User.created_at))
    return list(result.scalars().all())


async def assign_role(
    db: AsyncSession, principal: Principal, *, user_id: str, role: UserRole
) -> User:
    require_role(principal, UserRole.ADMIN)
    user = await db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")

    previous = user.role
    user.role = role
    await db.commit()
    logger.info(
        "Role for user %s changed %s -> %s by %s",
        user_id,
        previous.value,
        role.value,
        principal.user_id,
    )
    return user


async def create_user(
    db: AsyncSession,
    principal: Principal,
    *,
    user_id: str,
    email: Optional[str],
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    role: UserRole = UserRole.SPECTATOR,
) -> User:
    """Pre-provision an account ahead of its first login (admin only)."""
    require_role(principal, UserRole.ADMIN)
    if await db.get(User, user_id) is not None:
        raise ConflictError(f"User {user_id} already exists", field="id")
    if email and (
        await get_user_by_email(db, email) or await get_gym_by_email(db, email)
    ):
        raise ConflictError(
            f"An account with email {email} already exists", field="email"
        )

    user = User(
        id=user_id,
        email=email,
        first_name=first_name,
        last_name=last_name,
        role=role,
    )
    db.add(user)
    await db.commit()
    logger.info(
        "User %s created as %s by %s", user_id, role.value, principal.user_id
    )
    return user


async def delete_user(db: AsyncSession, principal: Principal, *, user_id: str) -> None:
    """Remove a user and their gym associations; a linked gymnast is kept."""
    require_role(principal, UserRole.ADMIN)
    if user_id == principal.user_id:
        raise ValidationFailed("Admins cannot delete their own account")
    user = await db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")

    await db.execute(
        delete(CoachAssociation).where(CoachAssociation.user_id == user_id)
    )
    await db.execute(
        update(Gymnast).where(Gymnast.user_id == user_id).values(user_id=None)
    )
    await db.delete(user)
    await db.commit()
    logger.info("Deleted user %s by %s", user_id, principal.user_id)


# ---------------------------------------------------------------------------
# Gyms
# ---------------------------------------------------------------------------


async def create_gym(db: AsyncSession, *, data: dict[str, Any]) -> Gym:
    """Register a new gym. Its contact email must not belong to any gym or user."""
    email = data["email"]
    if await get_gym_by_email(db, email):
        raise ConflictError(
            f"A gym admin account with email {email} already exists", field="email"
        )
    if await get_user_by_email(db, email):
        raise ConflictError(
            f"An account with email {email} already exists", field="email"
        )

    gym = Gym(**data)
    db.add(gym)
    await db.commit()
    logger.info("Created gym %s (%s)", gym.id, gym.name)
    return gym


async def list_gyms(db: AsyncSession, *, approved_only: bool = False) -> list[Gym]:
    query = select(Gym).order_by(Gym.name)
    if approved_only:
        query = query.where(Gym.approved.is_(True))
    result = await db.execute(query)
    return list(result.scalars().all())


async def gyms_for_user(db: AsyncSession, user_id: str) -> list[Gym]:
    result = await db.execute(
        select(Gym)
        .join(CoachAssociation, CoachAssociation.gym_id == Gym.id)
        .where(CoachAssociation.user_id == user_id)
        .order_by(Gym.name)
    )
    return list(result.scalars().all())


async def set_gym_approval(
    db: AsyncSession, principal: Principal, *, gym_id: uuid.UUID, approved: bool
) -> Gym:
    require_role(principal, UserRole.ADMIN)
    gym = await get_gym_or_404(db, gym_id)
    gym.approved = approved
    await db.commit()
    return gym


async def set_gym_payment(
    db: AsyncSession, principal: Principal, *, gym_id: uuid.UUID, paid: bool
) -> Gym:
    require_role(principal, UserRole.ADMIN)
    gym = await get_gym_or_404(db, gym_id)
    gym.membership_paid = paid
    await db.commit()
    return gym


async def set_gym_self_registration(
    db: AsyncSession, principal: Principal, *, gym_id: uuid.UUID, allowed: bool
) -> Gym:
    gym = await get_gym_or_404(db, gym_id)
    await require_gym_access(db, principal, gym_id)
    gym.allow_self_registration = allowed
    await db.commit()
    return gym


async def delete_gym(
    db: AsyncSession, principal: Principal, *, gym_id: uuid.UUID
) -> None:
    """Delete a gym that has no gymnasts, registration history or hosted events."""
    require_role(principal, UserRole.ADMIN)
    gym = await get_gym_or_404(db, gym_id)

    for model, column, label in (
        (Gymnast, Gymnast.gym_id, "gymnasts"),
        (RegistrationRequest, RegistrationRequest.gym_id, "registration requests"),
        (RosterUpload, RosterUpload.gym_id, "roster uploads"),
        (Event, Event.host_gym_id, "hosted events"),
    ):
        count = await db.scalar(
            select(func.count()).select_from(model).where(column == gym_id)
        )
        if count:
            raise ConflictError(f"Gym still has {label} and cannot be deleted")

    await db.execute(delete(CoachAssociation).where(CoachAssociation.gym_id == gym_id))
    await db.delete(gym)
    await db.commit()
    logger.info("Deleted gym %s by %s", gym_id, principal.user_id)


# ---------------------------------------------------------------------------
# Coach associations
# ---------------------------------------------------------------------------


async def add_coach_to_gym(
    db: AsyncSession,
    principal: Principal,
    *,
    gym_id: uuid.UUID,
    user_id: str,
    is_admin: bool = False,
) -> CoachAssociation:
    """Associate a user with a gym as coach (or gym admin).

    Spectators are promoted to the matching staff role; other roles are kept.
    """
    await get_gym_or_404(db, gym_id)
    await require_gym_admin(db, principal, gym_id)

    user = await db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")

    existing = await db.get(CoachAssociation, (gym_id, user_id))
    if existing is not None:
        raise ConflictError("User is already a coach at this gym", field="user_id")

    association = CoachAssociation(gym_id=gym_id, user_id=user_id, is_admin=is_admin)
    db.add(association)
    if user.role == UserRole.SPECTATOR:
        user.role = UserRole.GYM_ADMIN if is_admin else UserRole.COACH
    await db.commit()
    logger.info(
        "Added %s %s to gym %s",
        "gym admin" if is_admin else "coach",
        user_id,
        gym_id,
    )
    return association


async def list_coaches(
    db: AsyncSession, principal: Principal, *, gym_id: uuid.UUID
) -> list[CoachAssociation]:
    await get_gym_or_404(db, gym_id)
    await require_gym_access(db, principal, gym_id)
    result = await db.execute(
        select(CoachAssociation)
        .where(CoachAssociation.gym_id == gym_id)
        .order_by(CoachAssociation.created_at)
    )
    return list(result.scalars().all())


async def staff_emails_for_gym(db: AsyncSession, gym_id: uuid.UUID) -> list[str]:
    """Emails of every coach and gym admin associated with the gym."""
    result = await db.execute(
        select(User.email)
        .join(CoachAssociation, CoachAssociation.user_id == User.id)
        .where(CoachAssociation.gym_id == gym_id, User.email.is_not(None))
    )
    return [email for email in result.scalars().all() if email]


# ---------------------------------------------------------------------------
# Gymnasts
# ---------------------------------------------------------------------------


async def create_gymnast(
    db: AsyncSession,
    *,
    gym_id: uuid.UUID,
    fields: dict[str, Any],
    approved: bool,
    user_id: Optional[str] = None,
) -> Gymnast:
    """Add a gymnast to the session and flush; the caller owns the commit.

    Shared by registration approval, roster rows and direct staff entry.
    """
    email = fields.get("email")
    if email and await get_gym_by_email(db, email):
        raise ConflictError(
            f"Email {email} is registered as a gym admin account", field="email"
        )

    user = None
    if user_id is not None:
        user = await db.get(User, user_id)
        if user is None:
            raise NotFound("User not found")
        if await get_gymnast_for_user(db, user_id):
            raise ConflictError(
                "This user already has a gymnast account", field="user_id"
            )
        if user.email and await get_gym_by_email(db, user.email):
            raise ConflictError(
                f"Email {user.email} is registered as a gym admin account",
                field="email",
            )

    gymnast = Gymnast(
        gym_id=gym_id,
        user_id=user_id,
        approved=approved,
        points=0,
        **{name: fields.get(name) for name in APPLICANT_FIELDS if name in fields},
    )
    db.add(gymnast)
    if user is not None and user.role == UserRole.SPECTATOR:
        user.role = UserRole.GYMNAST
    await db.flush()
    return gymnast


async def create_gymnast_for_gym(
    db: AsyncSession,
    principal: Principal,
    *,
    gym_id: uuid.UUID,
    fields: dict[str, Any],
    approved: bool = True,
    user_id: Optional[str] = None,
) -> Gymnast:
    """Direct gymnast entry by gym staff."""
    await get_gym_or_404(db, gym_id)
    await require_gym_access(db, principal, gym_id)
    gymnast = await create_gymnast(
        db, gym_id=gym_id, fields=fields, approved=approved, user_id=user_id
    )
    await db.commit()
    return gymnast


async def set_gymnast_approval(
    db: AsyncSession, principal: Principal, *, gymnast_id: uuid.UUID, approved: bool
) -> Gymnast:
    gymnast = await get_gymnast_or_404(db, gymnast_id)
    await require_gym_access(db, principal, gymnast.gym_id)
    gymnast.approved = approved
    await db.commit()
    logger.info(
        "Gymnast %s %s by %s",
        gymnast_id,
        "approved" if approved else "unapproved",
        principal.user_id,
    )
    return gymnast


async def list_gymnasts_for_gym(
    db: AsyncSession, principal: Principal, *, gym_id: uuid.UUID
) -> list[Gymnast]:
    await get_gym_or_404(db, gym_id)
    await require_gym_access(db, principal, gym_id)
    result = await db.execute(
        select(Gymnast)
        .where(Gymnast.gym_id == gym_id)
        .order_by(Gymnast.last_name, Gymnast.first_name)
    )
    return list(result.scalars().all())


async def delete_gymnast(
    db: AsyncSession, principal: Principal, *, gymnast_id: uuid.UUID
) -> None:
    """Remove a gymnast with their points, scores and entries. Requests are kept."""
    require_role(principal, UserRole.ADMIN)
    await get_gymnast_or_404(db, gymnast_id)

    await db.execute(
        update(RegistrationRequest)
        .where(RegistrationRequest.gymnast_id == gymnast_id)
        .values(gymnast_id=None)
    )
    for model in (ChallengeCompletion, RewardRedemption, EventRegistration, Score):
        await db.execute(delete(model).where(model.gymnast_id == gymnast_id))
    await db.execute(delete(Gymnast).where(Gymnast.id == gymnast_id))
    await db.commit()
    logger.info("Deleted gymnast %s by %s", gymnast_id, principal.user_id)


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


async def get_profile(db: AsyncSession, principal: Principal) -> dict[str, Any]:
    """The caller's user record plus their gyms (staff) or gymnast (gymnast role)."""
    user = await db.get(User, principal.user_id)
    if user is None:
        raise NotFound("User not found")

    gyms: list[Gym] = []
    gymnast = None
    if principal.role in STAFF_ROLES:
        gyms = await gyms_for_user(db, principal.user_id)
    elif principal.role == UserRole.GYMNAST:
        gymnast = await get_gymnast_for_user(db, principal.user_id)

    return {"user": user, "gyms": gyms, "gymnast": gymnast}

