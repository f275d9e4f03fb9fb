"""Approval/role gate: may this principal act on this gym's records?

Every gym-scoped mutation (registration review, roster processing, gymnast
approval, point adjustment) and several gym-scoped reads go through
`require_gym_access`. Associations are loaded on every call; coaches can be
added or removed between requests.
"""

import uuid
from dataclasses import dataclass
from typing import Iterable, Optional

from libs.common.errors import PermissionDenied
from services.league_service.models import CoachAssociation, UserRole
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

STAFF_ROLES = frozenset({UserRole.COACH, UserRole.GYM_ADMIN})


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, passed explicitly into every workflow call."""

    user_id: str
    email: Optional[str]
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def can_act_on_gym(
    principal: Principal,
    gym_id: uuid.UUID,
    associations: Iterable[CoachAssociation],
) -> bool:
    if principal.is_admin:
        return True
    if principal.role not in STAFF_ROLES:
        return False
    return any(
        a.gym_id == gym_id and a.user_id == principal.user_id for a in associations
    )


async def load_associations(
    db: AsyncSession, user_id: str
) -> list[CoachAssociation]:
    result = await db.execute(
        select(CoachAssociation).where(CoachAssociation.user_id == user_id)
    )
    return list(result.scalars().all())


async def require_gym_access(
    db: AsyncSession, principal: Principal, gym_id: uuid.UUID
) -> None:
    """Raise PermissionDenied unless the principal may act on `gym_id`."""
    if principal.is_admin:
        return
    associations = await load_associations(db, principal.user_id)
    if not can_act_on_gym(principal, gym_id, associations):
        raise PermissionDenied("You do not have access to this gym")


async def require_gym_admin(
    db: AsyncSession, principal: Principal, gym_id: uuid.UUID
) -> None:
    """Like `require_gym_access`, but only gym-admin associations count."""
    if principal.is_admin:
        return
    associations = await load_associations(db, principal.user_id)
    admin_associations = [a for a in associations if a.is_admin]
    if not can_act_on_gym(principal, gym_id, admin_associations):
        raise PermissionDenied("Gym admin access required")


def require_role(principal: Principal, *roles: UserRole) -> None:
    if principal.role not in roles:
        raise PermissionDenied(
            "Requires role: " + ", ".join(role.value for role in roles)
        )
