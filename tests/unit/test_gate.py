"""Unit tests for the approval/role gate."""

import uuid

import pytest
from libs.common.errors import PermissionDenied
from services.league_service.models import CoachAssociation, UserRole
from services.league_service.services.gate import (
    Principal,
    can_act_on_gym,
    require_gym_access,
    require_gym_admin,
    require_role,
)
from sqlalchemy import delete
from tests.factories import (
    CoachAssociationFactory,
    GymFactory,
    UserFactory,
    make_principal,
)


async def _seed(db, *objects):
    db.add_all(objects)
    await db.commit()


# ---------------------------------------------------------------------------
# can_act_on_gym
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_admin_can_act_on_any_gym_without_associations():
    principal = Principal(user_id="admin-1", email=None, role=UserRole.ADMIN)
    assert can_act_on_gym(principal, uuid.uuid4(), []) is True


@pytest.mark.unit
@pytest.mark.parametrize("role", [UserRole.COACH, UserRole.GYM_ADMIN])
def test_staff_needs_association_to_the_gym(role):
    gym_id, other_gym_id = uuid.uuid4(), uuid.uuid4()
    principal = Principal(user_id="coach-1", email=None, role=role)
    associations = [CoachAssociation(gym_id=gym_id, user_id="coach-1")]

    assert can_act_on_gym(principal, gym_id, associations) is True
    assert can_act_on_gym(principal, other_gym_id, associations) is False


@pytest.mark.unit
@pytest.mark.parametrize("role", [UserRole.GYMNAST, UserRole.SPECTATOR])
def test_non_staff_roles_denied_even_with_association(role):
    gym_id = uuid.uuid4()
    principal = Principal(user_id="user-1", email=None, role=role)
    associations = [CoachAssociation(gym_id=gym_id, user_id="user-1")]

    assert can_act_on_gym(principal, gym_id, associations) is False


@pytest.mark.unit
def test_association_of_another_user_does_not_count():
    gym_id = uuid.uuid4()
    principal = Principal(user_id="coach-1", email=None, role=UserRole.COACH)
    associations = [CoachAssociation(gym_id=gym_id, user_id="coach-2")]

    assert can_act_on_gym(principal, gym_id, associations) is False


# ---------------------------------------------------------------------------
# require_gym_access / require_gym_admin
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_require_gym_access_allows_associated_coach(db_session):
    gym = GymFactory.create()
    coach = UserFactory.create(role=UserRole.COACH)
    await _seed(db_session, gym, coach)
    await _seed(db_session, CoachAssociationFactory.create(gym.id, coach.id))

    await require_gym_access(db_session, make_principal(coach), gym.id)


@pytest.mark.asyncio
@pytest.mark.unit
async def test_require_gym_access_denies_coach_of_other_gym(db_session):
    gym, other_gym = GymFactory.create(), GymFactory.create(name="Other Gym")
    coach = UserFactory.create(role=UserRole.COACH)
    await _seed(db_session, gym, other_gym, coach)
    await _seed(db_session, CoachAssociationFactory.create(other_gym.id, coach.id))

    with pytest.raises(PermissionDenied):
        await require_gym_access(db_session, make_principal(coach), gym.id)


@pytest.mark.asyncio
@pytest.mark.unit
async def test_require_gym_access_rechecks_associations_on_every_call(db_session):
    """Removing a coach from a gym takes effect on the very next check."""
    gym = GymFactory.create()
    coach = UserFactory.create(role=UserRole.COACH)
    await _seed(db_session, gym, coach)
    await _seed(db_session, CoachAssociationFactory.create(gym.id, coach.id))
    principal = make_principal(coach)

    await require_gym_access(db_session, principal, gym.id)

    await db_session.execute(
        delete(CoachAssociation).where(CoachAssociation.user_id == coach.id)
    )
    await db_session.commit()

    with pytest.raises(PermissionDenied):
        await require_gym_access(db_session, principal, gym.id)


@pytest.mark.asyncio
@pytest.mark.unit
async def test_require_gym_admin_ignores_plain_coach_association(db_session):
    gym = GymFactory.create()
    coach = UserFactory.create(role=UserRole.COACH)
    gym_admin = UserFactory.create(role=UserRole.GYM_ADMIN)
    await _seed(db_session, gym, coach, gym_admin)
    await _seed(
        db_session,
        CoachAssociationFactory.create(gym.id, coach.id),
        CoachAssociationFactory.create(gym.id, gym_admin.id, is_admin=True),
    )

    await require_gym_admin(db_session, make_principal(gym_admin), gym.id)
    with pytest.raises(PermissionDenied):
        await require_gym_admin(db_session, make_principal(coach), gym.id)


@pytest.mark.asyncio
@pytest.mark.unit
async def test_admin_passes_gate_for_unknown_gym(db_session):
    admin = UserFactory.create(role=UserRole.ADMIN)
    await _seed(db_session, admin)

    await require_gym_access(db_session, make_principal(admin), uuid.uuid4())


# ---------------------------------------------------------------------------
# require_role
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_require_role():
    coach = Principal(user_id="c", email=None, role=UserRole.COACH)

    require_role(coach, UserRole.ADMIN, UserRole.COACH)
    with pytest.raises(PermissionDenied) as exc_info:
        require_role(coach, UserRole.ADMIN)
    assert exc_info.value.status_code == 403
