"""Unit tests for users, gyms, coach associations and gymnast records."""

import uuid
from datetime import date

import pytest
from libs.common.errors import (
    ConflictError,
    NotFound,
    PermissionDenied,
    ValidationFailed,
)
from services.league_service.models import (
    ChallengeCompletion,
    CoachAssociation,
    Gym,
    Gymnast,
    GymnastLevel,
    RegistrationRequest,
    User,
    UserRole,
)
from services.league_service.services import accounts
from sqlalchemy import func, select
from tests.factories import (
    ChallengeFactory,
    CoachAssociationFactory,
    GymFactory,
    GymnastFactory,
    RegistrationRequestFactory,
    UserFactory,
    make_principal,
)


def _gym_data(**overrides):
    data = {
        "name": "Star Gymnastics",
        "city": "Riverdale",
        "admin_first_name": "Dina",
        "admin_last_name": "Weiss",
        "email": "office@stargym.com",
    }
    data.update(overrides)
    return data


def _gymnast_fields(**overrides):
    fields = {
        "first_name": "Lea",
        "last_name": "Roth",
        "birth_date": date(2012, 2, 2),
        "level": GymnastLevel.LEVEL_3,
    }
    fields.update(overrides)
    return fields


async def _count(db, model) -> int:
    return await db.scalar(select(func.count()).select_from(model))


# ---------------------------------------------------------------------------
# Email namespace shared by users and gyms
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_create_gym_rejects_email_of_existing_user(db_session):
    db_session.add(UserFactory.create(email="taken@test.com"))
    await db_session.commit()

    with pytest.raises(ConflictError) as exc_info:
        await accounts.create_gym(db_session, data=_gym_data(email="taken@test.com"))

    assert exc_info.value.field == "email"
    assert await _count(db_session, Gym) == 0


@pytest.mark.asyncio
@pytest.mark.unit
async def test_create_gym_rejects_duplicate_gym_email(db_session):
    await accounts.create_gym(db_session, data=_gym_data())

    with pytest.raises(ConflictError):
        await accounts.create_gym(
            db_session, data=_gym_data(name="Copy", email="OFFICE@stargym.com")
        )
    assert await _count(db_session, Gym) == 1


@pytest.mark.asyncio
@pytest.mark.unit
async def test_create_gym_defaults(db_session):
    gym = await accounts.create_gym(db_session, data=_gym_data())

    assert gym.approved is False
    assert gym.membership_paid is False
    assert gym.allow_self_registration is True


@pytest.mark.asyncio
@pytest.mark.unit
async def test_upsert_user_provisions_spectator(db_session):
    user = await accounts.upsert_user(
        db_session, user_id="idp|123", email="new@test.com", first_name="Avi"
    )

    assert user.role == UserRole.SPECTATOR
    assert (await db_session.get(User, "idp|123")).email == "new@test.com"


@pytest.mark.asyncio
@pytest.mark.unit
async def test_upsert_user_rejects_gym_email_for_new_user(db_session):
    db_session.add(GymFactory.create(email="office@maccabi.com"))
    await db_session.commit()

    with pytest.raises(ConflictError) as exc_info:
        await accounts.upsert_user(
            db_session, user_id="idp|999", email="office@maccabi.com"
        )

    assert "gym admin" in exc_info.value.message
    assert await db_session.get(User, "idp|999") is None


@pytest.mark.asyncio
@pytest.mark.unit
async def test_upsert_user_refreshes_names_and_keeps_role(db_session):
    db_session.add(UserFactory.create(id="idp|1", role=UserRole.COACH))
    await db_session.commit()

    user = await accounts.upsert_user(
        db_session, user_id="idp|1", email=None, first_name="Renamed"
    )

    assert user.first_name == "Renamed"
    assert user.role == UserRole.COACH


@pytest.mark.asyncio
@pytest.mark.unit
async def test_upsert_user_rejects_email_of_another_user(db_session):
    db_session.add_all(
        [
            UserFactory.create(id="idp|1", email="one@test.com"),
            UserFactory.create(id="idp|2", email="two@test.com"),
        ]
    )
    await db_session.commit()

    with pytest.raises(ConflictError):
        await accounts.upsert_user(db_session, user_id="idp|2", email="one@test.com")


# ---------------------------------------------------------------------------
# Roles and coach associations
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_assign_role_is_admin_only(db_session):
    admin = UserFactory.create(role=UserRole.ADMIN)
    coach = UserFactory.create(role=UserRole.COACH)
    target = UserFactory.create()
    db_session.add_all([admin, coach, target])
    await db_session.commit()

    with pytest.raises(PermissionDenied):
        await accounts.assign_role(
            db_session, make_principal(coach), user_id=target.id, role=UserRole.ADMIN
        )

    updated = await accounts.assign_role(
        db_session, make_principal(admin), user_id=target.id, role=UserRole.COACH
    )
    assert updated.role == UserRole.COACH

    with pytest.raises(NotFound):
        await accounts.assign_role(
            db_session, make_principal(admin), user_id="missing", role=UserRole.COACH
        )


@pytest.mark.asyncio
@pytest.mark.unit
async def test_admin_creates_user_ahead_of_login(db_session):
    admin = UserFactory.create(role=UserRole.ADMIN)
    db_session.add(admin)
    await db_session.commit()

    user = await accounts.create_user(
        db_session,
        make_principal(admin),
        user_id="idp|new-coach",
        email="new.coach@test.com",
        first_name="Noa",
        role=UserRole.COACH,
    )

    assert user.role == UserRole.COACH
    stored = await db_session.get(User, "idp|new-coach")
    assert stored.email == "new.coach@test.com"


@pytest.mark.asyncio
@pytest.mark.unit
async def test_create_user_conflicts_and_gate(db_session):
    admin = UserFactory.create(role=UserRole.ADMIN)
    coach = UserFactory.create(role=UserRole.COACH)
    gym = GymFactory.create(email="front@desk.com")
    db_session.add_all([admin, coach, gym])
    await db_session.commit()
    principal = make_principal(admin)

    with pytest.raises(PermissionDenied):
        await accounts.create_user(
            db_session, make_principal(coach), user_id="x", email=None
        )
    with pytest.raises(ConflictError) as exc_info:
        await accounts.create_user(
            db_session, principal, user_id=coach.id, email="fresh@test.com"
        )
    assert exc_info.value.field == "id"
    with pytest.raises(ConflictError) as exc_info:
        await accounts.create_user(
            db_session, principal, user_id="y", email=coach.email.upper()
        )
    assert exc_info.value.field == "email"
    with pytest.raises(ConflictError):
        await accounts.create_user(
            db_session, principal, user_id="z", email="front@desk.com"
        )


@pytest.mark.asyncio
@pytest.mark.unit
async def test_delete_user_drops_associations_and_unlinks_gymnast(db_session):
    admin = UserFactory.create(role=UserRole.ADMIN)
    coach = UserFactory.create(role=UserRole.COACH)
    athlete = UserFactory.create(role=UserRole.GYMNAST)
    gym = GymFactory.create()
    db_session.add_all([admin, coach, athlete, gym])
    await db_session.commit()
    gymnast = GymnastFactory.create(gym.id, user_id=athlete.id)
    db_session.add_all([CoachAssociationFactory.create(gym.id, coach.id), gymnast])
    await db_session.commit()
    coach_id, athlete_id, gymnast_id = coach.id, athlete.id, gymnast.id
    principal = make_principal(admin)

    await accounts.delete_user(db_session, principal, user_id=coach_id)
    await accounts.delete_user(db_session, principal, user_id=athlete_id)

    assert await db_session.get(User, coach_id) is None
    associations = await db_session.scalar(
        select(func.count()).select_from(CoachAssociation)
    )
    assert associations == 0
    kept = await db_session.get(Gymnast, gymnast_id)
    await db_session.refresh(kept)
    assert kept.user_id is None


@pytest.mark.asyncio
@pytest.mark.unit
async def test_delete_user_guards(db_session):
    admin = UserFactory.create(role=UserRole.ADMIN)
    coach = UserFactory.create(role=UserRole.COACH)
    db_session.add_all([admin, coach])
    await db_session.commit()

    with pytest.raises(PermissionDenied):
        await accounts.delete_user(db_session, make_principal(coach), user_id=admin.id)
    with pytest.raises(ValidationFailed):
        await accounts.delete_user(db_session, make_principal(admin), user_id=admin.id)
    with pytest.raises(NotFound):
        await accounts.delete_user(
            db_session, make_principal(admin), user_id="missing"
        )


@pytest.mark.asyncio
@pytest.mark.unit
async def test_gym_admin_adds_coach_and_promotes_spectator(db_session):
    gym = GymFactory.create()
    gym_admin = UserFactory.create(role=UserRole.GYM_ADMIN)
    spectator = UserFactory.create()
    db_session.add_all([gym, gym_admin, spectator])
    await db_session.commit()
    db_session.add(CoachAssociationFactory.create(gym.id, gym_admin.id, is_admin=True))
    await db_session.commit()

    association = await accounts.add_coach_to_gym(
        db_session, make_principal(gym_admin), gym_id=gym.id, user_id=spectator.id
    )

    assert association.is_admin is False
    assert spectator.role == UserRole.COACH
    assert spectator.email in await accounts.staff_emails_for_gym(db_session, gym.id)

    with pytest.raises(ConflictError):
        await accounts.add_coach_to_gym(
            db_session, make_principal(gym_admin), gym_id=gym.id, user_id=spectator.id
        )


@pytest.mark.asyncio
@pytest.mark.unit
async def test_plain_coach_cannot_add_coaches(db_session):
    gym = GymFactory.create()
    coach = UserFactory.create(role=UserRole.COACH)
    other = UserFactory.create()
    db_session.add_all([gym, coach, other])
    await db_session.commit()
    db_session.add(CoachAssociationFactory.create(gym.id, coach.id))
    await db_session.commit()

    with pytest.raises(PermissionDenied):
        await accounts.add_coach_to_gym(
            db_session, make_principal(coach), gym_id=gym.id, user_id=other.id
        )


# ---------------------------------------------------------------------------
# Gymnasts
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_create_gymnast_links_user_and_promotes_role(db_session):
    gym = GymFactory.create()
    user = UserFactory.create()
    db_session.add_all([gym, user])
    await db_session.commit()

    gymnast = await accounts.create_gymnast(
        db_session,
        gym_id=gym.id,
        fields=_gymnast_fields(),
        approved=False,
        user_id=user.id,
    )
    await db_session.commit()

    assert gymnast.user_id == user.id
    assert gymnast.points == 0
    assert user.role == UserRole.GYMNAST
    assert (await accounts.get_gymnast_for_user(db_session, user.id)).id == gymnast.id


@pytest.mark.asyncio
@pytest.mark.unit
async def test_create_gymnast_rejects_second_gymnast_for_user(db_session):
    gym = GymFactory.create()
    user = UserFactory.create()
    db_session.add_all([gym, user])
    await db_session.commit()
    db_session.add(GymnastFactory.create(gym.id, user_id=user.id))
    await db_session.commit()

    with pytest.raises(ConflictError) as exc_info:
        await accounts.create_gymnast(
            db_session,
            gym_id=gym.id,
            fields=_gymnast_fields(),
            approved=True,
            user_id=user.id,
        )
    assert exc_info.value.field == "user_id"


@pytest.mark.asyncio
@pytest.mark.unit
async def test_create_gymnast_rejects_gym_email(db_session):
    gym = GymFactory.create(email="office@maccabi.com")
    db_session.add(gym)
    await db_session.commit()

    with pytest.raises(ConflictError):
        await accounts.create_gymnast(
            db_session,
            gym_id=gym.id,
            fields=_gymnast_fields(email="office@maccabi.com"),
            approved=True,
        )


@pytest.mark.asyncio
@pytest.mark.unit
async def test_create_gymnast_for_gym_requires_access(db_session):
    gym = GymFactory.create()
    outsider = UserFactory.create(role=UserRole.COACH)
    db_session.add_all([gym, outsider])
    await db_session.commit()

    with pytest.raises(PermissionDenied):
        await accounts.create_gymnast_for_gym(
            db_session,
            make_principal(outsider),
            gym_id=gym.id,
            fields=_gymnast_fields(),
        )
    assert await _count(db_session, Gymnast) == 0


@pytest.mark.asyncio
@pytest.mark.unit
async def test_delete_gymnast_clears_history_and_keeps_request(db_session):
    gym = GymFactory.create()
    admin = UserFactory.create(role=UserRole.ADMIN)
    db_session.add_all([gym, admin])
    await db_session.commit()
    gymnast = GymnastFactory.create(gym.id, points=10)
    challenge = ChallengeFactory.create()
    db_session.add_all([gymnast, challenge])
    await db_session.commit()
    request = RegistrationRequestFactory.create(gym.id, gymnast_id=gymnast.id)
    db_session.add_all(
        [request, ChallengeCompletion(challenge_id=challenge.id, gymnast_id=gymnast.id)]
    )
    await db_session.commit()

    await accounts.delete_gymnast(
        db_session, make_principal(admin), gymnast_id=gymnast.id
    )

    assert await _count(db_session, Gymnast) == 0
    assert await _count(db_session, ChallengeCompletion) == 0
    assert await _count(db_session, RegistrationRequest) == 1
    await db_session.refresh(request)
    assert request.gymnast_id is None


# ---------------------------------------------------------------------------
# Gym deletion
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_delete_gym_refused_while_it_has_gymnasts(db_session):
    gym = GymFactory.create()
    admin = UserFactory.create(role=UserRole.ADMIN)
    db_session.add_all([gym, admin])
    await db_session.commit()
    db_session.add(GymnastFactory.create(gym.id))
    await db_session.commit()

    with pytest.raises(ConflictError):
        await accounts.delete_gym(db_session, make_principal(admin), gym_id=gym.id)
    assert await _count(db_session, Gym) == 1


@pytest.mark.asyncio
@pytest.mark.unit
async def test_delete_empty_gym_removes_associations(db_session):
    gym = GymFactory.create()
    admin = UserFactory.create(role=UserRole.ADMIN)
    coach = UserFactory.create(role=UserRole.COACH)
    db_session.add_all([gym, admin, coach])
    await db_session.commit()
    db_session.add(CoachAssociationFactory.create(gym.id, coach.id))
    await db_session.commit()

    await accounts.delete_gym(db_session, make_principal(admin), gym_id=gym.id)

    assert await _count(db_session, Gym) == 0
    assert await _count(db_session, CoachAssociation) == 0
    with pytest.raises(NotFound):
        await accounts.get_gym_or_404(db_session, uuid.uuid4())


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_profile_lists_gyms_for_staff_and_gymnast_for_gymnasts(db_session):
    gym = GymFactory.create()
    coach = UserFactory.create(role=UserRole.COACH)
    athlete = UserFactory.create(role=UserRole.GYMNAST)
    db_session.add_all([gym, coach, athlete])
    await db_session.commit()
    gymnast = GymnastFactory.create(gym.id, user_id=athlete.id)
    db_session.add_all([CoachAssociationFactory.create(gym.id, coach.id), gymnast])
    await db_session.commit()

    coach_profile = await accounts.get_profile(db_session, make_principal(coach))
    athlete_profile = await accounts.get_profile(db_session, make_principal(athlete))

    assert [g.id for g in coach_profile["gyms"]] == [gym.id]
    assert coach_profile["gymnast"] is None
    assert athlete_profile["gyms"] == []
    assert athlete_profile["gymnast"].id == gymnast.id
