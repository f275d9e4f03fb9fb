"""Integration tests for gym, user and auth endpoints."""

import pytest
from jose import jwt
from libs.common.config import get_settings
from services.league_service.models import UserRole
from tests.factories import (
    CoachAssociationFactory,
    GymFactory,
    GymnastFactory,
    UserFactory,
)


def _gym_body(**overrides):
    body = {
        "name": "Star Gymnastics",
        "city": "Riverdale",
        "admin_first_name": "Dina",
        "admin_last_name": "Weiss",
        "email": "office@stargym.com",
    }
    body.update(overrides)
    return body


@pytest.mark.asyncio
@pytest.mark.integration
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "league"}
    assert "X-Request-ID" in response.headers


@pytest.mark.asyncio
@pytest.mark.integration
async def test_register_gym_is_public_and_unapproved(client, db_session):
    response = await client.post("/api/v1/gyms", json=_gym_body())

    assert response.status_code == 201, response.text
    data = response.json()
    assert data["approved"] is False
    assert data["allow_self_registration"] is True


@pytest.mark.asyncio
@pytest.mark.integration
async def test_register_gym_with_user_email_conflicts(client, db_session):
    db_session.add(UserFactory.create(email="taken@test.com"))
    await db_session.commit()

    response = await client.post(
        "/api/v1/gyms", json=_gym_body(email="taken@test.com")
    )

    assert response.status_code == 409
    assert response.json()["field"] == "email"

    listed = await client.get("/api/v1/gyms")
    assert listed.json() == []


@pytest.mark.asyncio
@pytest.mark.integration
async def test_admin_approves_gym_and_coach_cannot(client, db_session, login):
    gym = GymFactory.create(approved=False)
    admin = UserFactory.create(role=UserRole.ADMIN)
    coach = UserFactory.create(role=UserRole.COACH)
    db_session.add_all([gym, admin, coach])
    await db_session.commit()

    login(coach)
    denied = await client.patch(f"/api/v1/gyms/{gym.id}/approve", json={})
    assert denied.status_code == 403

    login(admin)
    approved = await client.patch(
        f"/api/v1/gyms/{gym.id}/approve", json={"approved": True}
    )
    assert approved.status_code == 200
    assert approved.json()["approved"] is True

    public = await client.get("/api/v1/gyms", params={"approved_only": True})
    assert [g["id"] for g in public.json()] == [str(gym.id)]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_gym_admin_adds_coach(client, db_session, login):
    gym = GymFactory.create()
    gym_admin = UserFactory.create(role=UserRole.GYM_ADMIN)
    newcomer = UserFactory.create()
    db_session.add_all([gym, gym_admin, newcomer])
    await db_session.commit()
    db_session.add(CoachAssociationFactory.create(gym.id, gym_admin.id, is_admin=True))
    await db_session.commit()
    login(gym_admin)

    response = await client.post(
        f"/api/v1/gyms/{gym.id}/coaches", json={"user_id": newcomer.id}
    )

    assert response.status_code == 201, response.text
    coaches = await client.get(f"/api/v1/gyms/{gym.id}/coaches")
    assert {c["user_id"] for c in coaches.json()} == {gym_admin.id, newcomer.id}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_coach_toggles_self_registration(client, db_session, login):
    gym = GymFactory.create()
    coach = UserFactory.create(role=UserRole.COACH)
    db_session.add_all([gym, coach])
    await db_session.commit()
    db_session.add(CoachAssociationFactory.create(gym.id, coach.id))
    await db_session.commit()
    login(coach)

    response = await client.patch(
        f"/api/v1/gyms/{gym.id}/self-registration",
        json={"allow_self_registration": False},
    )

    assert response.status_code == 200
    assert response.json()["allow_self_registration"] is False


@pytest.mark.asyncio
@pytest.mark.integration
async def test_delete_gym_with_gymnasts_is_409(client, db_session, login):
    gym = GymFactory.create()
    admin = UserFactory.create(role=UserRole.ADMIN)
    db_session.add_all([gym, admin])
    await db_session.commit()
    db_session.add(GymnastFactory.create(gym.id))
    await db_session.commit()
    login(admin)

    response = await client.delete(f"/api/v1/gyms/{gym.id}")

    assert response.status_code == 409


@pytest.mark.asyncio
@pytest.mark.integration
async def test_bearer_token_is_decoded(client, db_session):
    """GET /auth/user: a signed token provisions a spectator on first call."""
    settings = get_settings()
    token = jwt.encode(
        {"sub": "idp|42", "email": "newcomer@test.com", "first_name": "Avi"},
        settings.AUTH_JWT_SECRET,
        algorithm=settings.AUTH_JWT_ALGORITHM,
    )

    response = await client.get(
        "/api/v1/auth/user", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["id"] == "idp|42"
    assert data["role"] == "spectator"
    assert data["email"] == "newcomer@test.com"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_bad_token_is_401(client):
    response = await client.get(
        "/api/v1/auth/user", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.integration
async def test_admin_assigns_role(client, db_session, login):
    admin = UserFactory.create(role=UserRole.ADMIN)
    target = UserFactory.create()
    db_session.add_all([admin, target])
    await db_session.commit()
    login(admin)

    response = await client.patch(
        f"/api/v1/users/{target.id}/role", json={"role": "coach"}
    )

    assert response.status_code == 200, response.text
    assert response.json()["role"] == "coach"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_admin_creates_and_deletes_user(client, db_session, login):
    admin = UserFactory.create(role=UserRole.ADMIN)
    db_session.add(admin)
    await db_session.commit()
    login(admin)

    created = await client.post(
        "/api/v1/users",
        json={"id": "idp-judge-1", "email": "judge@test.com", "role": "coach"},
    )
    assert created.status_code == 201, created.text
    assert created.json()["role"] == "coach"

    duplicate = await client.post(
        "/api/v1/users", json={"id": "idp-judge-2", "email": "judge@test.com"}
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["field"] == "email"

    deleted = await client.delete("/api/v1/users/idp-judge-1")
    assert deleted.status_code == 204

    listed = await client.get("/api/v1/users")
    assert "idp-judge-1" not in [u["id"] for u in listed.json()]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_non_admin_cannot_create_users(client, db_session, login):
    coach = UserFactory.create(role=UserRole.COACH)
    db_session.add(coach)
    await db_session.commit()
    login(coach)

    response = await client.post("/api/v1/users", json={"id": "idp|someone"})

    assert response.status_code == 403
