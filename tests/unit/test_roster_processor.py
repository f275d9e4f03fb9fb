"""Unit tests for the roster batch processor."""

import uuid

import pytest
from libs.common.errors import ConflictError, NotFound, PermissionDenied
from services.league_service.models import (
    Gymnast,
    GymnastLevel,
    GymnastType,
    RosterUpload,
    RosterUploadStatus,
    UserRole,
)
from services.league_service.schemas import RosterUploadCreate
from services.league_service.services import roster_processor
from sqlalchemy import func, select
from tests.factories import (
    CoachAssociationFactory,
    GymFactory,
    RecordingNotifier,
    RosterUploadFactory,
    UserFactory,
    make_principal,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _row(first_name="Maya", last_name="Gold", **overrides):
    row = {
        "firstName": first_name,
        "lastName": last_name,
        "birthDate": "2012-06-15",
        "level": "6",
        "type": "team",
        "parentEmail": f"{first_name.lower()}-parent@test.com",
    }
    row.update(overrides)
    return row


async def _setup(db):
    """Gym, associated coach and a pending upload created by the coach."""
    gym = GymFactory.create()
    coach = UserFactory.create(role=UserRole.COACH)
    db.add_all([gym, coach])
    await db.commit()
    db.add(CoachAssociationFactory.create(gym.id, coach.id))
    upload = RosterUploadFactory.create(gym.id, uploaded_by=coach.id)
    db.add(upload)
    await db.commit()
    return gym, coach, upload


async def _gymnasts(db, gym_id):
    result = await db.execute(
        select(Gymnast).where(Gymnast.gym_id == gym_id).order_by(Gymnast.first_name)
    )
    return list(result.scalars().all())


# ---------------------------------------------------------------------------
# create_upload_record
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_create_upload_record_is_pending(db_session):
    gym, coach, _ = await _setup(db_session)

    upload = await roster_processor.create_upload_record(
        db_session,
        make_principal(coach),
        payload=RosterUploadCreate(gym_id=gym.id, filename="spring.csv", total_rows=3),
    )

    assert upload.status == RosterUploadStatus.PENDING
    assert upload.uploaded_by == coach.id
    assert upload.total_rows == 3
    assert upload.processed_rows == 0
    assert upload.errors == []


@pytest.mark.asyncio
@pytest.mark.unit
async def test_create_upload_record_requires_gym_access(db_session):
    gym, _, _ = await _setup(db_session)
    outsider = UserFactory.create(role=UserRole.COACH)
    db_session.add(outsider)
    await db_session.commit()

    with pytest.raises(PermissionDenied):
        await roster_processor.create_upload_record(
            db_session,
            make_principal(outsider),
            payload=RosterUploadCreate(gym_id=gym.id, filename="spring.csv"),
        )


# ---------------------------------------------------------------------------
# process
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_process_reports_invalid_birth_date_row(db_session):
    gym, coach, upload = await _setup(db_session)
    rows = [
        _row("Maya"),
        _row("Talia", birthDate="not-a-date"),
        _row("Yael"),
    ]
    notifier = RecordingNotifier()

    result = await roster_processor.process(
        db_session, notifier, make_principal(coach), upload_id=upload.id, rows=rows
    )

    assert result["total_rows"] == 3
    assert result["processed_rows"] == 2
    assert result["error_rows"] == 1
    assert result["created_count"] == 2
    assert [e["row"] for e in result["errors"]] == [2]
    assert result["errors"][0]["data"]["firstName"] == "Talia"
    assert result["errors"][0]["error"]

    gymnasts = await _gymnasts(db_session, gym.id)
    assert [g.first_name for g in gymnasts] == ["Maya", "Yael"]
    assert all(g.approved and g.points == 0 for g in gymnasts)
    assert all(g.level == GymnastLevel.LEVEL_6 for g in gymnasts)


@pytest.mark.asyncio
@pytest.mark.unit
@pytest.mark.parametrize("bad_index", [0, 2, 4])
async def test_one_malformed_row_does_not_affect_the_others(db_session, bad_index):
    gym, coach, upload = await _setup(db_session)
    rows = [_row(f"Gymnast{i}") for i in range(5)]
    del rows[bad_index]["firstName"]

    result = await roster_processor.process(
        db_session,
        RecordingNotifier(),
        make_principal(coach),
        upload_id=upload.id,
        rows=rows,
    )

    assert result["processed_rows"] == 4
    assert result["error_rows"] == 1
    assert [e["row"] for e in result["errors"]] == [bad_index + 1]
    assert len(await _gymnasts(db_session, gym.id)) == 4


@pytest.mark.asyncio
@pytest.mark.unit
async def test_blank_type_cell_defaults_to_team(db_session):
    gym, coach, upload = await _setup(db_session)
    rows = [_row("Maya", type=""), _row("Talia", type="   "), _row("Yael", type=None)]

    result = await roster_processor.process(
        db_session,
        RecordingNotifier(),
        make_principal(coach),
        upload_id=upload.id,
        rows=rows,
    )

    assert result["processed_rows"] == 3
    assert result["errors"] == []
    gymnasts = await _gymnasts(db_session, gym.id)
    assert {g.type for g in gymnasts} == {GymnastType.TEAM}


@pytest.mark.asyncio
@pytest.mark.unit
async def test_non_object_row_is_reported_and_skipped(db_session):
    gym, coach, upload = await _setup(db_session)
    rows = [_row("Maya"), "garbage", None, _row("Yael")]

    result = await roster_processor.process(
        db_session,
        RecordingNotifier(),
        make_principal(coach),
        upload_id=upload.id,
        rows=rows,
    )

    assert result["processed_rows"] == 2
    assert result["error_rows"] == 2
    assert [(e["row"], e["data"]) for e in result["errors"]] == [
        (2, "garbage"),
        (3, None),
    ]
    assert all("object" in e["error"] for e in result["errors"])
    gymnasts = await _gymnasts(db_session, gym.id)
    assert [g.first_name for g in gymnasts] == ["Maya", "Yael"]


@pytest.mark.asyncio
@pytest.mark.unit
async def test_process_marks_upload_completed_with_counters(db_session):
    gym, coach, upload = await _setup(db_session)
    rows = [_row("Maya"), _row("Talia", level="11")]

    await roster_processor.process(
        db_session,
        RecordingNotifier(),
        make_principal(coach),
        upload_id=upload.id,
        rows=rows,
    )

    stored = await db_session.get(RosterUpload, upload.id)
    await db_session.refresh(stored)
    assert stored.status == RosterUploadStatus.COMPLETED
    assert stored.total_rows == 2
    assert stored.processed_rows == 1
    assert stored.error_rows == 1
    assert stored.processed_rows + stored.error_rows == stored.total_rows
    assert stored.completed_at is not None
    assert stored.errors[0]["row"] == 2


@pytest.mark.asyncio
@pytest.mark.unit
async def test_row_using_a_gym_email_is_rejected(db_session):
    gym, coach, upload = await _setup(db_session)
    rows = [_row("Maya", email=gym.email.upper()), _row("Yael")]

    result = await roster_processor.process(
        db_session,
        RecordingNotifier(),
        make_principal(coach),
        upload_id=upload.id,
        rows=rows,
    )

    assert result["processed_rows"] == 1
    assert result["errors"][0]["row"] == 1
    assert "gym admin" in result["errors"][0]["error"]


@pytest.mark.asyncio
@pytest.mark.unit
async def test_response_lists_at_most_ten_errors(db_session):
    gym, coach, upload = await _setup(db_session)
    rows = [_row(f"Bad{i}", level="not-a-level") for i in range(12)] + [_row("Maya")]

    result = await roster_processor.process(
        db_session,
        RecordingNotifier(),
        make_principal(coach),
        upload_id=upload.id,
        rows=rows,
    )

    assert result["error_rows"] == 12
    assert len(result["errors"]) == roster_processor.RESPONSE_ERROR_LIMIT
    assert result["processed_rows"] == 1

    stored = await db_session.get(RosterUpload, upload.id)
    await db_session.refresh(stored)
    assert len(stored.errors) == 12


@pytest.mark.asyncio
@pytest.mark.unit
async def test_process_sends_welcomes_and_summary(db_session):
    gym, coach, upload = await _setup(db_session)
    rows = [_row("Maya", email="maya@test.com"), _row("Talia", birthDate="")]
    notifier = RecordingNotifier()

    await roster_processor.process(
        db_session, notifier, make_principal(coach), upload_id=upload.id, rows=rows
    )

    assert [s.to_email for s in notifier.of_type("gymnast_welcome")] == [
        "maya@test.com"
    ]
    (summary,) = notifier.of_type("roster_upload_summary")
    assert summary.to_email == coach.email
    assert summary.template_data["processed_rows"] == 1
    assert summary.template_data["error_rows"] == 1
    assert summary.template_data["errors"][0]["row"] == 2


@pytest.mark.asyncio
@pytest.mark.unit
async def test_empty_batch_completes(db_session):
    _, coach, upload = await _setup(db_session)

    result = await roster_processor.process(
        db_session,
        RecordingNotifier(),
        make_principal(coach),
        upload_id=upload.id,
        rows=[],
    )

    assert result == {
        "total_rows": 0,
        "processed_rows": 0,
        "error_rows": 0,
        "errors": [],
        "created_count": 0,
    }


@pytest.mark.asyncio
@pytest.mark.unit
async def test_processed_upload_cannot_be_processed_again(db_session):
    gym, coach, upload = await _setup(db_session)
    principal = make_principal(coach)
    await roster_processor.process(
        db_session, RecordingNotifier(), principal, upload_id=upload.id, rows=[_row()]
    )

    with pytest.raises(ConflictError):
        await roster_processor.process(
            db_session,
            RecordingNotifier(),
            principal,
            upload_id=upload.id,
            rows=[_row("Yael")],
        )
    assert len(await _gymnasts(db_session, gym.id)) == 1


@pytest.mark.asyncio
@pytest.mark.unit
async def test_process_missing_upload(db_session):
    _, coach, _ = await _setup(db_session)

    with pytest.raises(NotFound):
        await roster_processor.process(
            db_session,
            RecordingNotifier(),
            make_principal(coach),
            upload_id=uuid.uuid4(),
            rows=[],
        )


@pytest.mark.asyncio
@pytest.mark.unit
async def test_process_requires_gym_access(db_session):
    gym, _, upload = await _setup(db_session)
    outsider = UserFactory.create(role=UserRole.COACH)
    db_session.add(outsider)
    await db_session.commit()

    with pytest.raises(PermissionDenied):
        await roster_processor.process(
            db_session,
            RecordingNotifier(),
            make_principal(outsider),
            upload_id=upload.id,
            rows=[_row()],
        )
    assert await _gymnasts(db_session, gym.id) == []


@pytest.mark.asyncio
@pytest.mark.unit
async def test_unexpected_error_marks_upload_failed(db_session, monkeypatch):
    gym, coach, upload = await _setup(db_session)
    # The failure path rolls the session back, expiring loaded objects.
    gym_id, upload_id = gym.id, upload.id

    async def exploding_notify(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(roster_processor, "notify", exploding_notify)

    with pytest.raises(RuntimeError, match="boom"):
        await roster_processor.process(
            db_session,
            RecordingNotifier(),
            make_principal(coach),
            upload_id=upload_id,
            rows=[_row("Maya"), _row("Yael")],
        )

    stored = await db_session.get(RosterUpload, upload_id)
    await db_session.refresh(stored)
    assert stored.status == RosterUploadStatus.FAILED
    assert stored.total_rows == 2
    assert stored.processed_rows == 1
    assert stored.error_rows == 1
    assert stored.errors == [
        {"row": 0, "data": {}, "error": "Processing failed: boom"}
    ]
    # Rows committed before the failure stay committed.
    assert len(await _gymnasts(db_session, gym_id)) == 1


@pytest.mark.unit
def test_format_validation_error_joins_fields():
    from pydantic import ValidationError
    from services.league_service.schemas import RosterRow

    with pytest.raises(ValidationError) as exc_info:
        RosterRow.model_validate({"lastName": "Gold", "level": "6"})

    message = roster_processor.format_validation_error(exc_info.value)
    assert "first_name" in message
    assert "birth_date" in message
    assert "; " in message
