"""Roster batch processor.

Turns rows parsed from a roster spreadsheet into approved gymnasts for the
upload's gym. Each row is validated and saved in its own transaction: a bad
row is rolled back, recorded as ``{row, data, error}`` and skipped, and the
batch carries on. Only an error outside the per-row handling stops the batch;
the upload is then marked failed and the error is re-raised.

Upload lifecycle: pending -> processing -> completed | failed.
"""

import uuid
from typing import Any, Optional

from libs.common.config import get_settings
from libs.common.datetime_utils import utc_now
from libs.common.errors import ConflictError, LeagueError, NotFound
from libs.common.logging import get_logger
from pydantic import ValidationError
from services.league_service.models import (
    APPLICANT_FIELDS,
    Gym,
    Gymnast,
    RosterUpload,
    RosterUploadStatus,
    User,
)
from services.league_service.schemas import RosterRow, RosterUploadCreate
from services.league_service.services import accounts
from services.league_service.services.gate import Principal, require_gym_access
from services.league_service.services.notifications import Notifier, notify
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

# Errors echoed back in the API response and the summary email.
RESPONSE_ERROR_LIMIT = 10


def format_validation_error(exc: ValidationError) -> str:
    """One line per failing field, e.g. ``birth_date: Input should be a valid date``."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


async def create_upload_record(
    db: AsyncSession,
    principal: Principal,
    *,
    payload: RosterUploadCreate,
) -> RosterUpload:
    """Record the intent to import a roster. No rows are processed yet."""
    await accounts.get_gym_or_404(db, payload.gym_id)
    await require_gym_access(db, principal, payload.gym_id)

    upload = RosterUpload(
        gym_id=payload.gym_id,
        uploaded_by=principal.user_id,
        filename=payload.filename,
        description=payload.description,
        total_rows=payload.total_rows,
        status=RosterUploadStatus.PENDING,
        errors=[],
    )
    db.add(upload)
    await db.commit()

    logger.info(
        "Roster upload %s created for gym %s (%s, %d rows)",
        upload.id,
        upload.gym_id,
        upload.filename,
        upload.total_rows,
    )
    return upload


async def _import_row(
    db: AsyncSession, gym_id: uuid.UUID, row: Any
) -> tuple[Optional[Gymnast], Optional[str]]:
    """Validate and save one row. Returns (gymnast, None) or (None, error)."""
    if not isinstance(row, dict):
        return None, "Row must be an object of column values"

    try:
        fields = RosterRow.model_validate(row)
    except ValidationError as e:
        return None, format_validation_error(e)

    try:
        gymnast = await accounts.create_gymnast(
            db,
            gym_id=gym_id,
            fields=fields.model_dump(include=set(APPLICANT_FIELDS)),
            approved=True,
        )
        await db.commit()
    except LeagueError as e:
        await db.rollback()
        return None, e.message
    except SQLAlchemyError as e:
        await db.rollback()
        logger.warning("Roster row failed to persist: %s", e)
        return None, "Could not save gymnast record"

    return gymnast, None


async def _mark_failed(
    db: AsyncSession,
    upload: RosterUpload,
    *,
    total_rows: int,
    processed_rows: int,
    exc: Exception,
) -> None:
    await db.refresh(upload)
    upload.status = RosterUploadStatus.FAILED
    upload.total_rows = total_rows
    upload.processed_rows = processed_rows
    upload.error_rows = total_rows - processed_rows
    upload.errors = [{"row": 0, "data": {}, "error": f"Processing failed: {exc}"}]
    upload.completed_at = utc_now()
    await db.commit()


async def process(
    db: AsyncSession,
    notifier: Notifier,
    principal: Principal,
    *,
    upload_id: uuid.UUID,
    rows: list[Any],
) -> dict[str, Any]:
    """Import every row of a pending upload, continuing past row errors.

    Returns the counters plus the first ten row errors.
    """
    upload = await db.get(RosterUpload, upload_id)
    if upload is None:
        raise NotFound("Roster upload not found")

    await require_gym_access(db, principal, upload.gym_id)

    # Advisory only; two concurrent calls can both pass this check.
    if upload.status != RosterUploadStatus.PENDING:
        raise ConflictError(
            f"Roster upload is already {upload.status.value}", field="status"
        )

    gym = await db.get(Gym, upload.gym_id)
    gym_id, gym_name = gym.id, gym.name
    total_rows = len(rows)

    upload.status = RosterUploadStatus.PROCESSING
    upload.total_rows = total_rows
    await db.commit()

    processed_rows = 0
    errors: list[dict[str, Any]] = []
    try:
        for index, row in enumerate(rows):
            gymnast, error = await _import_row(db, gym_id, row)
            if error is not None:
                errors.append({"row": index + 1, "data": row, "error": error})
                continue

            processed_rows += 1
            await notify(
                notifier,
                "gymnast_welcome",
                gymnast.contact_email,
                {
                    "gymnast_name": gymnast.full_name,
                    "gym_name": gym_name,
                    "level": gymnast.level.value,
                    "login_url": get_settings().login_url,
                },
            )

        await db.refresh(upload)
        upload.status = RosterUploadStatus.COMPLETED
        upload.processed_rows = processed_rows
        upload.error_rows = len(errors)
        upload.errors = errors
        upload.completed_at = utc_now()
        await db.commit()
    except Exception as exc:
        logger.exception("Roster upload %s failed", upload_id)
        await db.rollback()
        await _mark_failed(
            db,
            upload,
            total_rows=total_rows,
            processed_rows=processed_rows,
            exc=exc,
        )
        raise

    logger.info(
        "Roster upload %s completed: %d/%d rows imported",
        upload.id,
        processed_rows,
        total_rows,
        extra={
            "extra_fields": {
                "upload_id": str(upload.id),
                "processed_rows": processed_rows,
                "error_rows": len(errors),
            }
        },
    )

    uploader = await db.get(User, upload.uploaded_by) if upload.uploaded_by else None
    await notify(
        notifier,
        "roster_upload_summary",
        uploader.email if uploader else None,
        {
            "uploader_name": (uploader.full_name if uploader else "") or "Coach",
            "gym_name": gym_name,
            "filename": upload.filename,
            "total_rows": total_rows,
            "processed_rows": processed_rows,
            "error_rows": len(errors),
            "errors": [
                {"row": e["row"], "error": e["error"]}
                for e in errors[:RESPONSE_ERROR_LIMIT]
            ],
        },
    )

    return {
        "total_rows": total_rows,
        "processed_rows": processed_rows,
        "error_rows": len(errors),
        "errors": errors[:RESPONSE_ERROR_LIMIT],
        "created_count": processed_rows,
    }


async def list_for_gym(
    db: AsyncSession, principal: Principal, *, gym_id: uuid.UUID
) -> list[RosterUpload]:
    await accounts.get_gym_or_404(db, gym_id)
    await require_gym_access(db, principal, gym_id)
    result = await db.execute(
        select(RosterUpload)
        .where(RosterUpload.gym_id == gym_id)
        .order_by(RosterUpload.created_at.desc(), RosterUpload.id.desc())
    )
    return list(result.scalars().all())
