"""Competition score keeping."""

import uuid

from libs.common.logging import get_logger
from services.league_service.models import Score
from services.league_service.schemas import ScoreCreate
from services.league_service.services import accounts, events
from services.league_service.services.gate import Principal, require_gym_access
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


async def record_score(
    db: AsyncSession, principal: Principal, *, payload: ScoreCreate
) -> Score:
    """Record a score sheet for a gymnast (admin, or staff of the gymnast's gym)."""
    gymnast = await accounts.get_gymnast_or_404(db, payload.gymnast_id)
    await require_gym_access(db, principal, gymnast.gym_id)
    if payload.event_id is not None:
        await events.get_event_or_404(db, payload.event_id)

    score = Score(
        gymnast_id=gymnast.id,
        event_id=payload.event_id,
        vault=payload.vault,
        bars=payload.bars,
        beam=payload.beam,
        floor=payload.floor,
        all_around=payload.all_around,
        recorded_by=principal.user_id,
    )
    db.add(score)
    await db.commit()

    logger.info(
        "Score %s recorded for gymnast %s (AA %s) by %s",
        score.id,
        gymnast.id,
        score.all_around,
        principal.user_id,
    )
    return score


async def list_for_gymnast(db: AsyncSession, *, gymnast_id: uuid.UUID) -> list[Score]:
    """A gymnast's scores, newest first."""
    await accounts.get_gymnast_or_404(db, gymnast_id)
    result = await db.execute(
        select(Score)
        .where(Score.gymnast_id == gymnast_id)
        .order_by(Score.created_at.desc(), Score.id)
    )
    return list(result.scalars().all())
