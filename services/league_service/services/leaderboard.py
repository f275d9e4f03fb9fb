"""Leaderboard: approved gymnasts ranked by points."""

import uuid
from typing import Any, Optional

from services.league_service.models import Gymnast, GymnastLevel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

LEADERBOARD_LIMIT = 50
LEADERBOARD_TYPES = ("individual", "team")


async def leaderboard(
    db: AsyncSession,
    *,
    type: str = "individual",
    level: Optional[GymnastLevel] = None,
    gym_id: Optional[uuid.UUID] = None,
    limit: int = LEADERBOARD_LIMIT,
) -> list[dict[str, Any]]:
    """Top approved gymnasts by points, highest first.

    Ties keep insertion order (created_at, then id). `type` is accepted for
    future segmentation; every type currently ranks raw points.
    """
    query = select(Gymnast).where(Gymnast.approved.is_(True))
    if level is not None:
        query = query.where(Gymnast.level == level)
    if gym_id is not None:
        query = query.where(Gymnast.gym_id == gym_id)

    query = query.order_by(
        Gymnast.points.desc(), Gymnast.created_at.asc(), Gymnast.id.asc()
    ).limit(min(limit, LEADERBOARD_LIMIT))

    result = await db.execute(query)
    return [
        {
            "rank": rank,
            "id": gymnast.id,
            "first_name": gymnast.first_name,
            "last_name": gymnast.last_name,
            "level": gymnast.level,
            "points": gymnast.points,
            "gym_id": gymnast.gym_id,
        }
        for rank, gymnast in enumerate(result.scalars().all(), start=1)
    ]
