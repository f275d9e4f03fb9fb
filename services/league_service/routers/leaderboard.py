import uuid
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query
from libs.db.session import get_async_db
from services.league_service.models import GymnastLevel
from services.league_service.routers._helpers import get_current_principal
from services.league_service.schemas import LeaderboardEntry
from services.league_service.services import leaderboard as leaderboard_service
from services.league_service.services.gate import Principal
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("", response_model=List[LeaderboardEntry])
async def get_leaderboard(
    type: Literal["individual", "team"] = "individual",
    level: Optional[GymnastLevel] = None,
    gym_id: Optional[uuid.UUID] = Query(None),
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    """Top 50 approved gymnasts by points, optionally for one level or gym."""
    return await leaderboard_service.leaderboard(
        db, type=type, level=level, gym_id=gym_id
    )
