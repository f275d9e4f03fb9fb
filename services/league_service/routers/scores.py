"""Score keeping."""

from fastapi import APIRouter, Depends, status
from libs.db.session import get_async_db
from services.league_service.routers._helpers import get_current_principal
from services.league_service.schemas import ScoreCreate, ScoreResponse
from services.league_service.services import scores
from services.league_service.services.gate import Principal
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/scores", tags=["scores"])


@router.post("", response_model=ScoreResponse, status_code=status.HTTP_201_CREATED)
async def record_score(
    payload: ScoreCreate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    """Record a gymnast's scores (admin, or staff of the gymnast's gym)."""
    return await scores.record_score(db, principal, payload=payload)
