"""Current-user endpoints."""

from fastapi import APIRouter, Depends
from libs.db.session import get_async_db
from services.league_service.routers._helpers import get_current_principal
from services.league_service.schemas import ProfileResponse, UserResponse
from services.league_service.services import accounts
from services.league_service.services.gate import Principal
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(tags=["auth"])


@router.get("/auth/user", response_model=UserResponse)
async def get_auth_user(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    """Return the caller's user record, provisioning it on first call."""
    profile = await accounts.get_profile(db, principal)
    return profile["user"]


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_db),
):
    """Return the caller's user record with their gyms or gymnast profile."""
    return await accounts.get_profile(db, principal)
