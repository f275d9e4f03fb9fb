"""Shared dependencies for league service routers."""

from fastapi import Depends
from libs.auth.dependencies import get_current_user
from libs.auth.models import AuthUser
from libs.db.session import get_async_db
from services.league_service.services import accounts
from services.league_service.services.gate import Principal
from sqlalchemy.ext.asyncio import AsyncSession


async def get_current_principal(
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> Principal:
    """
    Resolve the authenticated caller into a Principal.

    The stored user record is the authority for the role; first-time callers
    are provisioned as spectators.
    """
    user = await accounts.upsert_user(
        db,
        user_id=current_user.user_id,
        email=current_user.email,
        first_name=current_user.first_name,
        last_name=current_user.last_name,
    )
    return Principal(user_id=user.id, email=user.email, role=user.role)
