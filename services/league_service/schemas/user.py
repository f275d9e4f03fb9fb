from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from services.league_service.models.enums import UserRole
from services.league_service.schemas.gym import GymResponse
from services.league_service.schemas.gymnast import GymnastResponse


class UserResponse(BaseModel):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: UserRole
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    """Admin-created account, keyed by the identity provider's subject id."""

    id: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: UserRole = UserRole.SPECTATOR


class RoleUpdate(BaseModel):
    role: UserRole


class ProfileResponse(BaseModel):
    """The caller's user record plus what their role attaches them to."""

    user: UserResponse
    gyms: list[GymResponse] = []
    gymnast: Optional[GymnastResponse] = None
