import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from services.league_service.models.enums import GymnastLevel, RedemptionStatus


class ChallengeCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    points: int = Field(..., gt=0)
    levels: list[GymnastLevel] = []
    # Set by coaches to publish a challenge on behalf of their gym.
    from_gym_id: Optional[uuid.UUID] = None


class ChallengeResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: str
    points: int
    levels: list[str] = []
    created_by: Optional[str] = None
    is_coach_challenge: bool
    from_gym_id: Optional[uuid.UUID] = None
    active: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ChallengeCompletionResponse(BaseModel):
    id: uuid.UUID
    challenge_id: uuid.UUID
    gymnast_id: uuid.UUID
    completed_at: Optional[datetime] = None
    points_awarded: int
    total_points: int


class RewardCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    points_cost: int = Field(..., gt=0)
    image_url: Optional[str] = None


class RewardResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    points_cost: int
    image_url: Optional[str] = None
    active: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class RedemptionResponse(BaseModel):
    id: uuid.UUID
    reward_id: uuid.UUID
    gymnast_id: uuid.UUID
    points_spent: int
    status: RedemptionStatus
    redeemed_at: Optional[datetime] = None
    remaining_points: int
