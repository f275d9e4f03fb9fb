import uuid

from pydantic import BaseModel
from services.league_service.models.enums import GymnastLevel


class LeaderboardEntry(BaseModel):
    rank: int
    id: uuid.UUID
    first_name: str
    last_name: str
    level: GymnastLevel
    points: int
    gym_id: uuid.UUID
