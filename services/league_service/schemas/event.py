import datetime as dt
import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from services.league_service.models.enums import GymnastLevel


class EventSessionCreate(BaseModel):
    name: str = Field(..., min_length=1)
    time: str = Field(..., min_length=1)
    levels: list[GymnastLevel] = []
    max_spectators: Optional[int] = Field(None, ge=0)


class EventCreate(BaseModel):
    name: str = Field(..., min_length=1)
    date: dt.date
    location: str = Field(..., min_length=1)
    registration_open_date: dt.date
    registration_close_date: dt.date
    estimate_deadline: Optional[dt.date] = None
    host_gym_id: Optional[uuid.UUID] = None
    sessions: list[EventSessionCreate] = []


class EventSessionResponse(BaseModel):
    id: uuid.UUID
    name: str
    time: str
    levels: list[str] = []
    max_spectators: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class EventResponse(BaseModel):
    id: uuid.UUID
    host_gym_id: Optional[uuid.UUID] = None
    name: str
    date: dt.date
    location: str
    registration_open_date: dt.date
    registration_close_date: dt.date
    estimate_deadline: Optional[dt.date] = None
    approved: bool
    sessions: list[EventSessionResponse] = []
    created_at: Optional[dt.datetime] = None

    model_config = ConfigDict(from_attributes=True)


class EventRegistrationCreate(BaseModel):
    gymnast_id: uuid.UUID
    session_ids: list[uuid.UUID] = []


class EventRegistrationResponse(BaseModel):
    id: uuid.UUID
    event_id: uuid.UUID
    gymnast_id: uuid.UUID
    session_id: Optional[uuid.UUID] = None
    registered_by: Optional[str] = None
    approved: bool
    created_at: Optional[dt.datetime] = None

    model_config = ConfigDict(from_attributes=True)
