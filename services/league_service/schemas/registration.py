import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from services.league_service.models.enums import (
    GymnastLevel,
    GymnastType,
    RegistrationStatus,
)
from services.league_service.schemas.gymnast import (
    ApplicantFields,
    GymnastResponse,
    camel_alias,
)


class RegistrationRequestCreate(ApplicantFields):
    """Public self-registration payload."""

    gym_id: uuid.UUID = Field(..., validation_alias=camel_alias("gym_id"))


class RegistrationRequestResponse(BaseModel):
    id: uuid.UUID
    gym_id: uuid.UUID
    status: RegistrationStatus

    first_name: str
    last_name: str
    email: Optional[str] = None
    birth_date: date
    level: GymnastLevel
    type: GymnastType
    parent_first_name: Optional[str] = None
    parent_last_name: Optional[str] = None
    parent_email: Optional[str] = None
    parent_phone: Optional[str] = None
    emergency_contact: Optional[str] = None
    emergency_phone: Optional[str] = None
    medical_info: Optional[str] = None

    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    gymnast_id: Optional[uuid.UUID] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class RegistrationReject(BaseModel):
    reason: Optional[str] = Field(None, max_length=1000)


class RegistrationApprovalResponse(BaseModel):
    request: RegistrationRequestResponse
    gymnast: GymnastResponse
