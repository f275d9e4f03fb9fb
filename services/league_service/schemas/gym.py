import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class GymCreate(BaseModel):
    name: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    admin_first_name: str = Field(..., min_length=1)
    admin_last_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    website: Optional[str] = None

    model_config = ConfigDict(str_strip_whitespace=True)


class GymResponse(BaseModel):
    id: uuid.UUID
    name: str
    city: str
    admin_first_name: str
    admin_last_name: str
    email: str
    phone: Optional[str] = None
    website: Optional[str] = None
    approved: bool
    membership_paid: bool
    allow_self_registration: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class GymApprovalUpdate(BaseModel):
    approved: bool = True


class GymPaymentUpdate(BaseModel):
    membership_paid: bool


class GymSelfRegistrationUpdate(BaseModel):
    allow_self_registration: bool


class CoachAssociationCreate(BaseModel):
    user_id: str
    is_admin: bool = False


class CoachAssociationResponse(BaseModel):
    gym_id: uuid.UUID
    user_id: str
    is_admin: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
