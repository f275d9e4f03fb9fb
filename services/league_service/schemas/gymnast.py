"""Applicant and gymnast schemas.

`ApplicantFields` is the single field contract shared by registration
requests, roster rows and direct gymnast entry. Keys are accepted in
snake_case or camelCase so spreadsheet exports can be posted as-is.
"""

import uuid
from datetime import date, datetime
from typing import Any, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
)
from services.league_service.models.enums import GymnastLevel, GymnastType


def camel_alias(name: str) -> AliasChoices:
    head, *rest = name.split("_")
    camel = head + "".join(part.title() for part in rest)
    return AliasChoices(name, camel)


class ApplicantFields(BaseModel):
    first_name: str = Field(..., validation_alias=camel_alias("first_name"))
    last_name: str = Field(..., validation_alias=camel_alias("last_name"))
    email: Optional[EmailStr] = Field(None, validation_alias=camel_alias("email"))
    birth_date: date = Field(..., validation_alias=camel_alias("birth_date"))
    level: GymnastLevel = Field(..., validation_alias=camel_alias("level"))
    type: GymnastType = Field(
        GymnastType.TEAM, validation_alias=camel_alias("type")
    )

    parent_first_name: Optional[str] = Field(
        None, validation_alias=camel_alias("parent_first_name")
    )
    parent_last_name: Optional[str] = Field(
        None, validation_alias=camel_alias("parent_last_name")
    )
    parent_email: Optional[EmailStr] = Field(
        None, validation_alias=camel_alias("parent_email")
    )
    parent_phone: Optional[str] = Field(
        None, validation_alias=camel_alias("parent_phone")
    )
    emergency_contact: Optional[str] = Field(
        None, validation_alias=camel_alias("emergency_contact")
    )
    emergency_phone: Optional[str] = Field(
        None, validation_alias=camel_alias("emergency_phone")
    )
    medical_info: Optional[str] = Field(
        None, validation_alias=camel_alias("medical_info")
    )

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        # Spreadsheet cells come through as empty strings.
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        if isinstance(v, int):
            return str(v)
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("type", mode="before")
    @classmethod
    def default_type(cls, v: Any) -> Any:
        # A blank cell may reach this validator as None or as "".
        if v is None or (isinstance(v, str) and not v.strip()):
            return GymnastType.TEAM
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("first_name", "last_name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must not be empty")
        return v


class GymnastCreate(ApplicantFields):
    """Direct entry of a gymnast by gym staff."""

    gym_id: uuid.UUID = Field(..., validation_alias=camel_alias("gym_id"))
    user_id: Optional[str] = Field(None, validation_alias=camel_alias("user_id"))
    approved: bool = True


class GymnastResponse(BaseModel):
    id: uuid.UUID
    user_id: Optional[str] = None
    gym_id: uuid.UUID

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

    approved: bool
    points: int

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class GymnastApprovalUpdate(BaseModel):
    approved: bool = True


class PointsAdjustment(BaseModel):
    """Manual point change; the resulting total is floored at zero."""

    delta: int
    reason: Optional[str] = None
