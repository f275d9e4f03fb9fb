import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from services.league_service.models.enums import RosterUploadStatus
from services.league_service.schemas.gymnast import ApplicantFields, camel_alias


class RosterRow(ApplicantFields):
    """One spreadsheet row; unknown columns are ignored."""


class RosterUploadCreate(BaseModel):
    gym_id: uuid.UUID = Field(..., validation_alias=camel_alias("gym_id"))
    filename: str = Field(..., min_length=1, max_length=255)
    total_rows: int = Field(0, ge=0, validation_alias=camel_alias("total_rows"))
    description: Optional[str] = None


class RosterUploadResponse(BaseModel):
    id: uuid.UUID
    gym_id: uuid.UUID
    uploaded_by: Optional[str] = None
    filename: str
    description: Optional[str] = None
    status: RosterUploadStatus
    total_rows: int
    processed_rows: int
    error_rows: int
    errors: list[dict[str, Any]] = []
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class RosterProcessRequest(BaseModel):
    """Rows already parsed from the spreadsheet by the client."""

    # Any JSON value is accepted per row; non-objects fail as row errors.
    rows: list[Any]


class RosterRowError(BaseModel):
    row: int
    data: Any = None
    error: str


class RosterProcessResult(BaseModel):
    total_rows: int
    processed_rows: int
    error_rows: int
    errors: list[RosterRowError]
    created_count: int
