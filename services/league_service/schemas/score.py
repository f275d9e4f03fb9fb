import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from services.league_service.schemas.gymnast import camel_alias

APPARATUS = ("vault", "bars", "beam", "floor")


def _apparatus_field(name: str):
    return Field(
        None,
        ge=0,
        le=Decimal("99.999"),
        decimal_places=3,
        validation_alias=camel_alias(name),
    )


class ScoreCreate(BaseModel):
    """Scores for one gymnast. All-around defaults to the apparatus total."""

    gymnast_id: uuid.UUID = Field(..., validation_alias=camel_alias("gymnast_id"))
    event_id: Optional[uuid.UUID] = Field(
        None, validation_alias=camel_alias("event_id")
    )
    vault: Optional[Decimal] = _apparatus_field("vault")
    bars: Optional[Decimal] = _apparatus_field("bars")
    beam: Optional[Decimal] = _apparatus_field("beam")
    floor: Optional[Decimal] = _apparatus_field("floor")
    all_around: Optional[Decimal] = Field(
        None,
        ge=0,
        le=Decimal("999.999"),
        decimal_places=3,
        validation_alias=camel_alias("all_around"),
    )

    @model_validator(mode="after")
    def fill_all_around(self) -> "ScoreCreate":
        marks = [getattr(self, name) for name in APPARATUS]
        if all(mark is None for mark in marks) and self.all_around is None:
            raise ValueError("at least one apparatus or all-around score is required")
        if self.all_around is None:
            self.all_around = sum(mark for mark in marks if mark is not None)
        return self


class ScoreResponse(BaseModel):
    id: uuid.UUID
    gymnast_id: uuid.UUID
    event_id: Optional[uuid.UUID] = None
    vault: Optional[Decimal] = None
    bars: Optional[Decimal] = None
    beam: Optional[Decimal] = None
    floor: Optional[Decimal] = None
    all_around: Optional[Decimal] = None
    recorded_by: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
