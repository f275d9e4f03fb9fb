"""Gymnast model and the applicant columns it shares with registration requests."""

import uuid
from datetime import date, datetime
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from services.league_service.models.enums import GymnastLevel, GymnastType, db_enum
from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

# Columns copied from a registration request (or roster row) onto a gymnast.
APPLICANT_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "birth_date",
    "level",
    "type",
    "parent_first_name",
    "parent_last_name",
    "parent_email",
    "parent_phone",
    "emergency_contact",
    "emergency_phone",
    "medical_info",
)


class ApplicantColumns:
    """Personal, parent and emergency contact columns."""

    first_name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    level: Mapped[GymnastLevel] = mapped_column(
        db_enum(GymnastLevel, "gymnast_level_enum"), nullable=False
    )
    type: Mapped[GymnastType] = mapped_column(
        db_enum(GymnastType, "gymnast_type_enum"),
        default=GymnastType.TEAM,
        nullable=False,
    )

    parent_first_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    parent_last_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    parent_email: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    parent_phone: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    emergency_contact: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    emergency_phone: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    medical_info: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def contact_email(self) -> Optional[str]:
        """Where notifications go: the gymnast's own address, else the parent's."""
        return self.email or self.parent_email


class Gymnast(ApplicantColumns, Base):
    """A person competing under a gym.

    Unapproved gymnasts are hidden from leaderboards and cannot earn points.
    """

    __tablename__ = "gymnasts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[Optional[str]] = mapped_column(
        String,
        ForeignKey("users.id", ondelete="SET NULL"),
        unique=True,
        nullable=True,
    )
    gym_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("gyms.id", ondelete="CASCADE"), index=True, nullable=False
    )

    approved: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    points: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    def __repr__(self):
        return f"<Gymnast {self.full_name} (level {self.level.value})>"
