"""Registration requests and roster uploads.

Both are audit records: created by an applicant or coach, mutated only by
their workflow, never deleted.
"""

import uuid
from datetime import datetime
from typing import Any, Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from services.league_service.models.enums import (
    RegistrationStatus,
    RosterUploadStatus,
    db_enum,
)
from services.league_service.models.gymnast import ApplicantColumns
from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column


class RegistrationRequest(ApplicantColumns, Base):
    """An applicant's submission to join one gym."""

    __tablename__ = "registration_requests"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    gym_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("gyms.id"), index=True, nullable=False
    )
    status: Mapped[RegistrationStatus] = mapped_column(
        db_enum(RegistrationStatus, "registration_status_enum"),
        default=RegistrationStatus.PENDING,
        nullable=False,
    )

    # Review (set once, on approve or reject)
    reviewed_by: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    rejection_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    gymnast_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("gymnasts.id", ondelete="SET NULL"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    @property
    def is_resolved(self) -> bool:
        return self.status != RegistrationStatus.PENDING

    def __repr__(self):
        return f"<RegistrationRequest {self.full_name} ({self.status.value})>"


class RosterUpload(Base):
    """A batch job turning tabular rows into approved gymnasts.

    Once terminal (completed or failed), processed_rows + error_rows == total_rows.
    """

    __tablename__ = "roster_uploads"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    gym_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("gyms.id"), index=True, nullable=False
    )
    uploaded_by: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    filename: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[RosterUploadStatus] = mapped_column(
        db_enum(RosterUploadStatus, "roster_upload_status_enum"),
        default=RosterUploadStatus.PENDING,
        nullable=False,
    )

    total_rows: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    processed_rows: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    error_rows: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    errors: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, default=list, nullable=False
    )  # [{row, data, error}, ...] in input order

    completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    def __repr__(self):
        return f"<RosterUpload {self.filename} ({self.status.value})>"
