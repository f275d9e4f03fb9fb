"""Competition scores per gymnast and event."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from sqlalchemy import DateTime, ForeignKey, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column


class Score(Base):
    """Apparatus scores for one gymnast, optionally tied to an event.

    Any apparatus may be left empty when the gymnast did not compete on it.
    """

    __tablename__ = "scores"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    gymnast_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("gymnasts.id", ondelete="CASCADE"), index=True, nullable=False
    )
    event_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("events.id", ondelete="SET NULL"), nullable=True
    )

    vault: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 3), nullable=True)
    bars: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 3), nullable=True)
    beam: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 3), nullable=True)
    floor: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 3), nullable=True)
    all_around: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(6, 3), nullable=True
    )

    recorded_by: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )

    def __repr__(self):
        return f"<Score {self.id} gymnast={self.gymnast_id} aa={self.all_around}>"
