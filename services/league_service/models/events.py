"""Competition events, their sessions and gymnast registrations."""

import datetime as dt
import uuid
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from sqlalchemy import JSON, Boolean, Date, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship


class Event(Base):
    """A competition hosted by a gym.

    Gymnasts can register only while the event is approved and
    registration_open_date <= today <= registration_close_date.
    """

    __tablename__ = "events"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    host_gym_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("gyms.id", ondelete="SET NULL"), nullable=True
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    location: Mapped[str] = mapped_column(String, nullable=False)
    registration_open_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    registration_close_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    estimate_deadline: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    approved: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    sessions: Mapped[list["EventSession"]] = relationship(
        back_populates="event",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="EventSession.created_at",
    )

    def registration_open_on(self, day: dt.date) -> bool:
        return self.registration_open_date <= day <= self.registration_close_date

    def __repr__(self):
        return f"<Event {self.name} ({self.date})>"


class EventSession(Base):
    __tablename__ = "event_sessions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    event_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("events.id", ondelete="CASCADE"), index=True, nullable=False
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    time: Mapped[str] = mapped_column(String, nullable=False)
    levels: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    max_spectators: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )

    event: Mapped["Event"] = relationship(back_populates="sessions")


class EventRegistration(Base):
    __tablename__ = "event_registrations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    event_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("events.id", ondelete="CASCADE"), index=True, nullable=False
    )
    gymnast_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("gymnasts.id", ondelete="CASCADE"), index=True, nullable=False
    )
    session_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("event_sessions.id", ondelete="CASCADE"), nullable=True
    )
    registered_by: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    approved: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
