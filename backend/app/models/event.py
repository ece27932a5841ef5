"""Event and RSVP models."""

import enum
import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel, BaseModelNoUpdate

if TYPE_CHECKING:
    from app.models.breakout_group import BreakoutGroup
    from app.models.profile import Profile


class AttendanceStatus(str, enum.Enum):
    """RSVP status of an event attendee."""

    GOING = "going"
    INTERESTED = "interested"
    MAYBE = "maybe"


class Event(BaseModel):
    """Event that users can RSVP to."""

    __tablename__ = "events"

    creator_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    # Relationships
    attendees: Mapped[list["EventAttendee"]] = relationship(
        "EventAttendee",
        back_populates="event",
        cascade="all, delete-orphan",
    )
    breakout_groups: Mapped[list["BreakoutGroup"]] = relationship(
        "BreakoutGroup",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="BreakoutGroup.position",
    )

    def __repr__(self) -> str:
        return f"<Event {self.id}>"


class EventAttendee(BaseModelNoUpdate):
    """RSVP of a profile to an event."""

    __tablename__ = "event_attendees"
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_event_attendees_event_user"),
    )

    event_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Plain string; valid values are enforced via AttendanceStatus
    status: Mapped[str] = mapped_column(
        String(20),
        server_default=AttendanceStatus.GOING.value,
        nullable=False,
    )

    # Relationships
    event: Mapped["Event"] = relationship(
        "Event",
        back_populates="attendees",
    )
    profile: Mapped["Profile"] = relationship(
        "Profile",
        back_populates="rsvps",
    )
