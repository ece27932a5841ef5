"""Breakout group models.

Stores the most recent interest-based partition of an event's attendees.
Rows are replaced wholesale on every clustering run.
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModelNoUpdate

if TYPE_CHECKING:
    from app.models.event import Event
    from app.models.profile import Profile


class BreakoutGroup(BaseModelNoUpdate):
    """One breakout group of an event."""

    __tablename__ = "breakout_groups"

    event_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    # Up to 3 interest names, most widely shared first
    shared_interests: Mapped[list[str]] = mapped_column(
        JSONB,
        nullable=False,
        default=list,
    )
    # Order of the group within its clustering run
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    # Relationships
    event: Mapped["Event"] = relationship(
        "Event",
        back_populates="breakout_groups",
    )
    members: Mapped[list["BreakoutGroupMember"]] = relationship(
        "BreakoutGroupMember",
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="BreakoutGroupMember.position",
    )

    def __repr__(self) -> str:
        return f"<BreakoutGroup {self.id} {self.name!r}>"


class BreakoutGroupMember(BaseModelNoUpdate):
    """Membership of a profile in a breakout group."""

    __tablename__ = "breakout_group_members"

    group_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("breakout_groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Assignment order within the group
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    # Relationships
    group: Mapped["BreakoutGroup"] = relationship(
        "BreakoutGroup",
        back_populates="members",
    )
    profile: Mapped["Profile"] = relationship("Profile")
