"""Profile and interest models."""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel, BaseModelNoUpdate

if TYPE_CHECKING:
    from app.models.event import EventAttendee


class Profile(BaseModel):
    """Public profile of a registered user."""

    __tablename__ = "profiles"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )
    full_name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    avatar_url: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    bio: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    # Relationships
    interest_links: Mapped[list["UserInterest"]] = relationship(
        "UserInterest",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="UserInterest.created_at",
    )
    rsvps: Mapped[list["EventAttendee"]] = relationship(
        "EventAttendee",
        back_populates="profile",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Profile {self.id}>"


class Interest(BaseModelNoUpdate):
    """Interest tag that users can attach to their profile."""

    __tablename__ = "interests"

    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
    )
    category: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Interest {self.name}>"


class UserInterest(BaseModelNoUpdate):
    """Link between a profile and one of its interests."""

    __tablename__ = "user_interests"
    __table_args__ = (
        UniqueConstraint("user_id", "interest_id", name="uq_user_interests_user_interest"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    interest_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("interests.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    profile: Mapped["Profile"] = relationship(
        "Profile",
        back_populates="interest_links",
    )
    interest: Mapped["Interest"] = relationship("Interest")
