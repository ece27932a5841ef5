"""Breakout group API schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.breakout_group import BreakoutGroup
from app.schemas.clustering import Attendee
from app.schemas.common import BaseSchema


class BreakoutGroupsComputeRequest(BaseModel):
    """Breakout group computation request.

    Sizes default to settings.breakout_min_group_size / breakout_max_group_size.
    Bounds are checked by the clustering engine, not here, so inconsistent
    values surface as an invalid-parameters error.
    """

    min_group_size: int | None = Field(default=None, description="Minimum members per group")
    max_group_size: int | None = Field(default=None, description="Maximum members per group")


class BreakoutGroupMemberResponse(BaseSchema):
    """Member profile data of a breakout group."""

    user_id: UUID
    display_name: str | None = None
    avatar_ref: str | None = None


class BreakoutGroupResponse(BaseSchema):
    """Persisted breakout group."""

    id: UUID
    event_id: UUID
    name: str
    shared_interests: list[str]
    created_at: datetime
    members: list[BreakoutGroupMemberResponse]

    @classmethod
    def from_record(
        cls,
        record: BreakoutGroup,
        attendees: list[Attendee] | None = None,
    ) -> "BreakoutGroupResponse":
        """Build the response for a stored group.

        Member profile data comes from ``attendees`` when given (fresh
        computation), otherwise from the member rows' loaded profiles.
        """
        if attendees is not None:
            members = [
                BreakoutGroupMemberResponse(
                    user_id=attendee.id,
                    display_name=attendee.display_name,
                    avatar_ref=attendee.avatar_ref,
                )
                for attendee in attendees
            ]
        else:
            members = [
                BreakoutGroupMemberResponse(
                    user_id=member.user_id,
                    display_name=member.profile.full_name if member.profile else None,
                    avatar_ref=member.profile.avatar_url if member.profile else None,
                )
                for member in record.members
            ]

        return cls(
            id=record.id,
            event_id=record.event_id,
            name=record.name,
            shared_interests=list(record.shared_interests or []),
            created_at=record.created_at,
            members=members,
        )


class BreakoutGroupsComputeResponse(BaseModel):
    """Result of a breakout group computation."""

    groups: list[BreakoutGroupResponse]
    total_groups: int
    total_attendees: int


class BreakoutGroupsListResponse(BaseModel):
    """Stored breakout groups of an event."""

    groups: list[BreakoutGroupResponse]
    total_groups: int
