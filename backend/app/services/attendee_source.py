"""Attendee source for breakout clustering.

Loads an event's attendees together with their resolved interest names and
returns them as clustering Attendee records.
"""

import logging
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.config import settings
from app.models.event import EventAttendee
from app.models.profile import Profile, UserInterest
from app.schemas.clustering import Attendee
from app.services.breakout_store import BreakoutPersistenceError

logger = logging.getLogger(__name__)


def to_attendee(profile: Profile) -> Attendee:
    """Convert a profile with loaded interest links into an Attendee.

    Interests keep the order in which the user added them.
    """
    return Attendee(
        id=profile.id,
        display_name=profile.full_name or "",
        avatar_ref=profile.avatar_url,
        interests=tuple(link.interest.name for link in profile.interest_links),
    )


class AttendeeSource:
    """Reads clustering input for an event from PostgreSQL."""

    def __init__(self, statuses: Sequence[str] | None = None):
        """
        Args:
            statuses: RSVP statuses counted as attending,
                defaults to settings.breakout_attendee_statuses
        """
        self.statuses = list(
            settings.breakout_attendee_statuses if statuses is None else statuses
        )

    async def list_attendees(self, db: AsyncSession, event_id: UUID) -> list[Attendee]:
        """List an event's attendees with their interests.

        Ordered by RSVP time, then user id, so clustering input is stable
        between calls.

        Args:
            db: Database session
            event_id: UUID of the event

        Returns:
            Attendees (empty if the event has none or does not exist)

        Raises:
            BreakoutPersistenceError: If the query fails
        """
        try:
            result = await db.execute(
                select(EventAttendee)
                .options(
                    selectinload(EventAttendee.profile)
                    .selectinload(Profile.interest_links)
                    .selectinload(UserInterest.interest)
                )
                .where(
                    EventAttendee.event_id == event_id,
                    EventAttendee.status.in_(self.statuses),
                )
                .order_by(EventAttendee.created_at, EventAttendee.user_id)
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to load attendees for event {event_id}: {e}")
            raise BreakoutPersistenceError(event_id, "load attendees", e) from e

        rsvps = result.scalars().all()

        attendees = [to_attendee(rsvp.profile) for rsvp in rsvps]
        logger.debug(f"Loaded {len(attendees)} attendees for event {event_id}")
        return attendees
