"""Breakout Group Service.

Coordinates a breakout clustering run for an event:
- load attendees and interests (AttendeeSource)
- compute labeled groups (compute_breakout_groups)
- replace the stored groups (BreakoutGroupStore)

At most one computation per event runs at a time, guarded by a Redis lock.
"""

import logging
from uuid import UUID

import redis.asyncio as aioredis
from redis.exceptions import RedisError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.redis import event_clustering_lock
from app.schemas.breakout import (
    BreakoutGroupResponse,
    BreakoutGroupsComputeResponse,
    BreakoutGroupsListResponse,
)
from app.schemas.clustering import ClusteringRequest
from app.services.attendee_source import AttendeeSource
from app.services.breakout_clustering import compute_breakout_groups, validate_size_bounds
from app.services.breakout_store import BreakoutGroupStore

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================


class EventAttendeesNotFoundError(LookupError):
    """Raised when an event has no attendees to cluster."""

    def __init__(self, event_id: UUID):
        self.event_id = event_id
        super().__init__(f"No attendees found for event {event_id}")


class ClusteringInProgressError(Exception):
    """Raised when another breakout computation for the event is running."""

    def __init__(self, event_id: UUID):
        self.event_id = event_id
        super().__init__(f"Breakout groups for event {event_id} are already being computed")


class ClusteringLockUnavailableError(Exception):
    """Raised when the clustering lock cannot be taken because Redis failed."""

    def __init__(self, event_id: UUID, cause: Exception):
        self.event_id = event_id
        self.cause = cause
        super().__init__(f"Clustering lock for event {event_id} is unavailable: {cause}")


# =============================================================================
# BreakoutGroupService
# =============================================================================


class BreakoutGroupService:
    """Computes and serves breakout groups for events."""

    def __init__(
        self,
        session: AsyncSession,
        redis_client: aioredis.Redis,
        attendee_source: AttendeeSource | None = None,
        store: BreakoutGroupStore | None = None,
    ):
        """
        Args:
            session: Async database session
            redis_client: Redis client used for the per-event lock
            attendee_source: Attendee loader, defaults to AttendeeSource()
            store: Group persistence, defaults to BreakoutGroupStore()
        """
        self.session = session
        self.redis_client = redis_client
        self.attendee_source = attendee_source or AttendeeSource()
        self.store = store or BreakoutGroupStore()

    async def compute(
        self,
        event_id: UUID,
        min_group_size: int | None = None,
        max_group_size: int | None = None,
    ) -> BreakoutGroupsComputeResponse:
        """Recompute and store the breakout groups of an event.

        Args:
            event_id: UUID of the event
            min_group_size: Minimum group size, defaults to settings
            max_group_size: Maximum group size, defaults to settings

        Returns:
            The new groups with member profile data

        Raises:
            InvalidParametersError: If the size bounds are inconsistent
            ClusteringInProgressError: If a computation for the event is running
            EventAttendeesNotFoundError: If the event has no attendees
            ClusteringLockUnavailableError: If Redis fails while taking the lock
            BreakoutPersistenceError: If loading attendees or storing the groups fails
        """
        min_size = settings.breakout_min_group_size if min_group_size is None else min_group_size
        max_size = settings.breakout_max_group_size if max_group_size is None else max_group_size

        # Reject bad bounds before touching the lock or the database
        validate_size_bounds(str(event_id), min_size, max_size)

        try:
            async with event_clustering_lock(self.redis_client, str(event_id)) as acquired:
                if not acquired:
                    raise ClusteringInProgressError(event_id)

                attendees = await self.attendee_source.list_attendees(self.session, event_id)
                if not attendees:
                    raise EventAttendeesNotFoundError(event_id)

                groups = compute_breakout_groups(
                    ClusteringRequest(
                        event_id=str(event_id),
                        attendees=attendees,
                        min_size=min_size,
                        max_size=max_size,
                    )
                )

                records = await self.store.replace_groups(self.session, event_id, groups)
        except RedisError as e:
            logger.error(f"Redis failed during clustering of event {event_id}: {e}")
            raise ClusteringLockUnavailableError(event_id, e) from e

        return BreakoutGroupsComputeResponse(
            groups=[
                BreakoutGroupResponse.from_record(record, group.members)
                for record, group in zip(records, groups, strict=True)
            ],
            total_groups=len(records),
            total_attendees=len(attendees),
        )

    async def fetch(self, event_id: UUID) -> BreakoutGroupsListResponse:
        """Get the stored breakout groups of an event.

        Args:
            event_id: UUID of the event

        Returns:
            Stored groups (empty list if none were computed yet)

        Raises:
            BreakoutPersistenceError: If loading the groups fails
        """
        records = await self.store.list_groups(self.session, event_id)
        return BreakoutGroupsListResponse(
            groups=[BreakoutGroupResponse.from_record(record) for record in records],
            total_groups=len(records),
        )
