"""Breakout Group Store.

Handles persistence of computed breakout groups to PostgreSQL.

A clustering run replaces the event's previous groups wholesale. The delete
of the old rows and the insert of the new ones share one transaction, so
readers see either the previous set or the complete new one.
"""

import logging
import uuid
from collections.abc import Sequence
from datetime import UTC, datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.breakout_group import BreakoutGroup, BreakoutGroupMember
from app.schemas.clustering import AttendeeGroup

logger = logging.getLogger(__name__)


class BreakoutPersistenceError(Exception):
    """Raised when the database rejects reading or writing breakout groups."""

    def __init__(self, event_id: uuid.UUID, operation: str, cause: Exception):
        self.event_id = event_id
        self.operation = operation
        self.cause = cause
        super().__init__(
            f"Failed to {operation} breakout groups for event {event_id}: {cause}"
        )


class BreakoutGroupStore:
    """Service for persisting breakout groups."""

    async def replace_groups(
        self,
        db: AsyncSession,
        event_id: uuid.UUID,
        groups: Sequence[AttendeeGroup],
    ) -> list[BreakoutGroup]:
        """Replace all stored breakout groups of an event.

        Deletes existing groups and memberships for the event, inserts the
        new groups in order and commits once. On failure the transaction is
        rolled back and the previous groups stay in place.

        Args:
            db: Database session
            event_id: UUID of the event
            groups: Labeled groups in result order; member ids are profile UUIDs

        Returns:
            Persisted group rows, in the same order as ``groups``

        Raises:
            BreakoutPersistenceError: If any statement or the commit fails
        """
        # One timestamp for the whole run
        created_at = datetime.now(UTC)
        rows: list[BreakoutGroup] = []

        try:
            await self._clear_existing_groups(db, event_id)

            for position, group in enumerate(groups):
                row = BreakoutGroup(
                    id=uuid.uuid4(),
                    event_id=event_id,
                    name=group.name,
                    shared_interests=list(group.shared_interests),
                    position=position,
                    created_at=created_at,
                )
                row.members = [
                    BreakoutGroupMember(
                        id=uuid.uuid4(),
                        user_id=member.id,
                        position=member_position,
                        created_at=created_at,
                    )
                    for member_position, member in enumerate(group.members)
                ]
                db.add(row)
                rows.append(row)

            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Failed to replace breakout groups for event {event_id}: {e}")
            raise BreakoutPersistenceError(event_id, "replace", e) from e

        logger.info(f"Persisted {len(rows)} breakout groups for event {event_id}")
        return rows

    async def list_groups(
        self,
        db: AsyncSession,
        event_id: uuid.UUID,
    ) -> list[BreakoutGroup]:
        """List stored breakout groups of an event with member profiles loaded.

        Args:
            db: Database session
            event_id: UUID of the event

        Returns:
            Group rows ordered by position (empty if none were computed)

        Raises:
            BreakoutPersistenceError: If the query fails
        """
        try:
            result = await db.execute(
                select(BreakoutGroup)
                .options(
                    selectinload(BreakoutGroup.members).selectinload(BreakoutGroupMember.profile)
                )
                .where(BreakoutGroup.event_id == event_id)
                .order_by(BreakoutGroup.position)
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to load breakout groups for event {event_id}: {e}")
            raise BreakoutPersistenceError(event_id, "load", e) from e

        return list(result.scalars().all())

    async def _clear_existing_groups(self, db: AsyncSession, event_id: uuid.UUID) -> None:
        """Delete memberships and groups of an event.

        Args:
            db: Database session
            event_id: UUID of the event
        """
        event_group_ids = select(BreakoutGroup.id).where(BreakoutGroup.event_id == event_id)
        await db.execute(
            delete(BreakoutGroupMember).where(BreakoutGroupMember.group_id.in_(event_group_ids))
        )
        await db.execute(delete(BreakoutGroup).where(BreakoutGroup.event_id == event_id))
