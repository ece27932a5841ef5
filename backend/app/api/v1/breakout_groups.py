"""Breakout groups API endpoints."""

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from app.api.deps import DbSession, RedisClient
from app.schemas.breakout import (
    BreakoutGroupsComputeRequest,
    BreakoutGroupsComputeResponse,
    BreakoutGroupsListResponse,
)
from app.schemas.common import ErrorResponse
from app.services.breakout_clustering import InvalidParametersError
from app.services.breakout_groups import (
    BreakoutGroupService,
    ClusteringInProgressError,
    ClusteringLockUnavailableError,
    EventAttendeesNotFoundError,
)
from app.services.breakout_store import BreakoutPersistenceError

logger = logging.getLogger(__name__)

router = APIRouter()


def _error_detail(code: str, error: Exception, event_id: UUID) -> dict:
    return ErrorResponse(code=code, message=str(error), event_id=str(event_id)).model_dump()


@router.post(
    "/events/{event_id}/breakout-groups",
    response_model=BreakoutGroupsComputeResponse,
)
async def compute_breakout_groups(
    event_id: UUID,
    db: DbSession,
    redis_client: RedisClient,
    payload: BreakoutGroupsComputeRequest | None = None,
) -> BreakoutGroupsComputeResponse:
    """
    Cluster the event's attendees into breakout groups by shared interests.

    Replaces any previously computed groups for the event.
    """
    payload = payload or BreakoutGroupsComputeRequest()
    logger.info(
        f"compute_breakout_groups called: event={event_id}, "
        f"min={payload.min_group_size}, max={payload.max_group_size}"
    )

    service = BreakoutGroupService(db, redis_client)
    try:
        return await service.compute(
            event_id,
            min_group_size=payload.min_group_size,
            max_group_size=payload.max_group_size,
        )
    except InvalidParametersError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_error_detail("invalid_parameters", e, event_id),
        )
    except EventAttendeesNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=_error_detail("not_found", e, event_id),
        )
    except ClusteringInProgressError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=_error_detail("clustering_in_progress", e, event_id),
        )
    except ClusteringLockUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=_error_detail("lock_unavailable", e, event_id),
        )
    except BreakoutPersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=_error_detail("persistence_failure", e, event_id),
        )


@router.get(
    "/events/{event_id}/breakout-groups",
    response_model=BreakoutGroupsListResponse,
)
async def list_breakout_groups(
    event_id: UUID,
    db: DbSession,
    redis_client: RedisClient,
) -> BreakoutGroupsListResponse:
    """Get the stored breakout groups of an event."""
    service = BreakoutGroupService(db, redis_client)
    try:
        return await service.fetch(event_id)
    except BreakoutPersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=_error_detail("persistence_failure", e, event_id),
        )
