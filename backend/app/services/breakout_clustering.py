"""Breakout Clustering for event attendees.

Entry point of the clustering engine. Partitions an event's attendees into
small groups with cohesive shared interests:

1. Validate group size bounds
2. Small events (fewer attendees than the minimum size) get a single group
3. Otherwise form groups greedily (group_builder.build_groups)
4. Place leftovers into the best-fitting groups (group_builder.redistribute_leftovers)
5. Name every group from its shared interests (group_labeler.label_groups)

The engine is synchronous, CPU-only and stateless. Persistence is the
caller's concern (see BreakoutGroupService).
"""

import logging

from app.schemas.clustering import AttendeeGroup, ClusteringRequest
from app.services.group_builder import build_groups, redistribute_leftovers
from app.services.group_labeler import label_groups

logger = logging.getLogger(__name__)


class InvalidParametersError(ValueError):
    """Raised when group size bounds are inconsistent."""

    def __init__(self, event_id: str, min_size: int, max_size: int):
        self.event_id = event_id
        self.min_size = min_size
        self.max_size = max_size
        super().__init__(
            f"Invalid group size bounds for event {event_id}: "
            f"min_size={min_size}, max_size={max_size} "
            "(expected 1 <= min_size <= max_size)"
        )


def validate_size_bounds(event_id: str, min_size: int, max_size: int) -> None:
    """
    Validate that 1 <= min_size <= max_size.

    Raises:
        InvalidParametersError: If the bounds are inconsistent
    """
    if min_size < 1 or min_size > max_size:
        raise InvalidParametersError(event_id, min_size, max_size)


def compute_breakout_groups(request: ClusteringRequest) -> list[AttendeeGroup]:
    """Compute labeled breakout groups for an event.

    Every attendee appears in exactly one group. Groups hold between
    min_size and max_size members, except:
    - the single group returned when there are fewer than min_size attendees
    - the last group, which absorbs leftovers once every group is full

    Repeated calls with the same attendee order and bounds return identical
    partitions and names.

    Args:
        request: Event id, attendees in significant order and size bounds

    Returns:
        Ordered list of labeled groups (empty when there are no attendees)

    Raises:
        InvalidParametersError: If the size bounds are inconsistent
    """
    validate_size_bounds(request.event_id, request.min_size, request.max_size)

    attendees = list(request.attendees)

    if len(attendees) < request.min_size:
        groups = [AttendeeGroup(members=attendees)] if attendees else []
        logger.info(
            f"Event {request.event_id}: {len(attendees)} attendees is below the "
            f"minimum group size {request.min_size}, using a single group"
        )
        return label_groups(groups)

    groups, leftovers = build_groups(attendees, request.min_size, request.max_size)
    if leftovers:
        logger.debug(
            f"Event {request.event_id}: redistributing {len(leftovers)} leftover attendees"
        )
    redistribute_leftovers(groups, leftovers, request.max_size)

    labeled = label_groups(groups)
    logger.info(
        f"Event {request.event_id}: clustered {len(attendees)} attendees into "
        f"{len(labeled)} groups (sizes {[g.size for g in labeled]})"
    )
    return labeled
