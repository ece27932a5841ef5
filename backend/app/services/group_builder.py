"""Greedy breakout group formation.

Partitions attendees into groups of bounded size by greedy nearest-neighbour
growth, then places attendees left over from that pass into the groups they
fit best.

Attendee order is the only tie-break source: the first unassigned attendee
seeds each group and, among equally scored candidates, the earliest wins.
"""

import logging
from collections.abc import Sequence

from app.schemas.clustering import Attendee, AttendeeGroup
from app.services.group_labeler import rank_shared_interests
from app.services.interest_similarity import candidate_affinity

logger = logging.getLogger(__name__)


def _best_candidate_index(members: Sequence[Attendee], candidates: Sequence[Attendee]) -> int:
    """Return the index of the candidate with the highest affinity to members.

    Only a strictly higher score replaces the current best, so the first
    candidate wins ties.
    """
    best_index = 0
    best_score = -1.0
    for index, candidate in enumerate(candidates):
        score = candidate_affinity(candidate, members)
        if score > best_score:
            best_score = score
            best_index = index
    return best_index


def build_groups(
    attendees: Sequence[Attendee],
    min_size: int,
    max_size: int,
) -> tuple[list[AttendeeGroup], list[Attendee]]:
    """Form the initial groups.

    While at least ``min_size`` attendees are unassigned, the first of them
    seeds a new group which then repeatedly absorbs the unassigned attendee
    with the highest affinity until the group holds ``max_size`` members.
    Growth stops early once the group has ``min_size`` members and the
    remaining pool is non-empty but too small to form a group of its own,
    leaving that remainder for redistribution.

    Args:
        attendees: Attendees in their significant input order
        min_size: Minimum group size (>= 1)
        max_size: Maximum group size (>= min_size)

    Returns:
        Tuple of (groups formed, attendees left unassigned)
    """
    unassigned = list(attendees)
    groups: list[AttendeeGroup] = []

    while len(unassigned) >= min_size:
        members = [unassigned.pop(0)]

        while len(members) < max_size and unassigned:
            best_index = _best_candidate_index(members, unassigned)
            members.append(unassigned.pop(best_index))

            if len(members) >= min_size and 0 < len(unassigned) < min_size:
                break

        groups.append(
            AttendeeGroup(members=members, shared_interests=rank_shared_interests(members))
        )
        logger.debug(f"Formed group {len(groups)} with {len(members)} members")

    return groups, unassigned


def redistribute_leftovers(
    groups: list[AttendeeGroup],
    leftovers: Sequence[Attendee],
    max_size: int,
) -> list[AttendeeGroup]:
    """Place each leftover attendee into an existing group.

    Each leftover joins the group with the highest affinity among groups
    below ``max_size`` (first group wins ties). When every group is full the
    leftover joins the last group regardless of size, so nobody is dropped.
    Later leftovers are scored against the updated memberships, and the
    receiving group's shared interests are re-derived after every placement.

    Groups are mutated in place. If there are no groups at all, the
    leftovers form a single new group.

    Args:
        groups: Groups formed by build_groups
        leftovers: Attendees not placed by build_groups, in order
        max_size: Maximum group size

    Returns:
        The same list of groups
    """
    if not leftovers:
        return groups

    if not groups:
        members = list(leftovers)
        groups.append(
            AttendeeGroup(members=members, shared_interests=rank_shared_interests(members))
        )
        return groups

    for attendee in leftovers:
        target: AttendeeGroup | None = None
        best_score = -1.0
        for group in groups:
            if group.size >= max_size:
                continue
            score = candidate_affinity(attendee, group.members)
            if score > best_score:
                best_score = score
                target = group

        if target is None:
            target = groups[-1]
            logger.warning(
                f"All {len(groups)} groups are at max size {max_size}; "
                f"adding attendee {attendee.id} to the last group "
                f"(size {target.size + 1})"
            )

        target.members.append(attendee)
        target.shared_interests = rank_shared_interests(target.members)

    return groups
