"""Label generation for breakout groups.

Derives each group's shared interests and a human-readable name from the
interests its members hold in common.
"""

from collections.abc import Sequence
from dataclasses import replace

from app.schemas.clustering import Attendee, AttendeeGroup

# An interest is shared when at least this many members hold it
MIN_MEMBERS_PER_SHARED_INTEREST = 2

# Number of shared interests kept per group
MAX_SHARED_INTERESTS = 3

# Number of shared interests used in a group name
NAME_INTEREST_COUNT = 2

NAME_SEPARATOR = " & "


def rank_shared_interests(
    members: Sequence[Attendee],
    limit: int = MAX_SHARED_INTERESTS,
) -> list[str]:
    """Rank the interests held by at least two members.

    Ordering is by member count descending; ties keep the order in which the
    interest was first seen walking members in assignment order. Always
    re-derived from scratch so callers can invoke it after every membership
    change.

    Args:
        members: Group members in assignment order
        limit: Maximum number of interests to return

    Returns:
        Up to ``limit`` interest names
    """
    counts: dict[str, int] = {}
    for member in members:
        for interest in member.interests:
            counts[interest] = counts.get(interest, 0) + 1

    shared = [
        (interest, count)
        for interest, count in counts.items()
        if count >= MIN_MEMBERS_PER_SHARED_INTEREST
    ]
    # sorted() is stable, so equal counts stay in first-seen order
    shared = sorted(shared, key=lambda item: item[1], reverse=True)
    return [interest for interest, _ in shared[:limit]]


def generate_group_name(shared_interests: Sequence[str], index: int) -> str:
    """Generate a group name.

    Uses the two leading shared interests, e.g. "Yoga & Hiking", or falls
    back to "Group {index + 1}" when no interest is shared.

    Args:
        shared_interests: Ranked shared interests of the group
        index: 0-based position of the group in the result
    """
    if not shared_interests:
        return f"Group {index + 1}"
    return NAME_SEPARATOR.join(shared_interests[:NAME_INTEREST_COUNT])


def label_groups(groups: Sequence[AttendeeGroup]) -> list[AttendeeGroup]:
    """Return copies of the groups with shared interests and names set.

    The input groups are not modified.
    """
    labeled = []
    for index, group in enumerate(groups):
        shared = rank_shared_interests(group.members)
        labeled.append(
            replace(
                group,
                members=list(group.members),
                shared_interests=shared,
                name=generate_group_name(shared, index),
            )
        )
    return labeled
