"""Interest similarity scoring for breakout clustering.

- pair_similarity: Jaccard overlap of two attendees' interest sets
- candidate_affinity: mean pair similarity of a candidate to a group's members

Both functions are pure; scores are in the range [0, 1].
"""

from collections.abc import Sequence

from app.schemas.clustering import Attendee


def pair_similarity(a: Attendee, b: Attendee) -> float:
    """Calculate the Jaccard similarity of two attendees' interests.

    Formula: |A ∩ B| / |A ∪ B|, defined as 0.0 when both sets are empty.

    Args:
        a: First attendee
        b: Second attendee

    Returns:
        Similarity score 0.0-1.0
    """
    union = len(a.interest_set | b.interest_set)
    if union == 0:
        return 0.0
    return len(a.interest_set & b.interest_set) / union


def candidate_affinity(candidate: Attendee, members: Sequence[Attendee]) -> float:
    """Calculate how well a candidate fits an existing group.

    Formula: mean of pair_similarity(candidate, m) over all members m,
    defined as 0.0 for an empty group.

    Args:
        candidate: Attendee being considered for the group
        members: Current members of the group

    Returns:
        Affinity score 0.0-1.0
    """
    if not members:
        return 0.0
    return sum(pair_similarity(candidate, member) for member in members) / len(members)
