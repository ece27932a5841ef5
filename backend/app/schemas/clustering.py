"""Breakout clustering data schemas.

Defines dataclasses exchanged between the attendee source, the clustering
services and the breakout group store.
"""

from collections.abc import Hashable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Attendee:
    """An event attendee as seen by the clustering engine.

    Interests are case-sensitive tags. Duplicates are dropped on construction
    while the first-seen order is kept, since label ranking breaks ties by
    the order in which interests are first encountered.
    """

    id: Hashable  # Opaque identifier (profile UUID in production)
    display_name: str
    avatar_ref: str | None = None
    interests: tuple[str, ...] = ()
    interest_set: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Accepts any iterable (list, generator) and stores a tuple
        unique = tuple(dict.fromkeys(self.interests))
        object.__setattr__(self, "interests", unique)
        object.__setattr__(self, "interest_set", frozenset(unique))


@dataclass
class AttendeeGroup:
    """A group of attendees produced by one clustering run.

    members keeps assignment order. shared_interests and name are derived
    from members and are refreshed by the labeler after the group is final.
    """

    members: list[Attendee] = field(default_factory=list)
    shared_interests: list[str] = field(default_factory=list)
    name: str = ""

    @property
    def size(self) -> int:
        return len(self.members)


@dataclass
class ClusteringRequest:
    """Input of one clustering run for an event."""

    event_id: str
    attendees: list[Attendee]
    min_size: int = 4
    max_size: int = 6
