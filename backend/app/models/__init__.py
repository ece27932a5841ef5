"""SQLAlchemy models."""

from app.models.breakout_group import BreakoutGroup, BreakoutGroupMember
from app.models.event import AttendanceStatus, Event, EventAttendee
from app.models.profile import Interest, Profile, UserInterest

__all__ = [
    "Profile",
    "Interest",
    "UserInterest",
    "Event",
    "EventAttendee",
    "AttendanceStatus",
    "BreakoutGroup",
    "BreakoutGroupMember",
]
