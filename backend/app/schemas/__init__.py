"""Pydantic schemas for request/response validation."""

from app.schemas.breakout import (
    BreakoutGroupMemberResponse,
    BreakoutGroupResponse,
    BreakoutGroupsComputeRequest,
    BreakoutGroupsComputeResponse,
    BreakoutGroupsListResponse,
)
from app.schemas.clustering import Attendee, AttendeeGroup, ClusteringRequest
from app.schemas.common import BaseSchema, ErrorResponse

__all__ = [
    # Common
    "BaseSchema",
    "ErrorResponse",
    # Clustering
    "Attendee",
    "AttendeeGroup",
    "ClusteringRequest",
    # Breakout API
    "BreakoutGroupsComputeRequest",
    "BreakoutGroupsComputeResponse",
    "BreakoutGroupsListResponse",
    "BreakoutGroupResponse",
    "BreakoutGroupMemberResponse",
]
