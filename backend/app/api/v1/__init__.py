"""API v1 module."""

from fastapi import APIRouter

from app.api.v1 import breakout_groups, health

router = APIRouter()

router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(breakout_groups.router, tags=["breakout-groups"])
