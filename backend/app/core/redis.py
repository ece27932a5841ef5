"""Redis client for cross-request coordination."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from redis.exceptions import LockError

from app.core.config import settings

logger = logging.getLogger(__name__)

# Async Redis pool for FastAPI
async_redis_pool = aioredis.ConnectionPool.from_url(
    str(settings.redis_url),
    decode_responses=True,
)


async def get_redis() -> AsyncGenerator[aioredis.Redis, None]:
    """Dependency for getting async Redis client."""
    client = aioredis.Redis(connection_pool=async_redis_pool)
    try:
        yield client
    finally:
        await client.aclose()


async def close_redis_pool() -> None:
    """Close the async Redis connection pool.

    Call this during application shutdown.
    """
    await async_redis_pool.disconnect()
    logger.info("Redis connection pool closed")


# =============================================================================
# Breakout clustering lock
# =============================================================================


def get_event_clustering_lock_key(event_id: str) -> str:
    """Get the Redis key guarding breakout clustering for an event."""
    return f"breakout:event:{event_id}:lock"


@asynccontextmanager
async def event_clustering_lock(
    client: aioredis.Redis,
    event_id: str,
    timeout_seconds: int | None = None,
) -> AsyncGenerator[bool, None]:
    """Hold the per-event clustering lock for the duration of the block.

    The lock is taken without blocking. The block receives ``True`` when the
    lock was acquired and ``False`` when another request already holds it;
    in the latter case nothing is released on exit.

    Usage:
        async with event_clustering_lock(redis_client, event_id) as acquired:
            if not acquired:
                ...

    Args:
        client: Async Redis client
        event_id: Event being clustered
        timeout_seconds: Lock TTL, defaults to settings.breakout_lock_timeout_seconds
    """
    lock = client.lock(
        get_event_clustering_lock_key(event_id),
        timeout=timeout_seconds or settings.breakout_lock_timeout_seconds,
    )
    acquired = await lock.acquire(blocking=False)
    try:
        yield acquired
    finally:
        if acquired:
            try:
                await lock.release()
            except LockError as e:
                # TTL elapsed before the request finished
                logger.warning(f"Clustering lock for event {event_id} was lost before release: {e}")
