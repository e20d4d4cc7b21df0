"""Redis client for session state with TTL."""

import logging

from redis.asyncio import Redis

from hiretrack.core.config import settings

logger = logging.getLogger(__name__)

# Async Redis client
_redis_client: Redis | None = None


async def get_redis() -> Redis:
    """Get or create async Redis client."""
    global _redis_client
    if _redis_client is None:
        _redis_client = Redis.from_url(
            settings.redis_url,
            decode_responses=True,
        )
    return _redis_client


async def close_redis() -> None:
    """Close Redis connection."""
    global _redis_client
    if _redis_client is not None:
        await _redis_client.close()
        _redis_client = None


class SessionStore:
    """Session token storage using Redis with automatic TTL expiration."""

    PREFIX = "session:"

    @classmethod
    def ttl_seconds(cls) -> int:
        return settings.session_ttl_seconds

    @classmethod
    async def set(cls, token: str, uid: str) -> None:
        """Store session token mapped to the principal id."""
        redis = await get_redis()
        key = f"{cls.PREFIX}{token}"
        await redis.setex(key, cls.ttl_seconds(), uid)
        logger.debug(f"Stored session for {uid} (TTL: {cls.ttl_seconds()}s)")

    @classmethod
    async def get(cls, token: str) -> str | None:
        """Get principal id for a session token."""
        redis = await get_redis()
        key = f"{cls.PREFIX}{token}"
        return await redis.get(key)

    @classmethod
    async def delete(cls, token: str) -> None:
        """Delete session token."""
        redis = await get_redis()
        key = f"{cls.PREFIX}{token}"
        await redis.delete(key)
        logger.debug("Deleted session token")
