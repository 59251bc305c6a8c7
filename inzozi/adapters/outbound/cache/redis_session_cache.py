# inzozi/adapters/outbound/cache/redis_session_cache.py

"""
Redis-backed session cache.

One client per process, created on application startup and shared by every
request. All keys live in the same Redis database that every API instance
points at, which is what makes sessions valid across instances.
"""

import logging
from typing import Optional

from redis.asyncio import Redis, from_url
from redis.exceptions import RedisError, ResponseError

from inzozi.adapters.configuration.config import settings
from inzozi.application.ports.outbound.session_cache_port import ISessionCache
from inzozi.domain.exceptions import CacheOperationException

logger = logging.getLogger(__name__)

# GET + DEL in one server-side step, for servers older than 6.2 (no GETDEL)
_GETDEL_SCRIPT = """
local value = redis.call('GET', KEYS[1])
if value then
    redis.call('DEL', KEYS[1])
end
return value
"""

redis_client: Optional[Redis] = None


async def init_redis(url: Optional[str] = None) -> Redis:
    """
    Initialize the Redis connection.

    Call this on application startup.
    """
    global redis_client
    redis_client = from_url(
        url or settings.REDIS_URL,
        encoding="utf-8",
        decode_responses=True,
        socket_timeout=5.0,
        socket_connect_timeout=5.0,
    )
    await redis_client.ping()
    logger.info("Redis connected")
    return redis_client


async def close_redis() -> None:
    """Close the Redis connection."""
    global redis_client
    if redis_client:
        await redis_client.aclose()
        redis_client = None
        logger.info("Redis connection closed")


class RedisSessionCache(ISessionCache):
    """ISessionCache over ``redis.asyncio``."""

    def __init__(self, client: Redis):
        self.client = client

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self.client.set(key, value, ex=max(1, int(ttl_seconds)))
        except RedisError as e:
            logger.error(f"Redis SET failed for {key.split(':', 1)[0]}: {e}")
            raise CacheOperationException(original_error=e)

    async def get(self, key: str) -> Optional[str]:
        try:
            return await self.client.get(key)
        except RedisError as e:
            logger.error(f"Redis GET failed for {key.split(':', 1)[0]}: {e}")
            raise CacheOperationException(original_error=e)

    async def delete(self, key: str) -> int:
        try:
            return await self.client.delete(key)
        except RedisError as e:
            logger.error(f"Redis DEL failed for {key.split(':', 1)[0]}: {e}")
            raise CacheOperationException(original_error=e)

    async def exists(self, key: str) -> bool:
        try:
            return bool(await self.client.exists(key))
        except RedisError as e:
            logger.error(f"Redis EXISTS failed for {key.split(':', 1)[0]}: {e}")
            raise CacheOperationException(original_error=e)

    async def ttl(self, key: str) -> int:
        try:
            return int(await self.client.ttl(key))
        except RedisError as e:
            logger.error(f"Redis TTL failed for {key.split(':', 1)[0]}: {e}")
            raise CacheOperationException(original_error=e)

    async def getdel(self, key: str) -> Optional[str]:
        try:
            try:
                return await self.client.getdel(key)
            except ResponseError:
                # server without GETDEL
                return await self.client.eval(_GETDEL_SCRIPT, 1, key)
        except RedisError as e:
            logger.error(f"Redis GETDEL failed for {key.split(':', 1)[0]}: {e}")
            raise CacheOperationException(original_error=e)
