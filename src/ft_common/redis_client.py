"""Redis client factory — used for the analytics view cache.

The client is created once in the app lifespan and kept on ``app.state``;
services receive it through dependencies, never through a module global.
"""

import redis.asyncio as aioredis

from config.settings import settings


def create_redis(url: str | None = None) -> aioredis.Redis:
    """Create a Redis client with short timeouts so cache calls fail fast."""
    return aioredis.from_url(
        url or settings.REDIS_URL,
        decode_responses=True,
        socket_timeout=settings.CACHE_TIMEOUT_SECONDS,
        socket_connect_timeout=settings.CACHE_TIMEOUT_SECONDS,
    )


async def close_redis(client: aioredis.Redis) -> None:
    """Close the Redis connection pool."""
    await client.aclose()
