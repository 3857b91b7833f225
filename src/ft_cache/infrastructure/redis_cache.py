"""RedisCache — CachePort backed by redis.asyncio.

Every redis error, socket timeout or connection failure is converted to
CacheUnavailableError so the request path can fall back to computing.
"""

from collections.abc import Awaitable, Callable, Set
from typing import TypeVar

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from src.ft_common.errors import CacheUnavailableError

T = TypeVar("T")


class RedisCache:
    def __init__(self, client: aioredis.Redis) -> None:
        self._client = client

    async def _call(self, op: Callable[[], Awaitable[T]]) -> T:
        try:
            return await op()
        except (RedisError, OSError, TimeoutError) as exc:
            raise CacheUnavailableError(str(exc)) from exc

    async def get(self, key: str) -> str | None:
        return await self._call(lambda: self._client.get(key))

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        await self._call(lambda: self._client.set(key, value, ex=ttl_seconds))

    async def delete(self, *keys: str) -> None:
        if not keys:
            return
        await self._call(lambda: self._client.delete(*keys))

    async def add_member(self, set_key: str, member: str, ttl_seconds: int) -> None:
        async def _op() -> None:
            async with self._client.pipeline(transaction=True) as pipe:
                pipe.sadd(set_key, member)
                pipe.expire(set_key, ttl_seconds)
                await pipe.execute()

        await self._call(_op)

    async def members(self, set_key: str) -> Set[str]:
        return set(await self._call(lambda: self._client.smembers(set_key)))
