"""FastAPI dependency: get_cache.

The Redis client lives on ``app.state.redis`` (created in the lifespan).
Tests override this dependency with an in-memory fake.
"""

from starlette.requests import Request

from src.ft_cache.domain.port import CachePort
from src.ft_cache.infrastructure.redis_cache import RedisCache


def get_cache(request: Request) -> CachePort:
    return RedisCache(request.app.state.redis)
