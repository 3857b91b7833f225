"""Cache-aside orchestration for derived views.

Read path:  key → cache GET → hit: deserialize, done
                            → miss: compute → register key → SET with TTL
Write path: invalidate(user_id) → SMEMBERS registry → DEL keys + registry

Key layout (each part percent-escaped, joined with ':'):
    dashboard:<user_id>
    trends:<user_id>:<year>
    categories:<user_id>:<period>
    transactions:<user_id>:<page>:<limit>:<search>:<category>
    category_labels
    cachekeys:<user_id>                  ← registry of the user's live keys

The cache is an optimization only. Every cache failure degrades to a miss
and every invalidation failure is logged and dropped; the TTL bounds how
long a missed invalidation can serve stale data.

Concurrent misses on the same key are not coalesced: both compute, both
store, last write wins. Results are deterministic for a given data snapshot.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable
from enum import Enum
from typing import TypeVar
from urllib.parse import quote

from pydantic import BaseModel, ValidationError

from src.ft_cache.domain.port import REGISTRY_TTL_SECONDS, VIEW_TTL_SECONDS, CachePort
from src.ft_common.enums import ViewKind
from src.ft_common.errors import CacheUnavailableError

logger = logging.getLogger("ft.cache")

M = TypeVar("M", bound=BaseModel)

_REGISTRY_PREFIX = "cachekeys"


def _key_part(part: object) -> str:
    if part is None:
        return ""
    if isinstance(part, Enum):
        part = part.value
    # Escaping ':' (and '%') keeps the join injective: no two distinct
    # parameter tuples can produce the same key.
    return quote(str(part), safe="")


def build_cache_key(kind: ViewKind | str, *params: object) -> str:
    """Deterministic key: kind followed by params in the given order."""
    return ":".join(_key_part(p) for p in (kind, *params))


def registry_key(user_id: str) -> str:
    return build_cache_key(_REGISTRY_PREFIX, user_id)


class CacheAsideOrchestrator:
    def __init__(self, cache: CachePort) -> None:
        self._cache = cache

    async def fetch_or_compute(
        self,
        kind: ViewKind,
        user_id: str | None,
        params: Iterable[object],
        compute: Callable[[], Awaitable[M]],
        model: type[M],
        ttl_seconds: int | None = None,
    ) -> M:
        """Return the cached view for (kind, user_id, params) or compute it.

        ``user_id=None`` marks a view shared by all users; it is not
        registered and only expires by TTL. Errors raised by ``compute``
        propagate unchanged.
        """
        scope = () if user_id is None else (user_id,)
        key = build_cache_key(kind, *scope, *params)

        cached = await self._read(key, model)
        if cached is not None:
            logger.debug("cache hit %s", key)
            return cached

        logger.debug("cache miss %s", key)
        value = await compute()
        ttl = ttl_seconds if ttl_seconds is not None else VIEW_TTL_SECONDS[kind]
        await self._store(key, value, ttl, user_id)
        return value

    async def invalidate(self, user_id: str) -> None:
        """Drop every cached view scoped to ``user_id``. Never raises."""
        reg = registry_key(user_id)
        try:
            keys = await self._cache.members(reg)
            await self._cache.delete(*sorted(keys), reg)
        except CacheUnavailableError as exc:
            logger.warning("cache invalidation failed for user %s: %s", user_id, exc)
            return
        logger.debug("invalidated %d cached views for user %s", len(keys), user_id)

    async def _read(self, key: str, model: type[M]) -> M | None:
        try:
            raw = await self._cache.get(key)
        except CacheUnavailableError as exc:
            logger.warning("cache unavailable on GET %s: %s", key, exc)
            return None
        if raw is None:
            return None
        try:
            return model.model_validate_json(raw)
        except ValidationError:
            logger.warning("discarding corrupt cache entry %s", key)
            return None

    async def _store(self, key: str, value: BaseModel, ttl: int, user_id: str | None) -> None:
        try:
            # Register before writing: a registered key with no value is
            # harmless, an unregistered value would survive invalidation.
            if user_id is not None:
                await self._cache.add_member(registry_key(user_id), key, REGISTRY_TTL_SECONDS)
            await self._cache.set(key, value.model_dump_json(), ttl)
        except CacheUnavailableError as exc:
            logger.warning("cache unavailable on SET %s: %s", key, exc)
