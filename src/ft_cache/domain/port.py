"""Cache Port — the only cache surface the application layer sees.

Values are serialized JSON documents (str). Implementations raise
CacheUnavailableError for every backend failure; callers treat it as a miss.

Besides plain get/set/delete the port offers two set primitives so the
orchestrator can keep an explicit registry of keys per user. Invalidation
enumerates that registry instead of relying on pattern deletion.
"""

from collections.abc import Set
from typing import Protocol

from src.ft_common.enums import ViewKind

# Fixed TTL per view kind, in seconds. Also the upper bound on staleness.
VIEW_TTL_SECONDS: dict[ViewKind, int] = {
    ViewKind.DASHBOARD: 900,
    ViewKind.TRENDS: 3600,
    ViewKind.CATEGORIES: 1800,
    ViewKind.TRANSACTIONS: 300,
    ViewKind.CATEGORY_LABELS: 3600,
}

# Registry entries must outlive every key they list.
REGISTRY_TTL_SECONDS = max(VIEW_TTL_SECONDS.values())


class CachePort(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> None: ...

    async def delete(self, *keys: str) -> None: ...

    async def add_member(self, set_key: str, member: str, ttl_seconds: int) -> None:
        """Add ``member`` to the set at ``set_key`` and (re)arm its TTL."""
        ...

    async def members(self, set_key: str) -> Set[str]: ...
