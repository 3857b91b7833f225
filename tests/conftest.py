"""Shared test fixtures."""

import os
from collections.abc import Set

# Settings() requires JWT_SECRET at import time.
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")

from datetime import date  # noqa: E402

import pytest  # noqa: E402

from src.ft_common.enums import TransactionType  # noqa: E402
from src.ft_common.errors import CacheUnavailableError  # noqa: E402
from src.ft_transaction.domain.models import Transaction  # noqa: E402


class FakeCache:
    """In-memory CachePort. ``fail = True`` makes every call raise."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.sets: dict[str, set[str]] = {}
        self.fail = False
        self.gets = 0
        self.writes = 0

    def _check(self) -> None:
        if self.fail:
            raise CacheUnavailableError("cache down")

    async def get(self, key: str) -> str | None:
        self._check()
        self.gets += 1
        return self.values.get(key)

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._check()
        self.writes += 1
        self.values[key] = value
        self.ttls[key] = ttl_seconds

    async def delete(self, *keys: str) -> None:
        self._check()
        for key in keys:
            self.values.pop(key, None)
            self.ttls.pop(key, None)
            self.sets.pop(key, None)

    async def add_member(self, set_key: str, member: str, ttl_seconds: int) -> None:
        self._check()
        self.sets.setdefault(set_key, set()).add(member)
        self.ttls[set_key] = ttl_seconds

    async def members(self, set_key: str) -> Set[str]:
        self._check()
        return set(self.sets.get(set_key, set()))


def make_tx(
    amount: int,
    tx_type: TransactionType,
    on: date,
    category: str = "Other",
    tx_id: str | None = None,
    description: str = "",
) -> Transaction:
    return Transaction(
        id=tx_id or f"tx-{on.isoformat()}-{category}-{amount}",
        user_id="user-1",
        amount=amount,
        type=tx_type,
        category=category,
        date=on,
        description=description,
    )


@pytest.fixture
def cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
def tx_factory():
    """Factory for domain Transactions: tx_factory(-2000, EXPENSE, date(...), "Food")."""
    return make_tx
