"""Unit tests for TransactionApplicationService using a mock repository."""

from datetime import UTC, date, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.ft_common.enums import TransactionType
from src.ft_common.errors import TransactionNotFoundError
from src.ft_transaction.application.schemas import (
    TransactionPageResponse,
    TransactionWriteRequest,
)
from src.ft_transaction.application.service import TransactionApplicationService
from src.ft_transaction.domain.constants import CATEGORY_LABELS
from src.ft_transaction.domain.models import Transaction


def _make_tx(tx_id: str = "0b7c8a4e-0000-4000-8000-000000000001", amount: int = -2500) -> Transaction:
    return Transaction(
        id=tx_id,
        user_id="user-1",
        description="Coffee",
        amount=amount,
        type=TransactionType.EXPENSE if amount < 0 else TransactionType.INCOME,
        category="Food & Dining",
        date=date(2026, 5, 2),
        created_at=datetime(2026, 5, 2, 9, 30, tzinfo=UTC),
    )


def _body(**overrides) -> TransactionWriteRequest:
    data = {
        "description": "Coffee",
        "amount_cents": 2500,
        "type": "expense",
        "category": "Food & Dining",
        "date": "2026-05-02",
    }
    data.update(overrides)
    return TransactionWriteRequest(**data)


async def _warm(cache, svc: TransactionApplicationService) -> None:
    """Populate a few cached views for user-1 so invalidation is observable."""
    await svc.list_transactions(MagicMock(), "user-1", 1, 10, None, None)
    cache.values["dashboard:user-1"] = "{}"
    cache.sets["cachekeys:user-1"].add("dashboard:user-1")


@pytest.fixture
def repo() -> AsyncMock:
    repo = AsyncMock()
    repo.list_page.return_value = ([_make_tx()], 1)
    return repo


class TestListTransactions:
    async def test_returns_page(self, cache, repo) -> None:
        svc = TransactionApplicationService(cache, repo=repo)
        db = MagicMock()

        result = await svc.list_transactions(db, "user-1", 2, 10, "cof", None)

        repo.list_page.assert_awaited_once_with(db, "user-1", 10, 10, "cof", None)
        assert isinstance(result, TransactionPageResponse)
        assert result.current_page == 2
        assert result.total == 1
        assert result.total_pages == 1
        assert result.transactions[0].type == "expense"
        assert result.transactions[0].amount_display == "-$25.00"

    async def test_cached_with_list_ttl(self, cache, repo) -> None:
        svc = TransactionApplicationService(cache, repo=repo)
        await svc.list_transactions(MagicMock(), "user-1", 1, 10, "", "Food & Dining")
        await svc.list_transactions(MagicMock(), "user-1", 1, 10, None, "Food & Dining")

        # Empty search and no search are the same request
        assert repo.list_page.await_count == 1
        assert cache.ttls["transactions:user-1:1:10::Food%20%26%20Dining"] == 300

    async def test_total_pages_rounds_up(self, cache, repo) -> None:
        repo.list_page.return_value = ([_make_tx()] * 10, 21)
        svc = TransactionApplicationService(cache, repo=repo)
        result = await svc.list_transactions(MagicMock(), "user-1", 1, 10, None, None)
        assert result.total_pages == 3


class TestCategoryLabels:
    async def test_static_labels_cached_for_an_hour(self, cache, repo) -> None:
        svc = TransactionApplicationService(cache, repo=repo)
        result = await svc.list_category_labels()
        assert result.categories == list(CATEGORY_LABELS)
        assert cache.ttls["category_labels"] == 3600


class TestCreate:
    async def test_stores_signed_amount_commits_and_invalidates(self, cache, repo) -> None:
        repo.create_transaction.return_value = _make_tx()
        svc = TransactionApplicationService(cache, repo=repo)
        await _warm(cache, svc)
        db = AsyncMock()

        result = await svc.create_transaction(db, "user-1", _body())

        draft = repo.create_transaction.await_args.args[2]
        assert draft.amount == -2500
        assert draft.type is TransactionType.EXPENSE
        db.commit.assert_awaited_once()
        assert result.type == "expense"
        assert not [k for k in cache.values if "user-1" in k]

    async def test_rollback_and_no_invalidation_on_failure(self, cache, repo) -> None:
        repo.create_transaction.side_effect = RuntimeError("boom")
        svc = TransactionApplicationService(cache, repo=repo)
        await _warm(cache, svc)
        db = AsyncMock()

        with pytest.raises(RuntimeError):
            await svc.create_transaction(db, "user-1", _body())

        db.rollback.assert_awaited_once()
        assert "dashboard:user-1" in cache.values

    async def test_invalidation_failure_does_not_fail_write(self, cache, repo) -> None:
        repo.create_transaction.return_value = _make_tx()
        svc = TransactionApplicationService(cache, repo=repo)
        cache.fail = True
        db = AsyncMock()

        result = await svc.create_transaction(db, "user-1", _body())

        assert result.id == _make_tx().id
        db.commit.assert_awaited_once()


class TestUpdate:
    async def test_updates_and_invalidates(self, cache, repo) -> None:
        repo.update_transaction.return_value = _make_tx(amount=300000)
        svc = TransactionApplicationService(cache, repo=repo)
        await _warm(cache, svc)
        db = AsyncMock()

        result = await svc.update_transaction(
            db, "user-1", _make_tx().id, _body(type="income", amount_cents=300000)
        )

        draft = repo.update_transaction.await_args.args[3]
        assert draft.amount == 300000
        assert result.type == "income"
        assert "dashboard:user-1" not in cache.values

    async def test_missing_raises_not_found(self, cache, repo) -> None:
        repo.update_transaction.return_value = None
        svc = TransactionApplicationService(cache, repo=repo)
        db = AsyncMock()

        with pytest.raises(TransactionNotFoundError):
            await svc.update_transaction(db, "user-1", "missing", _body())
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()


class TestDelete:
    async def test_deletes_and_invalidates(self, cache, repo) -> None:
        repo.delete_transaction.return_value = True
        svc = TransactionApplicationService(cache, repo=repo)
        await _warm(cache, svc)
        db = AsyncMock()

        result = await svc.delete_transaction(db, "user-1", "tx-9")

        assert result.id == "tx-9"
        assert result.deleted is True
        assert not [k for k in cache.values if "user-1" in k]

    async def test_missing_raises_not_found(self, cache, repo) -> None:
        repo.delete_transaction.return_value = False
        svc = TransactionApplicationService(cache, repo=repo)

        with pytest.raises(TransactionNotFoundError):
            await svc.delete_transaction(AsyncMock(), "user-1", "tx-9")
