"""API-level fixtures.

The app runs in-process over httpx's ASGI transport. The lifespan is not
triggered, so no database or Redis is needed: the DB session, repository and
cache are replaced through FastAPI dependency overrides.
"""

import uuid
from datetime import UTC, date, datetime
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.ft_analytics.api.router import get_analytics_service
from src.ft_analytics.application.service import AnalyticsApplicationService
from src.ft_common.database import get_db_session
from src.ft_common.enums import TransactionType
from src.ft_gateway.auth.jwt_handler import create_access_token
from src.ft_transaction.api.router import get_transaction_service
from src.ft_transaction.application.service import TransactionApplicationService
from src.ft_transaction.domain.models import Transaction, TransactionDraft
from src.main import app

TODAY = date(2026, 5, 15)


class InMemoryTransactionRepository:
    """Dict-backed TransactionRepositoryProtocol with the same ordering and scoping."""

    def __init__(self) -> None:
        self.rows: dict[str, Transaction] = {}
        self.list_calls = 0

    def _owned(self, user_id: str) -> list[Transaction]:
        owned = [t for t in self.rows.values() if t.user_id == user_id]
        return sorted(owned, key=lambda t: (t.date, t.created_at), reverse=True)

    async def list_transactions(self, db, user_id, start=None, end=None, tx_type=None):
        self.list_calls += 1
        return [
            t
            for t in self._owned(user_id)
            if (start is None or t.date >= start)
            and (end is None or t.date <= end)
            and (tx_type is None or t.type is tx_type)
        ]

    async def list_page(self, db, user_id, offset, limit, search, category):
        matching = [
            t
            for t in self._owned(user_id)
            if (not search or search.lower() in t.description.lower())
            and (not category or t.category == category)
        ]
        return matching[offset:offset + limit], len(matching)

    def _get(self, user_id, transaction_id):
        tx = self.rows.get(transaction_id)
        return tx if tx and tx.user_id == user_id else None

    async def create_transaction(self, db, user_id, draft: TransactionDraft):
        now = datetime.now(UTC)
        tx = Transaction(
            id=str(uuid.uuid4()),
            user_id=user_id,
            amount=draft.amount,
            type=draft.type,
            category=draft.category,
            date=draft.date,
            description=draft.description,
            created_at=now,
            updated_at=now,
        )
        self.rows[tx.id] = tx
        return tx

    async def update_transaction(self, db, user_id, transaction_id, draft):
        tx = self._get(user_id, transaction_id)
        if tx is None:
            return None
        tx.amount, tx.type, tx.category = draft.amount, draft.type, draft.category
        tx.date, tx.description = draft.date, draft.description
        return tx

    async def delete_transaction(self, db, user_id, transaction_id):
        if self._get(user_id, transaction_id) is None:
            return False
        del self.rows[transaction_id]
        return True

    def seed(self, user_id: str, amount: int, tx_type: TransactionType, on: date, category: str):
        tx = Transaction(
            id=str(uuid.uuid4()),
            user_id=user_id,
            amount=amount,
            type=tx_type,
            category=category,
            date=on,
            description=f"{category} {on}",
            created_at=datetime.now(UTC),
        )
        self.rows[tx.id] = tx
        return tx


@pytest.fixture
def repo() -> InMemoryTransactionRepository:
    return InMemoryTransactionRepository()


@pytest.fixture
async def client(cache, repo):
    async def _db():
        yield AsyncMock()

    app.dependency_overrides[get_db_session] = _db
    app.dependency_overrides[get_analytics_service] = lambda: AnalyticsApplicationService(
        cache, repo=repo, today=lambda: TODAY
    )
    app.dependency_overrides[get_transaction_service] = lambda: TransactionApplicationService(
        cache, repo=repo
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token('user-1')}"}
