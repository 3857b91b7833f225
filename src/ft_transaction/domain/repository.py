"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from datetime import date
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.ft_common.enums import TransactionType
from src.ft_transaction.domain.models import Transaction, TransactionDraft


class TransactionRepositoryProtocol(Protocol):
    async def list_transactions(
        self,
        db: AsyncSession,
        user_id: str,
        start: date | None = None,
        end: date | None = None,
        tx_type: TransactionType | None = None,
    ) -> list[Transaction]:
        """All matching transactions, newest first. Bounds are inclusive."""
        ...

    async def list_page(
        self,
        db: AsyncSession,
        user_id: str,
        offset: int,
        limit: int,
        search: str | None,
        category: str | None,
    ) -> tuple[list[Transaction], int]:
        """One page, newest first, plus the total count for the filter."""
        ...

    async def create_transaction(
        self, db: AsyncSession, user_id: str, draft: TransactionDraft
    ) -> Transaction: ...

    async def update_transaction(
        self,
        db: AsyncSession,
        user_id: str,
        transaction_id: str,
        draft: TransactionDraft,
    ) -> Transaction | None: ...

    async def delete_transaction(
        self, db: AsyncSession, user_id: str, transaction_id: str
    ) -> bool: ...
