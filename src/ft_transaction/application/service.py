"""TransactionApplicationService — thin composition layer.

Reads go through the cache-aside orchestrator (paginated lists, category
labels). Every successful write commits first, then invalidates the user's
cached views before returning, so the next read recomputes from the new data.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.ft_analytics.application.service import AnalyticsApplicationService
from src.ft_cache.application.cache_aside import CacheAsideOrchestrator
from src.ft_cache.domain.port import CachePort
from src.ft_common.enums import ViewKind
from src.ft_common.errors import TransactionNotFoundError
from src.ft_transaction.application.schemas import (
    CategoryLabelsResponse,
    DeleteTransactionResponse,
    TransactionPageResponse,
    TransactionResponse,
    TransactionWriteRequest,
)
from src.ft_transaction.domain.constants import CATEGORY_LABELS
from src.ft_transaction.domain.repository import TransactionRepositoryProtocol
from src.ft_transaction.infrastructure.persistence import TransactionRepository

logger = logging.getLogger("ft.transaction")


class TransactionApplicationService:
    def __init__(
        self,
        cache: CachePort,
        repo: TransactionRepositoryProtocol | None = None,
    ) -> None:
        self._repo: TransactionRepositoryProtocol = repo or TransactionRepository()
        self._views = CacheAsideOrchestrator(cache)
        self._analytics = AnalyticsApplicationService(cache, repo=self._repo)

    async def list_transactions(
        self,
        db: AsyncSession,
        user_id: str,
        page: int,
        limit: int,
        search: str | None,
        category: str | None,
    ) -> TransactionPageResponse:
        search = search or None
        category = category or None

        async def compute() -> TransactionPageResponse:
            items, total = await self._repo.list_page(
                db, user_id, (page - 1) * limit, limit, search, category
            )
            return TransactionPageResponse.build(items, total, page, limit)

        return await self._views.fetch_or_compute(
            ViewKind.TRANSACTIONS,
            user_id,
            (page, limit, search, category),
            compute,
            TransactionPageResponse,
        )

    async def list_category_labels(self) -> CategoryLabelsResponse:
        async def compute() -> CategoryLabelsResponse:
            return CategoryLabelsResponse(categories=list(CATEGORY_LABELS))

        return await self._views.fetch_or_compute(
            ViewKind.CATEGORY_LABELS, None, (), compute, CategoryLabelsResponse
        )

    async def create_transaction(
        self, db: AsyncSession, user_id: str, body: TransactionWriteRequest
    ) -> TransactionResponse:
        try:
            tx = await self._repo.create_transaction(db, user_id, body.to_draft())
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("transaction %s created for user %s", tx.id, user_id)
        await self._analytics.on_transaction_write(user_id)
        return TransactionResponse.from_domain(tx)

    async def update_transaction(
        self,
        db: AsyncSession,
        user_id: str,
        transaction_id: str,
        body: TransactionWriteRequest,
    ) -> TransactionResponse:
        try:
            tx = await self._repo.update_transaction(
                db, user_id, transaction_id, body.to_draft()
            )
            if tx is None:
                raise TransactionNotFoundError(transaction_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("transaction %s updated for user %s", tx.id, user_id)
        await self._analytics.on_transaction_write(user_id)
        return TransactionResponse.from_domain(tx)

    async def delete_transaction(
        self, db: AsyncSession, user_id: str, transaction_id: str
    ) -> DeleteTransactionResponse:
        try:
            deleted = await self._repo.delete_transaction(db, user_id, transaction_id)
            if not deleted:
                raise TransactionNotFoundError(transaction_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("transaction %s deleted for user %s", transaction_id, user_id)
        await self._analytics.on_transaction_write(user_id)
        return DeleteTransactionResponse(id=transaction_id)
