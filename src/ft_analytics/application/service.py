"""AnalyticsApplicationService — the read side of the finance tracker.

Each view goes through the cache-aside orchestrator: the repository and the
aggregation engine only run on a miss. Repository errors propagate (there is
no other data source); cache errors never do.
"""

from collections.abc import Callable
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from src.ft_analytics.domain.aggregation import (
    category_window_start,
    compute_category_breakdown,
    compute_dashboard,
    compute_trend,
    normalize_period,
)
from src.ft_analytics.domain.views import CategoryBreakdown, DashboardSummary, TrendSeries
from src.ft_cache.application.cache_aside import CacheAsideOrchestrator
from src.ft_cache.domain.port import CachePort
from src.ft_common.datetime_utils import utc_today
from src.ft_common.enums import CategoryPeriod, TransactionType, ViewKind
from src.ft_transaction.domain.repository import TransactionRepositoryProtocol
from src.ft_transaction.infrastructure.persistence import TransactionRepository


class AnalyticsApplicationService:
    def __init__(
        self,
        cache: CachePort,
        repo: TransactionRepositoryProtocol | None = None,
        today: Callable[[], date] = utc_today,
    ) -> None:
        self._views = CacheAsideOrchestrator(cache)
        self._repo: TransactionRepositoryProtocol = repo or TransactionRepository()
        self._today = today

    async def get_dashboard(self, db: AsyncSession, user_id: str) -> DashboardSummary:
        today = self._today()

        async def compute() -> DashboardSummary:
            transactions = await self._repo.list_transactions(
                db, user_id, start=date(today.year, 1, 1), end=today
            )
            return compute_dashboard(transactions, today.year)

        return await self._views.fetch_or_compute(
            ViewKind.DASHBOARD, user_id, (), compute, DashboardSummary
        )

    async def get_trend(self, db: AsyncSession, user_id: str, year: int) -> TrendSeries:
        async def compute() -> TrendSeries:
            transactions = await self._repo.list_transactions(
                db, user_id, start=date(year, 1, 1), end=date(year, 12, 31)
            )
            return compute_trend(transactions, year)

        return await self._views.fetch_or_compute(
            ViewKind.TRENDS, user_id, (year,), compute, TrendSeries
        )

    async def get_category_breakdown(
        self, db: AsyncSession, user_id: str, period: str | CategoryPeriod
    ) -> CategoryBreakdown:
        # Unknown periods fall back to MONTH and share its cache entry.
        resolved = normalize_period(period)
        today = self._today()

        async def compute() -> CategoryBreakdown:
            transactions = await self._repo.list_transactions(
                db,
                user_id,
                start=category_window_start(resolved, today),
                tx_type=TransactionType.EXPENSE,
            )
            return compute_category_breakdown(transactions, resolved, today)

        return await self._views.fetch_or_compute(
            ViewKind.CATEGORIES, user_id, (resolved,), compute, CategoryBreakdown
        )

    async def on_transaction_write(self, user_id: str) -> None:
        """Hook for create/update/delete: drop every cached view of the user."""
        await self._views.invalidate(user_id)
