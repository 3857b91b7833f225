"""Aggregation engine — pure functions from transactions to analytics views.

No I/O, no clock, no shared state: every input (including "today") is a
parameter, so the same arguments always produce the same view.

Conventions:
  - Money is int cents. Each record contributes abs(amount) to the side named
    by its ``type``; the stored sign is never trusted.
  - Month/year membership is re-derived from each record's own date, so the
    result does not depend on how well the repository filtered.
  - Records without a usable date or type are skipped and logged.
"""

import logging
from collections.abc import Iterable
from datetime import date

from src.ft_analytics.domain.views import (
    CategoryBreakdown,
    CategoryTotal,
    DashboardSummary,
    MonthTotals,
    RecentTransaction,
    TrendPoint,
    TrendSeries,
)
from src.ft_common.cents import magnitude
from src.ft_common.enums import CategoryPeriod, TransactionType
from src.ft_transaction.domain.models import Transaction

logger = logging.getLogger("ft.analytics")

PALETTE: tuple[str, ...] = (
    "#3b82f6", "#ef4444", "#10b981", "#f59e0b", "#8b5cf6",
    "#ec4899", "#06b6d4", "#84cc16", "#f97316", "#6366f1",
)

MONTH_NAMES: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

DASHBOARD_TOP_CATEGORIES = 10
DASHBOARD_RECENT_LIMIT = 10


def _well_formed(
    transactions: Iterable[Transaction],
) -> list[tuple[Transaction, TransactionType]]:
    """Pair each usable record with its parsed type; drop the rest."""
    usable: list[tuple[Transaction, TransactionType]] = []
    for tx in transactions:
        try:
            kind = TransactionType(tx.type)
        except ValueError:
            kind = None
        if kind is None or not isinstance(tx.date, date) or not isinstance(tx.amount, int):
            logger.warning("skipping malformed transaction %s", getattr(tx, "id", "?"))
            continue
        usable.append((tx, kind))
    return usable


def _category_totals(expenses: Iterable[Transaction]) -> list[CategoryTotal]:
    """Group by category, color by first appearance, rank by total.

    ``first_seen`` is the ordered (category, first_seen_index) sequence; the
    color of a category is PALETTE[first_seen_index % len(PALETTE)]. The sort
    is stable, so equal totals keep first-seen order.
    """
    first_seen: list[str] = []
    totals: dict[str, int] = {}
    for tx in expenses:
        if tx.category not in totals:
            first_seen.append(tx.category)
            totals[tx.category] = 0
        totals[tx.category] += magnitude(tx.amount)

    ranked = sorted(enumerate(first_seen), key=lambda pair: -totals[pair[1]])
    return [
        CategoryTotal(
            category=category,
            total=totals[category],
            color=PALETTE[index % len(PALETTE)],
        )
        for index, category in ranked
    ]


def _monthly_buckets(
    records: list[tuple[Transaction, TransactionType]], year: int
) -> list[tuple[int, int]]:
    """(income, expenses) per calendar month of ``year``; index 0 is January."""
    income = [0] * 12
    expenses = [0] * 12
    for tx, kind in records:
        if tx.date.year != year:
            continue
        month = tx.date.month - 1
        if kind is TransactionType.INCOME:
            income[month] += magnitude(tx.amount)
        else:
            expenses[month] += magnitude(tx.amount)
    return list(zip(income, expenses))


def compute_dashboard(transactions: Iterable[Transaction], year: int) -> DashboardSummary:
    """Year-to-date dashboard.

    Callers pass the user's transactions from Jan 1 of ``year`` up to today.
    Totals cover the whole input; ``monthly_data`` only counts records dated
    in ``year``.
    """
    records = _well_formed(transactions)

    income = sum(magnitude(tx.amount) for tx, k in records if k is TransactionType.INCOME)
    expenses = sum(magnitude(tx.amount) for tx, k in records if k is TransactionType.EXPENSE)

    monthly_data = [
        MonthTotals(month=MONTH_NAMES[i], income=inc, expenses=exp)
        for i, (inc, exp) in enumerate(_monthly_buckets(records, year))
    ]
    category_data = _category_totals(
        tx for tx, k in records if k is TransactionType.EXPENSE
    )[:DASHBOARD_TOP_CATEGORIES]

    # Stable sort: same-day records keep the repository's order.
    newest = sorted(records, key=lambda pair: pair[0].date, reverse=True)
    recent = [
        RecentTransaction(
            id=tx.id,
            description=tx.description,
            amount=tx.amount,
            type=kind.label,
            category=tx.category,
            date=tx.date,
        )
        for tx, kind in newest[:DASHBOARD_RECENT_LIMIT]
    ]

    return DashboardSummary.from_totals(
        year=year,
        income=income,
        expenses=expenses,
        monthly_data=monthly_data,
        category_data=category_data,
        recent_transactions=recent,
    )


def compute_trend(transactions: Iterable[Transaction], year: int) -> TrendSeries:
    """Twelve monthly points for ``year``, zero-filled where there is no data."""
    buckets = _monthly_buckets(_well_formed(transactions), year)
    return TrendSeries(
        year=year,
        months=[
            TrendPoint(month=MONTH_NAMES[i], income=inc, expenses=exp, net=inc - exp)
            for i, (inc, exp) in enumerate(buckets)
        ],
    )


def normalize_period(period: str | CategoryPeriod) -> CategoryPeriod:
    """Map a requested period to a CategoryPeriod. Unknown values mean MONTH."""
    if isinstance(period, CategoryPeriod):
        return period
    try:
        return CategoryPeriod(period.strip().lower())
    except ValueError:
        return CategoryPeriod.MONTH


def category_window_start(period: str | CategoryPeriod, today: date) -> date:
    """First day of the current month, quarter or year relative to ``today``."""
    resolved = normalize_period(period)
    if resolved is CategoryPeriod.YEAR:
        return date(today.year, 1, 1)
    if resolved is CategoryPeriod.QUARTER:
        quarter_first_month = (today.month - 1) // 3 * 3 + 1
        return date(today.year, quarter_first_month, 1)
    return date(today.year, today.month, 1)


def compute_category_breakdown(
    transactions: Iterable[Transaction],
    period: str | CategoryPeriod,
    today: date,
) -> CategoryBreakdown:
    """Expense totals per category since the start of ``period``, all categories."""
    resolved = normalize_period(period)
    since = category_window_start(resolved, today)
    expenses = (
        tx
        for tx, kind in _well_formed(transactions)
        if kind is TransactionType.EXPENSE and tx.date >= since
    )
    return CategoryBreakdown(
        period=resolved.value,
        since=since,
        categories=_category_totals(expenses),
    )
