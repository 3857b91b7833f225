"""Derived analytics views.

Pydantic models so the cache layer can serialize them as JSON and read
them back without a schema of its own. All money fields are int cents.
"""

from datetime import date

from pydantic import BaseModel

from src.ft_common.cents import cents_to_display


class MonthTotals(BaseModel):
    month: str               # "Jan" … "Dec"
    income: int              # cents
    expenses: int            # cents, non-negative


class TrendPoint(MonthTotals):
    net: int                 # income - expenses, may be negative


class CategoryTotal(BaseModel):
    category: str
    total: int               # cents, non-negative
    color: str               # hex color from PALETTE


class RecentTransaction(BaseModel):
    id: str
    description: str
    amount: int              # cents, signed as stored
    type: str                # "income" | "expense"
    category: str
    date: date


class DashboardSummary(BaseModel):
    year: int
    total_income: int
    total_income_display: str
    total_expenses: int
    total_expenses_display: str
    balance: int
    balance_display: str
    monthly_data: list[MonthTotals]
    category_data: list[CategoryTotal]
    recent_transactions: list[RecentTransaction]

    @classmethod
    def from_totals(
        cls,
        year: int,
        income: int,
        expenses: int,
        monthly_data: list[MonthTotals],
        category_data: list[CategoryTotal],
        recent_transactions: list[RecentTransaction],
    ) -> "DashboardSummary":
        balance = income - expenses
        return cls(
            year=year,
            total_income=income,
            total_income_display=cents_to_display(income),
            total_expenses=expenses,
            total_expenses_display=cents_to_display(expenses),
            balance=balance,
            balance_display=cents_to_display(balance),
            monthly_data=monthly_data,
            category_data=category_data,
            recent_transactions=recent_transactions,
        )


class TrendSeries(BaseModel):
    year: int
    months: list[TrendPoint]


class CategoryBreakdown(BaseModel):
    period: str              # CategoryPeriod value actually applied
    since: date              # inclusive window start
    categories: list[CategoryTotal]
