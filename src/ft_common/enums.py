"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class TransactionType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"

    @property
    def label(self) -> str:
        """Lower-cased label used in API payloads: INCOME -> 'income'."""
        return self.value.lower()


class CategoryPeriod(str, Enum):
    """Window for the category breakdown, anchored at today."""
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class ViewKind(str, Enum):
    """Cached view families. The value is the cache key prefix."""
    DASHBOARD = "dashboard"
    TRENDS = "trends"
    CATEGORIES = "categories"
    TRANSACTIONS = "transactions"
    CATEGORY_LABELS = "category_labels"
