"""Domain models for ft_transaction — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import date, datetime

from src.ft_common.enums import TransactionType


@dataclass
class Transaction:
    id: str
    user_id: str
    amount: int                  # cents, positive=income negative=expense
    type: TransactionType
    category: str
    date: date
    description: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class TransactionDraft:
    """Validated write payload; ``amount`` is already signed for storage."""
    description: str
    amount: int                  # cents, signed by type
    type: TransactionType
    category: str
    date: date
