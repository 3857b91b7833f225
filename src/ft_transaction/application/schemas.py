"""Pydantic schemas for the ft_transaction API."""

import math
from datetime import date as date_type
from typing import Literal

from pydantic import BaseModel, Field

from src.ft_common.cents import cents_to_display, signed_amount
from src.ft_common.enums import TransactionType
from src.ft_transaction.domain.models import Transaction, TransactionDraft

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class TransactionWriteRequest(BaseModel):
    """Body for create and update. The amount is a magnitude; the sign comes from type."""

    description: str = Field(..., min_length=1, max_length=255)
    amount_cents: int = Field(..., gt=0, description="Amount in cents, always positive")
    type: Literal["income", "expense"]
    category: str = Field(..., min_length=1, max_length=50)
    date: date_type

    def to_draft(self) -> TransactionDraft:
        tx_type = TransactionType(self.type.upper())
        return TransactionDraft(
            description=self.description,
            amount=signed_amount(self.amount_cents, tx_type is TransactionType.EXPENSE),
            type=tx_type,
            category=self.category,
            date=self.date,
        )


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class TransactionResponse(BaseModel):
    id: str
    description: str
    amount_cents: int
    amount_display: str
    type: str  # "income" | "expense"
    category: str
    date: date_type
    created_at: str  # ISO8601 string

    @classmethod
    def from_domain(cls, tx: Transaction) -> "TransactionResponse":
        return cls(
            id=tx.id,
            description=tx.description,
            amount_cents=tx.amount,
            amount_display=cents_to_display(tx.amount),
            type=tx.type.label,
            category=tx.category,
            date=tx.date,
            created_at=tx.created_at.isoformat() if tx.created_at else "",
        )


class TransactionPageResponse(BaseModel):
    transactions: list[TransactionResponse]
    total_pages: int
    current_page: int
    total: int

    @classmethod
    def build(
        cls, items: list[Transaction], total: int, page: int, limit: int
    ) -> "TransactionPageResponse":
        return cls(
            transactions=[TransactionResponse.from_domain(t) for t in items],
            total_pages=math.ceil(total / limit),
            current_page=page,
            total=total,
        )


class CategoryLabelsResponse(BaseModel):
    categories: list[str]


class DeleteTransactionResponse(BaseModel):
    id: str
    deleted: bool = True
