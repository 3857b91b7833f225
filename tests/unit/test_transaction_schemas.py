"""Tests for ft_transaction request/response schemas."""

from datetime import date

import pytest
from pydantic import ValidationError

from src.ft_common.enums import TransactionType
from src.ft_transaction.application.schemas import TransactionResponse, TransactionWriteRequest
from src.ft_transaction.domain.models import Transaction


def _payload(**overrides) -> dict:
    data = {
        "description": "Monthly Salary",
        "amount_cents": 500000,
        "type": "income",
        "category": "Salary",
        "date": "2026-05-01",
    }
    data.update(overrides)
    return data


class TestTransactionWriteRequest:
    def test_valid_income(self) -> None:
        draft = TransactionWriteRequest(**_payload()).to_draft()
        assert draft.amount == 500000
        assert draft.type is TransactionType.INCOME
        assert draft.date == date(2026, 5, 1)

    def test_expense_stored_negative(self) -> None:
        draft = TransactionWriteRequest(**_payload(type="expense", amount_cents=1200)).to_draft()
        assert draft.amount == -1200
        assert draft.type is TransactionType.EXPENSE

    @pytest.mark.parametrize(
        "overrides",
        [
            {"amount_cents": 0},
            {"amount_cents": -5},
            {"type": "refund"},
            {"description": ""},
            {"description": "x" * 256},
            {"category": ""},
            {"category": "c" * 51},
            {"date": "not-a-date"},
        ],
    )
    def test_rejects_invalid(self, overrides: dict) -> None:
        with pytest.raises(ValidationError):
            TransactionWriteRequest(**_payload(**overrides))


class TestTransactionResponse:
    def test_lowercase_type_and_display(self) -> None:
        tx = Transaction(
            id="abc",
            user_id="user-1",
            amount=-4500,
            type=TransactionType.EXPENSE,
            category="Transportation",
            date=date(2026, 3, 9),
            description="Gas Station",
        )
        resp = TransactionResponse.from_domain(tx)
        assert resp.type == "expense"
        assert resp.amount_cents == -4500
        assert resp.amount_display == "-$45.00"
        assert resp.created_at == ""
