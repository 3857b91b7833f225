"""TransactionRepository — concrete implementation of TransactionRepositoryProtocol.

Every statement is scoped by ``user_id``; a transaction owned by another user
behaves exactly like a missing one.

Transaction ownership: the CALLER (application service) commits or rolls back.
Driver/database failures are re-raised as RepositoryError: there is no
fallback data source, so they must surface as a hard failure.
"""

import logging
from datetime import date
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.ft_common.enums import TransactionType
from src.ft_common.errors import RepositoryError
from src.ft_transaction.domain.models import Transaction, TransactionDraft

logger = logging.getLogger("ft.transaction")

_COLUMNS = "id, user_id, description, amount, type, category, date, created_at, updated_at"

# CASTs let asyncpg type the NULL-able filter parameters.
_LIST_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM transactions
    WHERE user_id = :user_id
      AND (CAST(:start AS DATE) IS NULL OR date >= CAST(:start AS DATE))
      AND (CAST(:end AS DATE) IS NULL OR date <= CAST(:end AS DATE))
      AND (CAST(:tx_type AS VARCHAR) IS NULL OR type = CAST(:tx_type AS VARCHAR))
    ORDER BY date DESC, created_at DESC
""")

_PAGE_FILTER = """
    WHERE user_id = :user_id
      AND (CAST(:search AS VARCHAR) IS NULL
           OR description ILIKE '%' || CAST(:search AS VARCHAR) || '%')
      AND (CAST(:category AS VARCHAR) IS NULL OR category = CAST(:category AS VARCHAR))
"""

_PAGE_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM transactions
    {_PAGE_FILTER}
    ORDER BY date DESC, created_at DESC
    OFFSET :offset
    LIMIT :limit
""")

_COUNT_SQL = text(f"""
    SELECT COUNT(*) AS total
    FROM transactions
    {_PAGE_FILTER}
""")

_INSERT_SQL = text(f"""
    INSERT INTO transactions (user_id, description, amount, type, category, date)
    VALUES (:user_id, :description, :amount, :type, :category, :date)
    RETURNING {_COLUMNS}
""")

_UPDATE_SQL = text(f"""
    UPDATE transactions
    SET description = :description,
        amount = :amount,
        type = :type,
        category = :category,
        date = :date,
        updated_at = NOW()
    WHERE id = CAST(:id AS UUID) AND user_id = :user_id
    RETURNING {_COLUMNS}
""")

_DELETE_SQL = text("""
    DELETE FROM transactions
    WHERE id = CAST(:id AS UUID) AND user_id = :user_id
    RETURNING id
""")


def _row_to_transaction(row: object) -> Transaction:
    return Transaction(
        id=str(row.id),  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        type=TransactionType(row.type),  # type: ignore[attr-defined]
        category=row.category,  # type: ignore[attr-defined]
        date=row.date,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


def _draft_params(draft: TransactionDraft) -> dict[str, Any]:
    return {
        "description": draft.description,
        "amount": draft.amount,
        "type": draft.type.value,
        "category": draft.category,
        "date": draft.date,
    }


async def _execute(db: AsyncSession, stmt: Any, params: dict[str, Any]) -> Any:
    try:
        return await db.execute(stmt, params)
    except SQLAlchemyError as exc:
        logger.error("Transaction store query failed: %s", exc)
        raise RepositoryError() from exc


class TransactionRepository:
    """Concrete repository — raw SQL over the ``transactions`` table."""

    async def list_transactions(
        self,
        db: AsyncSession,
        user_id: str,
        start: date | None = None,
        end: date | None = None,
        tx_type: TransactionType | None = None,
    ) -> list[Transaction]:
        result = await _execute(
            db,
            _LIST_SQL,
            {
                "user_id": user_id,
                "start": start,
                "end": end,
                "tx_type": tx_type.value if tx_type is not None else None,
            },
        )
        return [_row_to_transaction(r) for r in result.fetchall()]

    async def list_page(
        self,
        db: AsyncSession,
        user_id: str,
        offset: int,
        limit: int,
        search: str | None,
        category: str | None,
    ) -> tuple[list[Transaction], int]:
        params: dict[str, Any] = {
            "user_id": user_id,
            "search": search or None,
            "category": category or None,
        }
        rows = await _execute(db, _PAGE_SQL, {**params, "offset": offset, "limit": limit})
        count = await _execute(db, _COUNT_SQL, params)
        return [_row_to_transaction(r) for r in rows.fetchall()], int(count.scalar_one())

    async def create_transaction(
        self, db: AsyncSession, user_id: str, draft: TransactionDraft
    ) -> Transaction:
        result = await _execute(db, _INSERT_SQL, {"user_id": user_id, **_draft_params(draft)})
        row = result.fetchone()
        if row is None:
            raise RepositoryError("Transaction insert returned no rows")
        return _row_to_transaction(row)

    async def update_transaction(
        self,
        db: AsyncSession,
        user_id: str,
        transaction_id: str,
        draft: TransactionDraft,
    ) -> Transaction | None:
        result = await _execute(
            db,
            _UPDATE_SQL,
            {"id": transaction_id, "user_id": user_id, **_draft_params(draft)},
        )
        row = result.fetchone()
        return _row_to_transaction(row) if row else None

    async def delete_transaction(
        self, db: AsyncSession, user_id: str, transaction_id: str
    ) -> bool:
        result = await _execute(db, _DELETE_SQL, {"id": transaction_id, "user_id": user_id})
        return result.fetchone() is not None
