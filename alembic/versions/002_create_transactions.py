"""002: create transactions table

Revision ID: 002
Revises: 001
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE transactions (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id         VARCHAR(64)     NOT NULL,
            description     VARCHAR(255)    NOT NULL,
            amount          BIGINT          NOT NULL,
            type            VARCHAR(10)     NOT NULL,
            category        VARCHAR(50)     NOT NULL,
            date            DATE            NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_transactions_type CHECK (type IN ('INCOME', 'EXPENSE')),
            CONSTRAINT ck_transactions_sign CHECK (
                (type = 'INCOME' AND amount >= 0) OR (type = 'EXPENSE' AND amount <= 0)
            )
        );
    """)
    op.execute(
        "CREATE INDEX idx_transactions_user_date ON transactions (user_id, date DESC);"
    )
    op.execute("""
        CREATE TRIGGER trg_transactions_updated_at
            BEFORE UPDATE ON transactions
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute(
        "COMMENT ON TABLE transactions IS 'Income/expense records; amount in signed cents';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS transactions CASCADE;")
