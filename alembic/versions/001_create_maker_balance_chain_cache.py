"""001: create maker_balance_chain_cache table

Revision ID: 001
Revises:
Create Date: 2026-10-16
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE maker_balance_chain_cache (
            id                  BIGSERIAL       PRIMARY KEY,
            token_address       VARCHAR(42)     NOT NULL,
            maker_address       VARCHAR(42)     NOT NULL,
            balance             NUMERIC(78, 0),
            time_first_seen     TIMESTAMPTZ,
            time_of_sample      TIMESTAMPTZ,
            CONSTRAINT uq_maker_balance_cache_token_maker UNIQUE (token_address, maker_address),
            CONSTRAINT ck_maker_balance_cache_balance_gte_0 CHECK (balance IS NULL OR balance >= 0)
        );
    """)
    op.execute(
        "CREATE INDEX idx_maker_balance_cache_time_of_sample "
        "ON maker_balance_chain_cache (time_of_sample);"
    )
    op.execute(
        "COMMENT ON TABLE maker_balance_chain_cache IS "
        "'Sampled on-chain maker token balances. Rows registered by the quote validator, "
        "balance/time_of_sample written by the balance sampler';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS maker_balance_chain_cache CASCADE;")
