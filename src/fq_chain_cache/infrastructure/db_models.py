"""SQLAlchemy ORM models for fq_chain_cache.

These map to existing tables created by Alembic migrations.
DO NOT add/remove columns here without a corresponding migration.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, CheckConstraint, DateTime, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.fq_common.database import Base


class MakerBalanceChainCacheORM(Base):
    __tablename__ = "maker_balance_chain_cache"
    __table_args__ = (
        UniqueConstraint(
            "token_address", "maker_address", name="uq_maker_balance_cache_token_maker"
        ),
        CheckConstraint(
            "balance IS NULL OR balance >= 0", name="ck_maker_balance_cache_balance_gte_0"
        ),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    token_address: Mapped[str] = mapped_column(String(42), nullable=False)
    maker_address: Mapped[str] = mapped_column(String(42), nullable=False)
    balance: Mapped[Decimal | None] = mapped_column(Numeric(78, 0), nullable=True)
    time_first_seen: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    # NOTE: written only by the balance sampler, always together with balance
    time_of_sample: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
