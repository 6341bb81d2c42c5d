"""MakerBalanceCacheRepository — concrete implementation of MakerBalanceCacheRepositoryProtocol.

All queries use raw text() SQL (no ORM).
Registration relies on the (token_address, maker_address) unique constraint:
concurrent inserts of the same key resolve to a single row and the losers
become no-ops instead of errors.

Transaction ownership: The CALLER (application service) commits or rolls back.
"""

import logging
from collections.abc import Collection

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.fq_chain_cache.domain.models import MakerBalanceCacheEntry

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_FIND_SQL = text("""
    SELECT token_address, maker_address, balance, time_first_seen, time_of_sample
    FROM maker_balance_chain_cache
    WHERE token_address = :token_address
      AND maker_address = ANY(:maker_addresses)
""")

_INSERT_IF_ABSENT_SQL = text("""
    INSERT INTO maker_balance_chain_cache (token_address, maker_address, time_first_seen)
    SELECT :token_address, maker_address, NOW()
    FROM unnest(CAST(:maker_addresses AS VARCHAR[])) AS t(maker_address)
    ON CONFLICT (token_address, maker_address) DO NOTHING
    RETURNING maker_address
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_entry(row: object) -> MakerBalanceCacheEntry:
    return MakerBalanceCacheEntry(
        token_address=row.token_address,  # type: ignore[attr-defined]
        maker_address=row.maker_address,  # type: ignore[attr-defined]
        balance=row.balance,  # type: ignore[attr-defined]
        time_first_seen=row.time_first_seen,  # type: ignore[attr-defined]
        time_of_sample=row.time_of_sample,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

class MakerBalanceCacheRepository:
    """Concrete repository — one read query, one insert-if-absent write."""

    async def find(
        self,
        db: AsyncSession,
        token_address: str,
        maker_addresses: Collection[str],
    ) -> list[MakerBalanceCacheEntry]:
        if not maker_addresses:
            return []
        result = await db.execute(
            _FIND_SQL,
            {"token_address": token_address, "maker_addresses": list(maker_addresses)},
        )
        rows = result.fetchall()
        logger.debug(
            "Cache lookup: token=%s makers=%d rows=%d",
            token_address, len(maker_addresses), len(rows),
        )
        return [_row_to_entry(row) for row in rows]

    async def insert_if_absent(
        self,
        db: AsyncSession,
        token_address: str,
        maker_addresses: Collection[str],
    ) -> int:
        """Register unseen (token, maker) keys. Returns the number of new rows.

        Keys are bound in sorted order so concurrent multi-row inserts take
        row locks in the same order and cannot deadlock each other.
        """
        if not maker_addresses:
            return 0
        result = await db.execute(
            _INSERT_IF_ABSENT_SQL,
            {"token_address": token_address, "maker_addresses": sorted(maker_addresses)},
        )
        return len(result.fetchall())
