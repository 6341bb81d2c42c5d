"""Unit tests for MakerBalanceCacheRepository using MagicMock AsyncSession."""
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock, MagicMock

from src.fq_chain_cache.domain.models import MakerBalanceCacheEntry
from src.fq_chain_cache.infrastructure.persistence import MakerBalanceCacheRepository

from factories import MAKER_A, MAKER_B, MAKER_C, TOKEN_X


def _make_row(**kwargs: Any) -> MagicMock:
    row = MagicMock()
    row.token_address = kwargs.get("token_address", TOKEN_X)
    row.maker_address = kwargs.get("maker_address", MAKER_A)
    row.balance = kwargs.get("balance", Decimal("40"))
    row.time_first_seen = kwargs.get("time_first_seen", datetime(2026, 1, 1, tzinfo=UTC))
    row.time_of_sample = kwargs.get("time_of_sample", datetime(2026, 1, 1, 0, 1, tzinfo=UTC))
    return row


def _db_returning_rows(rows: list) -> MagicMock:
    db = MagicMock()
    result = MagicMock()
    result.fetchall.return_value = rows
    db.execute = AsyncMock(return_value=result)
    return db


class TestFind:
    async def test_maps_rows_to_entries(self) -> None:
        unsampled = _make_row(maker_address=MAKER_B, balance=None, time_of_sample=None)
        db = _db_returning_rows([_make_row(), unsampled])
        repo = MakerBalanceCacheRepository()

        entries = await repo.find(db, TOKEN_X, [MAKER_A, MAKER_B])

        assert entries[0] == MakerBalanceCacheEntry(
            token_address=TOKEN_X,
            maker_address=MAKER_A,
            balance=Decimal("40"),
            time_first_seen=datetime(2026, 1, 1, tzinfo=UTC),
            time_of_sample=datetime(2026, 1, 1, 0, 1, tzinfo=UTC),
        )
        assert entries[1].maker_address == MAKER_B
        assert entries[1].balance is None
        assert entries[1].is_sampled is False

    async def test_binds_token_and_maker_list(self) -> None:
        db = _db_returning_rows([])
        repo = MakerBalanceCacheRepository()

        await repo.find(db, TOKEN_X, {MAKER_A})

        params = db.execute.call_args[0][1]
        assert params == {"token_address": TOKEN_X, "maker_addresses": [MAKER_A]}

    async def test_returns_empty_when_no_rows(self) -> None:
        db = _db_returning_rows([])
        repo = MakerBalanceCacheRepository()

        assert await repo.find(db, TOKEN_X, [MAKER_A]) == []

    async def test_no_makers_skips_query(self) -> None:
        db = _db_returning_rows([])
        repo = MakerBalanceCacheRepository()

        assert await repo.find(db, TOKEN_X, []) == []
        db.execute.assert_not_called()


class TestInsertIfAbsent:
    async def test_returns_inserted_count(self) -> None:
        # Only MAKER_A was new; MAKER_B hit ON CONFLICT DO NOTHING
        db = _db_returning_rows([MagicMock(maker_address=MAKER_A)])
        repo = MakerBalanceCacheRepository()

        inserted = await repo.insert_if_absent(db, TOKEN_X, [MAKER_A, MAKER_B])

        assert inserted == 1
        params = db.execute.call_args[0][1]
        assert params == {"token_address": TOKEN_X, "maker_addresses": [MAKER_A, MAKER_B]}

    async def test_binds_makers_in_sorted_order(self) -> None:
        db = _db_returning_rows([])
        repo = MakerBalanceCacheRepository()

        await repo.insert_if_absent(db, TOKEN_X, [MAKER_C, MAKER_A, MAKER_B])

        params = db.execute.call_args[0][1]
        assert params["maker_addresses"] == [MAKER_A, MAKER_B, MAKER_C]

    async def test_sql_is_conflict_tolerant(self) -> None:
        db = _db_returning_rows([])
        repo = MakerBalanceCacheRepository()

        await repo.insert_if_absent(db, TOKEN_X, [MAKER_A])

        sql = str(db.execute.call_args[0][0])
        assert "ON CONFLICT (token_address, maker_address) DO NOTHING" in sql
        assert "NOW()" in sql

    async def test_empty_input_is_noop(self) -> None:
        db = _db_returning_rows([])
        repo = MakerBalanceCacheRepository()

        assert await repo.insert_if_absent(db, TOKEN_X, []) == 0
        db.execute.assert_not_called()
