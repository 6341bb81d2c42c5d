"""Integration-test fixtures.

Requires a reachable Postgres at settings.DATABASE_URL (docker compose up).
The maker_balance_chain_cache table is created from the ORM mapping if the
migrations have not been applied, and truncated before every test. Tests are
skipped when the database cannot be reached.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import settings
from src.fq_chain_cache.infrastructure.db_models import MakerBalanceChainCacheORM


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    eng = create_async_engine(settings.DATABASE_URL)
    try:
        async with eng.begin() as conn:
            await conn.run_sync(
                MakerBalanceChainCacheORM.__table__.create, checkfirst=True
            )
            await conn.execute(text("TRUNCATE maker_balance_chain_cache"))
    except (SQLAlchemyError, OSError) as exc:
        await eng.dispose()
        pytest.skip(f"Postgres not reachable at {settings.DATABASE_URL}: {exc}")
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as s:
        yield s
