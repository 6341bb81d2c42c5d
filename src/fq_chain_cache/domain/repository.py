"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from collections.abc import Collection
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.fq_chain_cache.domain.models import MakerBalanceCacheEntry


class MakerBalanceCacheRepositoryProtocol(Protocol):
    async def find(
        self,
        db: AsyncSession,
        token_address: str,
        maker_addresses: Collection[str],
    ) -> list[MakerBalanceCacheEntry]: ...

    async def insert_if_absent(
        self,
        db: AsyncSession,
        token_address: str,
        maker_addresses: Collection[str],
    ) -> int: ...
