"""FirmQuoteValidator — prices a batch of RFQ quotes against cached maker balances.

Flow per call:
  1. all quotes must share one maker token, otherwise every quote gets 0
  2. one cache read for (token, distinct makers)
  3. cache entries -> effective balances, judged against a single `now`
  4. per quote fillable amount, input order preserved
  5. makers with no cache entry at all are registered for sampling

The caller owns the session and its transaction. A failed cache read
propagates as CacheUnavailableError; a failed registration is logged, rolled
back to its savepoint and never changes the amounts already computed.
"""

import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timedelta
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.fq_chain_cache.domain.repository import MakerBalanceCacheRepositoryProtocol
from src.fq_chain_cache.infrastructure.persistence import MakerBalanceCacheRepository
from src.fq_common.amounts import ZERO
from src.fq_common.database import async_session_factory
from src.fq_common.datetime_utils import utc_now
from src.fq_common.errors import CacheUnavailableError
from src.fq_quote.domain.models import Quote
from src.fq_validator.domain.balances import classify_entries
from src.fq_validator.domain.batch_guard import resolve_maker_token
from src.fq_validator.domain.fillable import compute_taker_fillable_amount

logger = logging.getLogger(__name__)


class FirmQuoteValidator:
    def __init__(
        self,
        repo: MakerBalanceCacheRepositoryProtocol | None = None,
        threshold: timedelta | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repo: MakerBalanceCacheRepositoryProtocol = repo or MakerBalanceCacheRepository()
        if threshold is None:
            threshold = timedelta(seconds=settings.CACHE_EXPIRY_THRESHOLD_SECONDS)
        self._threshold = threshold
        self._clock = clock

    @property
    def threshold(self) -> timedelta:
        return self._threshold

    async def get_taker_fillable_amounts(
        self, db: AsyncSession, quotes: Sequence[Quote]
    ) -> list[Decimal]:
        if not quotes:
            return []

        token_address = resolve_maker_token(quotes)
        if token_address is None:
            return [ZERO for _ in quotes]

        # dict keeps first-seen order, so queries and logs are deterministic
        maker_addresses = list(dict.fromkeys(quote.maker_address for quote in quotes))

        try:
            entries = await self._repo.find(db, token_address, maker_addresses)
        except (SQLAlchemyError, OSError) as exc:
            raise CacheUnavailableError(token_address, str(exc)) from exc

        balances = classify_entries(entries, self._clock(), self._threshold)

        unknown_makers: dict[str, None] = {}
        amounts: list[Decimal] = []
        for quote in quotes:
            balance = balances.get(quote.maker_address)
            if balance is None:
                # Never observed: fill optimistically and let the sampler catch up
                unknown_makers[quote.maker_address] = None
                amounts.append(quote.taker_asset_amount)
                continue
            amounts.append(compute_taker_fillable_amount(quote, balance))

        if unknown_makers:
            await self._register_makers(db, token_address, list(unknown_makers))
        return amounts

    async def _register_makers(
        self, db: AsyncSession, token_address: str, maker_addresses: list[str]
    ) -> None:
        """Best effort: web workers race on the same keys, conflicts are no-ops.

        The insert runs in a savepoint so a failure only undoes the
        registration, never other work pending in the caller's transaction.
        Committing is left to whoever owns the session.
        """
        logger.info(
            "Adding new addresses to cache for token %s: %s", token_address, maker_addresses
        )
        try:
            async with db.begin_nested():
                inserted = await self._repo.insert_if_absent(db, token_address, maker_addresses)
        except (SQLAlchemyError, OSError):
            logger.exception(
                "Failed to register makers %s for token %s", maker_addresses, token_address
            )
            return
        logger.debug(
            "Registered %d of %d makers for token %s",
            inserted, len(maker_addresses), token_address,
        )


async def compute_fillable_amounts(
    quotes: Sequence[Quote], validator: FirmQuoteValidator | None = None
) -> list[Decimal]:
    """Validate `quotes` on a fresh pooled session, released before returning.

    Commits any maker registrations. A failed commit is logged and does not
    change the returned amounts.
    """
    async with async_session_factory() as db:
        amounts = await (validator or FirmQuoteValidator()).get_taker_fillable_amounts(db, quotes)
        try:
            await db.commit()
        except (SQLAlchemyError, OSError):
            logger.exception("Failed to commit maker registrations")
        return amounts
