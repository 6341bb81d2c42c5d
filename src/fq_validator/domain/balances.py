"""Effective maker balances derived from cache entries.

Each cache entry is judged against one `now` per validation call:

  unsampled, registered > threshold ago   -> 0             (sampler stuck)
  unsampled, registered recently          -> UNCONSTRAINED (fail open)
  sampled > threshold ago                 -> 0             (sampler stuck)
  sampled recently, balance NULL          -> 0             (anomaly)
  sampled recently                        -> balance

An age equal to the threshold still counts as fresh. Makers with no cache
entry at all are left out of the result; the caller treats them as unknown.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

from src.fq_chain_cache.domain.models import MakerBalanceCacheEntry
from src.fq_common.amounts import ZERO
from src.fq_common.datetime_utils import age_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Unconstrained:
    """Balance not yet sampled; assume the maker can fill anything."""

    def covers(self, required: Decimal) -> bool:
        return True


@dataclass(frozen=True)
class Amount:
    value: Decimal

    def covers(self, required: Decimal) -> bool:
        return self.value >= required


EffectiveBalance = Unconstrained | Amount

UNCONSTRAINED = Unconstrained()
NO_BALANCE = Amount(ZERO)


def classify_entry(
    entry: MakerBalanceCacheEntry, now: datetime, threshold: timedelta
) -> EffectiveBalance:
    if not entry.is_sampled:
        # Registered but never populated by the sampler: either it was added
        # moments ago or the sampler is not keeping up.
        age = age_of(entry.time_first_seen, now)
        if age > threshold:
            logger.error(
                "Cache entry for maker %s and token %s was first added at %s, more than %s ago. "
                "Assuming worker is stuck.",
                entry.maker_address, entry.token_address, entry.time_first_seen, threshold,
            )
            return NO_BALANCE
        logger.warning(
            "Cache entry for maker %s and token %s has not been sampled yet. "
            "It was recently added so assuming the entire taker fillable amount is available",
            entry.maker_address, entry.token_address,
        )
        return UNCONSTRAINED

    if age_of(entry.time_of_sample, now) > threshold:
        logger.error(
            "Cache entry for maker %s and token %s was last refreshed at %s, more than %s ago. "
            "Assuming worker is stuck.",
            entry.maker_address, entry.token_address, entry.time_of_sample, threshold,
        )
        return NO_BALANCE

    if entry.balance is None:
        logger.error(
            "Cache entry for maker %s and token %s has a sample time but a null balance. "
            "This should never happen",
            entry.maker_address, entry.token_address,
        )
        return NO_BALANCE

    return Amount(entry.balance)


def classify_entries(
    entries: Iterable[MakerBalanceCacheEntry], now: datetime, threshold: timedelta
) -> dict[str, EffectiveBalance]:
    """Build the call-scoped maker address -> effective balance lookup."""
    return {entry.maker_address: classify_entry(entry, now, threshold) for entry in entries}
