"""Domain models for fq_chain_cache — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class MakerBalanceCacheEntry:
    """One cached (token, maker) balance sample.

    Rows are registered with only `time_first_seen`; the external sampler
    later fills `balance` and `time_of_sample` together.
    """

    token_address: str
    maker_address: str
    balance: Decimal | None = None         # token base units
    time_first_seen: datetime | None = None
    time_of_sample: datetime | None = None

    @property
    def is_sampled(self) -> bool:
        return self.time_of_sample is not None
