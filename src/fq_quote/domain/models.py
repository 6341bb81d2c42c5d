"""Domain models for fq_quote — pure dataclasses, no business logic."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Quote:
    """A maker's signed offer, reduced to the fields fill validation needs.

    `maker_asset_address` is the token address already decoded from the
    order's asset data. Amounts are token base units.
    """

    maker_address: str
    maker_asset_address: str
    maker_asset_amount: Decimal
    taker_asset_amount: Decimal
