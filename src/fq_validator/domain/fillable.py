"""Taker fillable amount for a single quote against a known maker balance."""

import logging
from decimal import Decimal

from src.fq_common.amounts import ZERO, mul_div_floor
from src.fq_quote.domain.models import Quote
from src.fq_validator.domain.balances import EffectiveBalance, Unconstrained

logger = logging.getLogger(__name__)


def compute_taker_fillable_amount(quote: Quote, balance: EffectiveBalance) -> Decimal:
    """Scale the quote's taker amount down to what the maker can deliver.

    Rounds down, so the result never exceeds `quote.taker_asset_amount`.
    """
    if isinstance(balance, Unconstrained):
        return quote.taker_asset_amount

    if not balance.value.is_finite():
        logger.error(
            "Maker %s has a non-finite balance %s for token %s. This should never happen",
            quote.maker_address, balance.value, quote.maker_asset_address,
        )
        return ZERO

    # Maker holds 100% of the assets
    if balance.covers(quote.maker_asset_amount):
        return quote.taker_asset_amount

    # Degenerate order, nothing to fill
    if quote.maker_asset_amount <= 0:
        return ZERO

    # Maker holds a fraction of the assets
    return mul_div_floor(balance.value, quote.taker_asset_amount, quote.maker_asset_amount)
