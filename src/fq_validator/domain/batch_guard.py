"""Batch homogeneity check.

Every quote in one validation call competes for the same listing, so they
must all offer the same maker token. A mixed batch is a caller bug and is
denied as a whole.
"""

import logging
from collections.abc import Sequence

from src.fq_quote.domain.models import Quote

logger = logging.getLogger(__name__)


def resolve_maker_token(quotes: Sequence[Quote]) -> str | None:
    """Return the single maker token address of the batch, or None if mixed/empty."""
    tokens = {quote.maker_asset_address for quote in quotes}
    if len(tokens) == 1:
        return next(iter(tokens))
    if tokens:
        logger.error(
            "Found multiple maker token addresses within one single RFQ batch: %s. "
            "Rejecting the batch",
            sorted(tokens),
        )
    return None
