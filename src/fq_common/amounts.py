"""Exact arithmetic for token base-unit amounts.

Amounts and balances are Decimal end to end (Postgres NUMERIC(78, 0) comes
back from asyncpg as Decimal). Never float.
"""

import math
from decimal import Decimal
from fractions import Fraction

ZERO = Decimal(0)


def parse_amount(value: str | int | Decimal) -> Decimal:
    """Parse a non-negative integral base-unit amount. Raises ValueError otherwise."""
    if isinstance(value, bool):
        raise ValueError(f"Amount must be a number, got {value!r}")
    try:
        amount = Decimal(value)
    except ArithmeticError as exc:
        raise ValueError(f"Amount is not a number: {value!r}") from exc
    if not amount.is_finite() or amount < 0 or amount != amount.to_integral_value():
        raise ValueError(f"Amount must be a non-negative integer, got {value!r}")
    return amount


def mul_div_floor(a: Decimal, b: Decimal, c: Decimal) -> Decimal:
    """floor(a * b / c) with no intermediate rounding.

    Decimal multiplication and division round to the context precision
    (28 digits by default), which is too small for uint256 amounts, so the
    computation goes through Fraction. Operands must be finite and c > 0.
    """
    if c <= 0:
        raise ValueError(f"Divisor must be positive, got {c}")
    return Decimal(math.floor(Fraction(a) * Fraction(b) / Fraction(c)))
