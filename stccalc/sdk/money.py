"""Cent rounding for dollar line items."""

from decimal import Decimal, ROUND_HALF_UP, localcontext

CENT = Decimal("0.01")

# Enough digits for any finite float quantized to cents
PRECISION = 400


def round_money(amount: float) -> float:
    """Round a dollar amount to the nearest cent, ties away from zero.

    Rounds the decimal value the float prints as, so 2.005 becomes 2.01
    even though its binary value is slightly below 2.005.

    Example: 394.665 -> 394.67, -2.005 -> -2.01
    """
    with localcontext() as ctx:
        ctx.prec = PRECISION
        return float(Decimal(repr(float(amount))).quantize(CENT, rounding=ROUND_HALF_UP))
