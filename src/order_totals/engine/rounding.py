"""Money rounding: two decimal places, half a cent rounds away from zero."""
import math
from decimal import Decimal, ROUND_HALF_UP, localcontext

MONEY_QUANT = Decimal("0.01")


def round_money(value: float) -> float:
    """
    Round a float to cents using round-half-up.

    The float is read through its shortest decimal representation, so
    2.675 rounds to 2.68 rather than to the 2.67 its binary value implies.
    Non-finite values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    amount = Decimal(str(value))
    with localcontext() as ctx:
        # Integer digits plus two cents must fit in the context precision
        ctx.prec = max(28, amount.adjusted() + 4)
        rounded = amount.quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)
    # float(Decimal("-0.00")) is -0.0
    return float(rounded) + 0.0
