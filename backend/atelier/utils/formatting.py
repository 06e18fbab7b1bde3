"""Display formatting for amounts."""

import math
from decimal import Decimal, ROUND_HALF_UP


def format_clp(value: float) -> str:
    """
    Format an amount as Chilean pesos: "$1.234.567", "-$25.000".

    Pesos carry no decimals; fractional amounts are rounded half away from
    zero for display only. NaN and infinities are shown as "$0".
    """
    if not math.isfinite(value):
        value = 0.0
    rounded = int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,}".replace(",", ".")
