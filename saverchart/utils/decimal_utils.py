"""Currency rounding helpers."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def round_currency(value: Decimal) -> Decimal:
    """Round an amount to whole cents.

    Halves round away from zero, so 0.005 becomes 0.01 and -0.005
    becomes -0.01.

    Args:
        value: Amount to round.

    Returns:
        Decimal: Amount with exactly two decimal places.
    """
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


__all__ = ["CENT", "round_currency"]
