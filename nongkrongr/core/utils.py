"""Small shared helpers."""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up, unlike the built-in banker's ``round``."""
    exponent = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP))
