"""Numeric helpers."""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 2) -> float:
    """Round ``value`` half away from zero.

    ``round()`` uses banker's rounding on the binary float, which turns
    ``2.675`` into ``2.67``. Money is rounded from the decimal repr instead.

    Parameters
    ----------
    value : float
        Value to round
    places : int, optional
        Decimal places, by default 2

    Returns
    -------
    float
        Rounded value
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
