"""
Rounding helpers.

Integer-valued outputs (RUL, component health, thrust, costs) round
halves up, e.g. 4.5 -> 5 and 10.5 -> 11, unlike the built-in ``round``
which rounds halves to the nearest even integer.
"""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +inf.

    Args:
        value: Value to round

    Returns:
        Rounded integer
    """
    return int(math.floor(value + 0.5))
