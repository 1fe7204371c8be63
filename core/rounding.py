"""
Rounding helpers for load prescriptions.

Part of AMA-512: Mesocycle generation engine

Python's round() uses banker's rounding (round(2.5) == 2). Plate math
needs half-up rounding so 1.5 sets become 2 and 49.5 increments become 50.
"""

import math

from core.constants import WEIGHT_ROUNDING_INCREMENT


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going up."""
    return int(math.floor(value + 0.5))


def round_to_increment(
    value: float,
    increment: float = WEIGHT_ROUNDING_INCREMENT,
) -> float:
    """
    Round a weight to the nearest loadable increment.

    Args:
        value: Raw weight
        increment: Smallest loadable jump (2.5 by default)

    Returns:
        Weight rounded to the nearest multiple of increment
    """
    if increment <= 0:
        raise ValueError(f"Rounding increment must be positive, got {increment}")
    return float(round_half_up(value / increment) * increment)
