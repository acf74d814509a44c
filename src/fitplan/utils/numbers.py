"""Numeric helpers."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero.

    Python's round() uses banker's rounding, which would turn 2.5 sets
    into 2 instead of 3.
    """
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def round_tenth(value: float) -> float:
    """Round to one decimal place, ties away from zero."""
    return round_half_up(value * 10) / 10


def clamp(value, low, high):
    """Clamp value into [low, high]."""
    return max(low, min(high, value))
