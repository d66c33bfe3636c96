"""Text and number formatting utilities."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going up.

    Python's built-in ``round`` uses banker's rounding (``round(20.5) == 20``),
    which disagrees with what users expect from a temperature readout.

    Args:
        value: Number to round

    Returns:
        Nearest integer, ``x.5`` rounded towards positive infinity
    """
    return math.floor(value + 0.5)


def format_temperature(temp: float, unit: str = "°C") -> str:
    """Format temperature value with unit.

    Args:
        temp: Temperature value
        unit: Temperature unit

    Returns:
        Formatted temperature string
    """
    return f"{round_half_up(temp)}{unit}"
