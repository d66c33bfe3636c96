"""Common utility functions and helpers for the cityweather package."""

from cityweather.utils.formatting import format_temperature, round_half_up
from cityweather.utils.time import TimeUtils

__all__ = [
    "TimeUtils",
    "format_temperature",
    "round_half_up",
]
