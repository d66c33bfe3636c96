"""Reduction of the 3-hourly forecast series to one point per day."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from cityweather.utils.formatting import round_half_up
from cityweather.weather.models import ForecastPoint, ForecastSample

# OpenWeather's forecast is spaced 3 hours apart: 8 samples ≈ 24 hours.
SAMPLES_PER_DAY: Final = 8


class ForecastReducer:
    """Down-samples a raw forecast series into daily points.

    Keeps every 8th sample starting from the first one and rounds its
    temperature to the nearest integer. The sample's local calendar day
    becomes the point's date. Stateless; the same input always yields the
    same output.
    """

    def __init__(self, step: int = SAMPLES_PER_DAY) -> None:
        if step < 1:
            raise ValueError("step must be positive")
        self.step = step

    def reduce(self, samples: Sequence[ForecastSample]) -> list[ForecastPoint]:
        """Reduce ``samples`` to ``ceil(len(samples) / step)`` points, oldest first."""
        return [
            ForecastPoint(date=s.dt.date(), temperature=round_half_up(s.temp))
            for s in samples[:: self.step]
        ]
