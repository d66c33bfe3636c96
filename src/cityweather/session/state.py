"""Session state variants published to the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass

from cityweather.common.enums import ErrorKind
from cityweather.weather.models import Alert, CityQuery, ForecastPoint, WeatherSnapshot


@dataclass(frozen=True)
class Idle:
    """No trigger has run yet."""


@dataclass(frozen=True)
class Loading:
    """A fetch is in flight; ``query`` is None while locating the device."""

    query: CityQuery | None


@dataclass(frozen=True)
class Ready:
    """Current conditions are known for ``query``.

    ``forecast`` and ``alerts`` start empty and fill in as their fetches
    complete.
    """

    query: CityQuery
    snapshot: WeatherSnapshot
    forecast: tuple[ForecastPoint, ...] = ()
    alerts: tuple[Alert, ...] = ()


@dataclass(frozen=True)
class Failed:
    """Current conditions could not be fetched for ``query``."""

    query: CityQuery
    error_kind: ErrorKind


SessionState = Idle | Loading | Ready | Failed
