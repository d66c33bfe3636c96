"""Turn the device position into a city query."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from cityweather.weather.api import WeatherClient
from cityweather.weather.errors import WeatherAPIError
from cityweather.weather.models import CityQuery, WeatherSnapshot

from .errors import ReverseLookupFailed
from .providers import LocationProvider

logger: Final = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeoResolution:
    """Outcome of a successful lookup.

    ``snapshot`` is the current-conditions answer used for the reverse
    lookup; callers reuse it instead of fetching the same city again.
    """

    query: CityQuery
    snapshot: WeatherSnapshot


class GeoResolver:
    """Reads the device position once and names the city it falls in.

    The reverse lookup goes through OpenWeather's current-conditions endpoint,
    which reports a city name alongside its readings.
    """

    def __init__(self, provider: LocationProvider, client: WeatherClient) -> None:
        self.provider = provider
        self.client = client

    def resolve(self) -> GeoResolution:
        """Locate the device and resolve its city.

        Raises:
            GeolocationDenied: Position access refused
            GeolocationUnavailable: No position available
            ReverseLookupFailed: Position could not be mapped to a city
        """
        coord = self.provider.locate()
        logger.debug("Device located at %s,%s", coord.lat, coord.lon)

        try:
            snapshot = self.client.fetch_current(CityQuery(coord=coord))
        except WeatherAPIError as exc:
            raise ReverseLookupFailed(f"No city found at {coord.lat},{coord.lon}", exc) from exc

        return GeoResolution(query=CityQuery(name=snapshot.name), snapshot=snapshot)
