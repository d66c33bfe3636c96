"""Device position providers.

A provider reads the current position once; there is no continuous tracking.
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import Final, Protocol, runtime_checkable

import requests
from requests.exceptions import RequestException
from typing_extensions import TypedDict

from cityweather.settings import UserSettings
from cityweather.weather.models import Coord

from .errors import GeolocationDenied, GeolocationUnavailable

logger: Final = logging.getLogger(__name__)


class IpLocationResponse(TypedDict, total=False):
    """Response structure for IP geolocation endpoints."""

    status: str
    message: str
    lat: float
    lon: float
    city: str


@runtime_checkable
class LocationProvider(Protocol):
    """Protocol for obtaining the device coordinates."""

    def locate(self) -> Coord:
        """Read the current position.

        Returns:
            Coordinates of the device

        Raises:
            GeolocationDenied: When access to the position is refused
            GeolocationUnavailable: When no position can be determined
        """
        ...


class HttpLocationProvider:
    """Locates the device from its public IP address."""

    def __init__(self, url: str, timeout: float = 5.0) -> None:
        """Initialize with URL to query.

        Args:
            url: IP geolocation endpoint returning ``lat``/``lon``
            timeout: Timeout for HTTP request in seconds
        """
        # Validate URL
        parsed = urllib.parse.urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"Invalid URL: {url}")

        self.url = url
        self.timeout = timeout

    def locate(self) -> Coord:
        try:
            resp = requests.get(self.url, timeout=self.timeout)
        except RequestException as exc:
            logger.debug("geolocation: request failed (%s)", exc)
            raise GeolocationUnavailable(f"Location service unreachable: {exc}", exc) from exc

        if resp.status_code in (401, 403):
            raise GeolocationDenied(f"Location service refused access (HTTP {resp.status_code})")
        if resp.status_code != 200:
            logger.debug("geolocation: HTTP %s from %s", resp.status_code, self.url)
            raise GeolocationUnavailable(f"Location service answered HTTP {resp.status_code}")

        try:
            data: IpLocationResponse = resp.json()  # type: ignore[assignment]
            if not isinstance(data, dict):
                raise GeolocationUnavailable(f"Unexpected location response: {data!r}")
            if data.get("status", "success") != "success":
                raise GeolocationUnavailable(data.get("message", "Location lookup failed"))
            return Coord(lat=data["lat"], lon=data["lon"])
        except (ValueError, KeyError, TypeError) as exc:  # JSON parse / missing fields
            raise GeolocationUnavailable(f"Unusable location response: {exc}", exc) from exc


class FixedLocationProvider:
    """Provider that always reports a configured position."""

    def __init__(self, lat: float, lon: float) -> None:
        self.coord = Coord(lat=lat, lon=lon)

    def locate(self) -> Coord:
        return self.coord


class DisabledLocationProvider:
    """Provider for users who opted out of geolocation."""

    def locate(self) -> Coord:
        raise GeolocationDenied("Geolocation is disabled in the configuration")


# Factory function to create appropriate provider
def create_location_provider(config: UserSettings) -> LocationProvider:
    """Create a location provider based on configuration.

    Args:
        config: User settings selecting ``ip``, ``fixed`` or ``off``

    Returns:
        A LocationProvider implementation
    """
    if config.geolocation == "fixed":
        assert config.lat is not None and config.lon is not None
        return FixedLocationProvider(config.lat, config.lon)
    if config.geolocation == "off":
        return DisabledLocationProvider()
    return HttpLocationProvider(config.geolocation_url, timeout=config.request_timeout)
