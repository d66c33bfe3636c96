"""Geolocation: device position providers and reverse lookup to a city."""

from .errors import (
    GeolocationDenied,
    GeolocationError,
    GeolocationUnavailable,
    ReverseLookupFailed,
)
from .providers import (
    DisabledLocationProvider,
    FixedLocationProvider,
    HttpLocationProvider,
    LocationProvider,
    create_location_provider,
)
from .resolver import GeoResolution, GeoResolver

__all__ = [
    "DisabledLocationProvider",
    "FixedLocationProvider",
    "GeoResolution",
    "GeoResolver",
    "GeolocationDenied",
    "GeolocationError",
    "GeolocationUnavailable",
    "HttpLocationProvider",
    "LocationProvider",
    "ReverseLookupFailed",
    "create_location_provider",
]
