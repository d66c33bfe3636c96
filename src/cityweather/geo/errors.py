"""Exceptions raised while locating the device."""

from __future__ import annotations

from typing import Optional


class GeolocationError(Exception):
    """Base class for failures to turn the device position into a city."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class GeolocationDenied(GeolocationError):
    """The user or the location service refused to share a position."""


class GeolocationUnavailable(GeolocationError):
    """No position could be obtained."""


class ReverseLookupFailed(GeolocationError):
    """Coordinates were found but could not be resolved to a city name."""
