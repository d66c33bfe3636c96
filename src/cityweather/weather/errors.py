"""Exception classes for weather API interactions.

This module defines a hierarchy of exception classes for handling
various error conditions when talking to OpenWeather.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class WeatherAPIError(Exception):
    """Error during OpenWeather API request or response parsing.

    Includes the HTTP status code (0 when no response was received), a
    human-readable message and the raw response body when available.
    """

    def __init__(
        self, code: int, message: str, response: Optional[Dict[str, Any]] = None
    ) -> None:
        """Initialize the exception.

        Args:
            code: HTTP status code or custom error code
            message: Human-readable error message
            response: Optional raw API response for debugging
        """
        super().__init__(f"[{code}] {message}")
        self.code: int = code
        self.message: str = message
        self.response: Optional[Dict[str, Any]] = response

    @property
    def is_server_error(self) -> bool:
        """Check if this is a server-side error (5xx).

        Returns:
            True for 500-599 status codes
        """
        return self.code >= 500


class NetworkError(WeatherAPIError):
    """Raised when a network issue prevents API communication."""

    def __init__(
        self, message: str, original_error: Optional[Exception] = None
    ) -> None:
        """Initialize with network error details.

        Args:
            message: Description of the network error
            original_error: The original exception that was caught
        """
        super().__init__(0, message)
        self.original_error = original_error


class CityNotFoundError(WeatherAPIError):
    """Raised when current conditions cannot be found for a query.

    Covers any non-2xx answer as well as an empty or unparseable body.
    """


class ForecastUnavailableError(WeatherAPIError):
    """Raised when the forecast endpoint fails or returns malformed data."""
