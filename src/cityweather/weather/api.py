"""Weather API client for OpenWeather."""

from __future__ import annotations

import logging
from typing import Any, Final

import requests
from pydantic import ValidationError

from cityweather.settings import UserSettings

from .errors import (
    CityNotFoundError,
    ForecastUnavailableError,
    NetworkError,
    WeatherAPIError,
)
from .models import (
    Alert,
    AlertsResponse,
    CityQuery,
    Coord,
    ForecastResponse,
    ForecastSample,
    WeatherSnapshot,
)

logger: Final = logging.getLogger(__name__)

# Human‑readable explanations for common HTTP errors
HTTP_ERROR_MAP: Final = {
    400: "Bad request - check city name or coordinates",
    401: "Invalid or missing API key",
    403: "Account blocked / key revoked",
    404: "City not found",
    429: "Rate limit exceeded",
    500: "OpenWeather internal error",
    502: "Bad gateway at OpenWeather",
    503: "Service unavailable (maintenance)",
    504: "Gateway timeout",
}


class WeatherClient:
    """OpenWeather client for current conditions, forecast and alerts.

    Each fetch is a single GET and is safe to repeat; no retries are
    attempted here. Raw JSON is validated into the typed models of
    :mod:`cityweather.weather.models`.
    """

    def __init__(self, config: UserSettings, session: requests.Session | None = None) -> None:
        """Initialize the weather API client.

        Args:
            config: Settings with API key, units, base URL and timeout
            session: Optional requests session to reuse connections
        """
        self.config = config
        self.timeout = config.request_timeout
        self.base_url = config.base_url.rstrip("/")
        self._http = session

    # ---- public API ----
    def fetch_current(self, query: CityQuery) -> WeatherSnapshot:
        """Retrieve current conditions for a city name or coordinate.

        Raises:
            CityNotFoundError: Non-2xx answer or empty/unparseable body
            NetworkError: When network connectivity issues occur
        """
        resp = self._get("weather", query.to_params())
        if not _is_success(resp):
            raise CityNotFoundError(resp.status_code, self._error_message(resp))

        try:
            snapshot = WeatherSnapshot.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            logger.warning("Unusable current-conditions body for %s: %s", query, exc)
            raise CityNotFoundError(resp.status_code, f"No weather data for {query}") from exc

        logger.debug("Current conditions for %s: %s, %s", query, snapshot.name, snapshot.temp)
        return snapshot

    def fetch_forecast_raw(self, query: CityQuery) -> list[ForecastSample]:
        """Retrieve the 3-hourly forecast series, oldest first.

        Raises:
            ForecastUnavailableError: Non-2xx answer or malformed body
            NetworkError: When network connectivity issues occur
        """
        resp = self._get("forecast", query.to_params())
        if not _is_success(resp):
            raise ForecastUnavailableError(resp.status_code, self._error_message(resp))

        try:
            forecast = ForecastResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise ForecastUnavailableError(
                resp.status_code, f"Malformed forecast for {query}"
            ) from exc

        return forecast.localized()

    def fetch_alerts(self, coord: Coord) -> list[Alert]:
        """Retrieve active alerts around ``coord``.

        Alerts are best-effort: any failure is logged and yields an empty list.
        """
        params = {
            "lat": coord.lat,
            "lon": coord.lon,
            "exclude": "current,minutely,hourly,daily",
        }
        try:
            resp = self._get("onecall", params)
            if not _is_success(resp):
                logger.info("Alerts API error: %s", resp.status_code)
                return []
            return AlertsResponse.model_validate(resp.json()).alerts
        except (WeatherAPIError, ValueError, ValidationError) as exc:
            # Don't fail the whole request if alerts are unavailable
            logger.info("Could not fetch alerts: %s", exc)
            return []

    # ---- private helpers ----
    def _get(self, endpoint: str, params: dict[str, Any]) -> requests.Response:
        url = f"{self.base_url}/{endpoint}"
        full_params = {**params, "units": self.config.units, "appid": self.config.api_key}
        getter = self._http.get if self._http is not None else requests.get
        try:
            return getter(url, params=full_params, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Weather API network error (%s): %s", endpoint, exc)
            raise NetworkError(f"Network error: {exc}", exc) from exc

    @staticmethod
    def _error_message(resp: requests.Response) -> str:
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            msg = str(body["message"])
        else:
            msg = HTTP_ERROR_MAP.get(resp.status_code, resp.text)
        logger.error("Weather API error: %s - %s", resp.status_code, msg)
        return msg


def _is_success(resp: requests.Response) -> bool:
    return 200 <= resp.status_code < 300
