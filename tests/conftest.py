import threading
from collections.abc import Callable
from typing import Any

import pytest

from cityweather.settings.user import UserSettings
from cityweather.weather.errors import CityNotFoundError, WeatherAPIError
from cityweather.weather.models import (
    Alert,
    CityQuery,
    Coord,
    ForecastResponse,
    ForecastSample,
    WeatherSnapshot,
)

# 2024-05-03 12:00 UTC
FORECAST_START = 1714737600
THREE_HOURS = 3 * 3600


def current_payload(
    name: str = "Rabat",
    temp: float = 21.4,
    lat: float = 34.0133,
    lon: float = -6.8326,
    **overrides: Any,
) -> dict[str, Any]:
    """Build an OpenWeather /weather response body."""
    payload: dict[str, Any] = {
        "coord": {"lon": lon, "lat": lat},
        "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
        "base": "stations",
        "main": {
            "temp": temp,
            "feels_like": temp - 0.4,
            "temp_min": temp - 1.3,
            "temp_max": temp + 1.4,
            "pressure": 1016,
            "humidity": 60,
        },
        "visibility": 10000,
        "wind": {"speed": 4.12, "deg": 300},
        "clouds": {"all": 0},
        "dt": 1714728000,
        "sys": {"country": "MA", "sunrise": 1714714200, "sunset": 1714763400},
        "timezone": 3600,
        "id": 2538475,
        "name": name,
        "cod": 200,
    }
    payload.update(overrides)
    return payload


def forecast_payload(count: int = 40, base_temp: float = 18.0) -> dict[str, Any]:
    """Build an OpenWeather /forecast response body with ``count`` 3-hour steps."""
    return {
        "cod": "200",
        "cnt": count,
        "list": [
            {"dt": FORECAST_START + i * THREE_HOURS, "main": {"temp": base_temp + i * 0.1}}
            for i in range(count)
        ],
        "city": {"name": "Rabat", "country": "MA", "timezone": 3600},
    }


def alerts_payload() -> dict[str, Any]:
    return {
        "lat": 34.0133,
        "lon": -6.8326,
        "alerts": [
            {
                "sender_name": "DGM Maroc",
                "event": "Strong wind warning",
                "start": 1714730000,
                "end": 1714780000,
                "description": "Gusts up to 70 km/h expected.",
                "tags": ["Wind"],
            }
        ],
    }


def make_snapshot(name: str = "Rabat", temp: float = 21.4, **kwargs: Any) -> WeatherSnapshot:
    return WeatherSnapshot.model_validate(current_payload(name=name, temp=temp, **kwargs))


def make_samples(count: int = 40, base_temp: float = 18.0) -> list[ForecastSample]:
    return ForecastResponse.model_validate(forecast_payload(count, base_temp)).localized()


def make_alerts() -> list[Alert]:
    return [Alert.model_validate(a) for a in alerts_payload()["alerts"]]


class FakeWeatherClient:
    """Stand-in for WeatherClient that answers from dictionaries.

    ``gates`` maps a city name (or ``"forecast:<city>"``) to a threading.Event
    the call waits on, to control completion order across triggers.
    """

    def __init__(
        self,
        snapshots: dict[str, WeatherSnapshot] | None = None,
        forecasts: dict[str, list[ForecastSample]] | None = None,
        alerts: list[Alert] | None = None,
        coord_snapshot: WeatherSnapshot | None = None,
        errors: dict[str, WeatherAPIError] | None = None,
        forecast_error: WeatherAPIError | None = None,
        alerts_error: WeatherAPIError | None = None,
        gates: dict[str, threading.Event] | None = None,
    ) -> None:
        self.snapshots = snapshots or {}
        self.forecasts = forecasts or {}
        self.alerts = alerts or []
        self.coord_snapshot = coord_snapshot
        self.errors = errors or {}
        self.forecast_error = forecast_error
        self.alerts_error = alerts_error
        self.gates = gates or {}
        self.current_calls: list[CityQuery] = []
        self.forecast_calls: list[CityQuery] = []
        self.alert_calls: list[Coord] = []

    def _wait(self, key: str) -> None:
        gate = self.gates.get(key)
        if gate is not None:
            assert gate.wait(timeout=5), f"gate {key} never opened"

    def fetch_current(self, query: CityQuery) -> WeatherSnapshot:
        self.current_calls.append(query)
        if query.coord is not None:
            if self.coord_snapshot is None:
                raise CityNotFoundError(404, "nothing here")
            return self.coord_snapshot
        assert query.name is not None
        self._wait(query.name)
        if query.name in self.errors:
            raise self.errors[query.name]
        if query.name not in self.snapshots:
            raise CityNotFoundError(404, "city not found")
        return self.snapshots[query.name]

    def fetch_forecast_raw(self, query: CityQuery) -> list[ForecastSample]:
        self.forecast_calls.append(query)
        self._wait(f"forecast:{query.name}")
        if self.forecast_error is not None:
            raise self.forecast_error
        return self.forecasts.get(query.name or "", [])

    def fetch_alerts(self, coord: Coord) -> list[Alert]:
        self.alert_calls.append(coord)
        if self.alerts_error is not None:
            raise self.alerts_error
        return self.alerts


@pytest.fixture
def config(tmp_path) -> UserSettings:
    return UserSettings(
        api_key="fake-api-key",
        units="metric",
        default_city="Rabat",
        favorites_file=tmp_path / "favorites.json",
        geolocation="fixed",
        lat=34.0133,
        lon=-6.8326,
    )


@pytest.fixture
def snapshot_factory() -> Callable[..., WeatherSnapshot]:
    return make_snapshot


@pytest.fixture
def samples_factory() -> Callable[..., list[ForecastSample]]:
    return make_samples
