"""Weather package - holds API client, models, forecast reducer and custom errors."""

from .api import WeatherClient
from .errors import (
    CityNotFoundError,
    ForecastUnavailableError,
    NetworkError,
    WeatherAPIError,
)
from .forecast import ForecastReducer
from .models import (
    Alert,
    CityQuery,
    Coord,
    ForecastPoint,
    ForecastSample,
    WeatherCondition,
    WeatherSnapshot,
)

# Define what gets imported with: from cityweather.weather import *
__all__ = [
    "Alert",
    "CityNotFoundError",
    "CityQuery",
    "Coord",
    "ForecastPoint",
    "ForecastReducer",
    "ForecastSample",
    "ForecastUnavailableError",
    "NetworkError",
    "WeatherAPIError",
    "WeatherClient",
    "WeatherCondition",
    "WeatherSnapshot",
]
