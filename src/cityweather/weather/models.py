"""Typed models for the OpenWeather 2.5 current, forecast and alert payloads.

Only the fields consumed by the session are modelled.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import ClassVar

from pydantic import (
    AliasPath,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from cityweather.models.base import TimeStampModel
from cityweather.utils.formatting import round_half_up
from cityweather.utils.time import TimeUtils

# ─────────────────────────── primitives ──────────────────────────────────────


class Coord(BaseModel):
    """Geographic coordinates (latitude, longitude)."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class WeatherCondition(BaseModel):
    """Weather condition information from OpenWeather."""

    model_config = ConfigDict(frozen=True)

    id: int
    main: str
    description: str
    icon: str


class CityQuery(BaseModel):
    """Target of a fetch: a free-text city name or a coordinate pair.

    Exactly one of ``name`` or ``coord`` is set.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    coord: Coord | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("city name cannot be empty")
        return v

    @model_validator(mode="after")
    def check_exactly_one(self) -> CityQuery:
        if (self.name is None) == (self.coord is None):
            raise ValueError("exactly one of name or coord must be given")
        return self

    @classmethod
    def for_city(cls, name: str) -> CityQuery:
        return cls(name=name)

    @classmethod
    def for_coord(cls, lat: float, lon: float) -> CityQuery:
        return cls(coord=Coord(lat=lat, lon=lon))

    def to_params(self) -> dict[str, str | float]:
        """Query-string parameters selecting this target on OpenWeather."""
        if self.coord is not None:
            return {"lat": self.coord.lat, "lon": self.coord.lon}
        assert self.name is not None
        return {"q": self.name}

    def __str__(self) -> str:
        if self.coord is not None:
            return f"{self.coord.lat:.4f},{self.coord.lon:.4f}"
        return self.name or ""


# ─────────────────────────── current conditions ──────────────────────────────


class WeatherSnapshot(TimeStampModel):
    """Current conditions for one city, parsed from ``/data/2.5/weather``.

    Nested provider fields are flattened with alias paths so the rest of the
    application never touches raw JSON. Instances are immutable; a refresh
    replaces the whole snapshot.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1)
    country: str = Field("", validation_alias=AliasPath("sys", "country"))
    coord: Coord
    temp: float = Field(..., validation_alias=AliasPath("main", "temp"))
    feels_like: float = Field(..., validation_alias=AliasPath("main", "feels_like"))
    temp_min: float = Field(..., validation_alias=AliasPath("main", "temp_min"))
    temp_max: float = Field(..., validation_alias=AliasPath("main", "temp_max"))
    humidity: int = Field(..., validation_alias=AliasPath("main", "humidity"))
    pressure: int = Field(..., validation_alias=AliasPath("main", "pressure"))
    visibility: int | None = None
    wind_speed: float = Field(0.0, validation_alias=AliasPath("wind", "speed"))
    wind_deg: int = Field(0, validation_alias=AliasPath("wind", "deg"))
    wind_gust: float | None = Field(None, validation_alias=AliasPath("wind", "gust"))
    clouds: int = Field(0, validation_alias=AliasPath("clouds", "all"))
    condition: WeatherCondition = Field(..., validation_alias=AliasPath("weather", 0))
    sunrise: datetime = Field(..., validation_alias=AliasPath("sys", "sunrise"))
    sunset: datetime = Field(..., validation_alias=AliasPath("sys", "sunset"))
    timezone_offset: int = Field(0, validation_alias="timezone")

    _validate_sun = TimeStampModel.timestamp_validator("sunrise", "sunset")

    # Wind direction constants
    DIRECTIONS: ClassVar[list[str]] = [
        "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
        "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
    ]

    @property
    def display_temp(self) -> int:
        return round_half_up(self.temp)

    @property
    def display_feels_like(self) -> int:
        return round_half_up(self.feels_like)

    @property
    def display_min(self) -> int:
        return round_half_up(self.temp_min)

    @property
    def display_max(self) -> int:
        return round_half_up(self.temp_max)

    @property
    def visibility_km(self) -> float | None:
        """Visibility in kilometres with one decimal, if reported."""
        if self.visibility is None:
            return None
        return round(self.visibility / 1000, 1)

    @property
    def wind_cardinal(self) -> str:
        """Wind direction on a 16-point compass."""
        return self.DIRECTIONS[int((self.wind_deg % 360) / 22.5 + 0.5) % 16]


# ─────────────────────────── forecast ────────────────────────────────────────


class ForecastSample(TimeStampModel):
    """One raw 3-hour forecast step."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    dt: datetime
    temp: float = Field(..., validation_alias=AliasPath("main", "temp"))

    _validate_dt = TimeStampModel.timestamp_validator("dt")


class ForecastPoint(BaseModel):
    """One reduced forecast value per calendar day."""

    model_config = ConfigDict(frozen=True)

    date: date
    temperature: int


# ─────────────────────────── alerts ──────────────────────────────────────────


class Alert(TimeStampModel):
    """A government weather alert as relayed by OpenWeather."""

    model_config = ConfigDict(frozen=True)

    sender_name: str | None = None
    event: str
    description: str = ""
    start: datetime
    end: datetime
    tags: tuple[str, ...] = ()

    _validate_span = TimeStampModel.timestamp_validator("start", "end")


# ─────────────────────────── top-level responses ─────────────────────────────


class ForecastResponse(BaseModel):
    """Forecast payload from ``/data/2.5/forecast``."""

    samples: list[ForecastSample] = Field(..., validation_alias="list")
    timezone_offset: int = Field(0, validation_alias=AliasPath("city", "timezone"))

    def localized(self) -> list[ForecastSample]:
        """Samples in provider order, shifted into the city's UTC offset."""
        tz = TimeUtils.offset_timezone(self.timezone_offset)
        return [s.model_copy(update={"dt": s.dt.astimezone(tz)}) for s in self.samples]


class AlertsResponse(BaseModel):
    """Alert-only payload from ``/data/2.5/onecall``; ``alerts`` is optional."""

    alerts: list[Alert] = Field(default_factory=list)
