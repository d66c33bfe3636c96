"""User-configurable settings loaded from config.yaml."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import ClassVar, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, model_validator

# Load environment variables from .env file(s)
load_dotenv()


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class UserSettings(BaseModel):
    """User settings for the weather session.

    Values can be overridden in config.yaml; ``${VAR}`` placeholders are
    replaced from the environment (and any ``.env`` file) before parsing.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("config.yaml"),
        Path("~/.config/cityweather/config.yaml").expanduser(),
        Path("/etc/cityweather/config.yaml"),
    ]

    # Provider settings
    api_key: str = Field(..., min_length=10, description="OpenWeather API key")
    units: Literal["metric", "imperial", "standard"] = "metric"
    base_url: str = Field(
        "https://api.openweathermap.org/data/2.5",
        description="OpenWeather 2.5 base URL",
    )
    request_timeout: float = Field(10.0, gt=0, description="HTTP timeout in seconds")

    # Session settings
    default_city: str = Field("Rabat", min_length=1, description="Fallback city")

    # Favorites persistence
    favorites_file: Path = Field(
        Path("~/.config/cityweather/favorites.json"),
        description="JSON file holding the favorites record",
    )
    favorites_key: str = Field("favoritesCities", min_length=1)

    # Geolocation
    geolocation: Literal["ip", "fixed", "off"] = "ip"
    geolocation_url: str = Field(
        "http://ip-api.com/json/", description="IP geolocation endpoint"
    )
    lat: float | None = Field(None, ge=-90, le=90, description="Latitude for fixed mode")
    lon: float | None = Field(None, ge=-180, le=180, description="Longitude for fixed mode")

    # ---- validators ----
    @model_validator(mode="after")
    def check_fixed_location(self) -> UserSettings:
        if (self.lat is None) != (self.lon is None):
            raise ValueError("lat and lon must be given together")
        if self.geolocation == "fixed" and self.lat is None:
            raise ValueError("geolocation 'fixed' requires lat and lon")
        return self

    # ---- convenience methods ----
    @property
    def favorites_path(self) -> Path:
        """Favorites file with ``~`` expanded."""
        return self.favorites_file.expanduser()

    @property
    def temperature_unit(self) -> str:
        """Display suffix for temperatures in the configured units."""
        return {"metric": "°C", "imperial": "°F", "standard": "K"}[self.units]

    @property
    def speed_unit(self) -> str:
        return "mph" if self.units == "imperial" else "m/s"

    @classmethod
    def load(cls, path: Path | None = None) -> UserSettings:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Validated UserSettings object

        Raises:
            FileNotFoundError: If no config file is found
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        # Try to find config file
        if path is None:
            # Check environment variable first
            env_path = os.environ.get("CITYWEATHER_CONFIG")
            if env_path:
                path = Path(env_path)
                if not path.exists():
                    raise FileNotFoundError(
                        f"Config file from CITYWEATHER_CONFIG not found: {path}"
                    )
            else:
                # Try default paths
                for default_path in cls.DEFAULT_CONFIG_PATHS:
                    if default_path.exists():
                        path = default_path
                        break
                else:
                    raise FileNotFoundError(
                        "No configuration file found. Create config.yaml or set CITYWEATHER_CONFIG."
                    )

        # Load and parse config
        import yaml  # local import to avoid hard dep for callers

        try:
            raw = _interpolate_env(path.read_text())
            data = yaml.safe_load(raw)
        except (OSError, yaml.YAMLError) as exc:
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data or {})
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err
