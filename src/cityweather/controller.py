# filepath: src/cityweather/controller.py
"""Wires settings, provider client, geolocation and favorites into a session."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Final

from cityweather.display.text import TextRenderer
from cityweather.favorites.persistence import JsonFilePersistence, PersistenceAdapter
from cityweather.favorites.store import FavoritesStore
from cityweather.geo.providers import LocationProvider, create_location_provider
from cityweather.geo.resolver import GeoResolver
from cityweather.session.session import WeatherSession
from cityweather.session.state import SessionState
from cityweather.settings.user import UserSettings
from cityweather.weather.api import WeatherClient
from cityweather.weather.models import CityQuery

TEST_CONFIG_YAML = """\
api_key: "test_api_key"
units: metric
default_city: Rabat
geolocation: fixed
lat: 34.0209
lon: -6.8416
"""

logger: Final = logging.getLogger(__name__)


class WeatherController:
    """Builds a WeatherSession from configuration and drives it.

    All collaborators can be injected; anything not supplied is created from
    the loaded settings.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        weather_client: WeatherClient | None = None,
        location_provider: LocationProvider | None = None,
        persistence: PersistenceAdapter | None = None,
        debug: bool = False,
    ):
        """Initialize the controller.

        Args:
            config_path: Path to config.yaml (default search when None)
            weather_client: Optional custom weather client
            location_provider: Optional custom device position provider
            persistence: Optional favorites storage
            debug: Enable debug logging
        """
        # Configure logging
        logging.basicConfig(
            level=logging.DEBUG if debug else logging.INFO,
            format="%(asctime)s [%(levelname)s] %(message)s",
        )

        # Load configuration and initialize services
        self.config: UserSettings = UserSettings.load(config_path)

        # Allow dependency injection or create defaults
        self.weather_client = weather_client or WeatherClient(self.config)
        self.persistence = persistence or JsonFilePersistence(
            self.config.favorites_path, self.config.favorites_key
        )
        provider = location_provider or create_location_provider(self.config)

        self.session = WeatherSession(
            self.weather_client,
            FavoritesStore(self.persistence),
            geo_resolver=GeoResolver(provider, self.weather_client),
            default_city=self.config.default_city,
        )
        self.renderer = TextRenderer(self.config)

    def show_city(self, city: str) -> SessionState:
        return asyncio.run(self.session.submit_query(CityQuery.for_city(city)))

    def show_here(self) -> SessionState:
        return asyncio.run(self.session.use_current_location())

    def open_favorite(self, city: str) -> SessionState:
        return asyncio.run(self.session.select_favorite(city))

    def toggle_favorite(self, city: str) -> tuple[str, ...]:
        return self.session.toggle_favorite(city)

    def render(self, state: SessionState) -> list[str]:
        return self.renderer.render(state, self.session.favorites)
