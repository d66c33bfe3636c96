"""Orchestration of weather fetches and the view state they produce."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any, Final

from cityweather.common.enums import ErrorKind
from cityweather.favorites.store import FavoritesStore
from cityweather.geo.errors import GeolocationDenied, GeolocationError
from cityweather.geo.resolver import GeoResolution, GeoResolver
from cityweather.weather.api import WeatherClient
from cityweather.weather.errors import NetworkError, WeatherAPIError
from cityweather.weather.forecast import ForecastReducer
from cityweather.weather.models import CityQuery, Coord, WeatherSnapshot

from .state import Failed, Idle, Loading, Ready, SessionState

logger: Final = logging.getLogger(__name__)

StateListener = Callable[[SessionState], None]
FavoritesListener = Callable[[tuple[str, ...]], None]


class WeatherSession:
    """Owns the current query, sequences fetches and publishes state.

    Every trigger (search, favorite tap, geolocation) takes a fresh token.
    Current conditions are fetched first; once they arrive the session is
    ``Ready`` and the forecast and alerts are fetched concurrently, each
    filling in its field when done. A result is applied only if its token is
    still the latest, so the last trigger always wins regardless of the order
    in which network calls complete.

    Blocking client calls run in worker threads via ``asyncio.to_thread``;
    all state changes happen on the event loop.

    Examples:
        session = WeatherSession(client, favorites, geo_resolver=resolver)
        session.subscribe(print)
        await session.submit_query(CityQuery(name="Rabat"))
    """

    def __init__(
        self,
        client: WeatherClient,
        favorites: FavoritesStore,
        geo_resolver: GeoResolver | None = None,
        reducer: ForecastReducer | None = None,
        default_city: str = "Rabat",
    ) -> None:
        """Initialize the session.

        Args:
            client: Weather provider client
            favorites: Favorites store, already loaded
            geo_resolver: Optional resolver for ``use_current_location``
            reducer: Optional custom forecast reducer
            default_city: Fallback when geolocation fails before any search
        """
        self.client = client
        self.favorites_store = favorites
        self.geo_resolver = geo_resolver
        self.reducer = reducer or ForecastReducer()
        self.default_city = default_city

        self._state: SessionState = Idle()
        self._token = 0
        self._last_query: CityQuery | None = None
        self._listeners: list[StateListener] = []
        self._favorites_listeners: list[FavoritesListener] = []

    # ---- observation ----
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def favorites(self) -> tuple[str, ...]:
        return self.favorites_store.favorites

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` for every published state.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)
        return _remover(self._listeners, listener)

    def subscribe_favorites(self, listener: FavoritesListener) -> Callable[[], None]:
        self._favorites_listeners.append(listener)
        return _remover(self._favorites_listeners, listener)

    # ---- triggers ----
    async def submit_query(self, query: CityQuery) -> SessionState:
        """Fetch weather for ``query``, superseding any trigger in flight.

        Returns:
            The session state once this trigger's work is finished
        """
        token = self._next_token()
        self._last_query = query
        self._publish(Loading(query))
        await self._fetch(token, query)
        return self._state

    async def select_favorite(self, city: str) -> SessionState:
        return await self.submit_query(CityQuery.for_city(city))

    async def use_current_location(self) -> SessionState:
        """Fetch weather for the device position.

        If the position cannot be obtained or named, the session quietly
        falls back to the last requested query, or to the default city.
        """
        token = self._next_token()
        self._publish(Loading(None))

        try:
            resolution = await asyncio.to_thread(self._resolve_location)
        except GeolocationError as exc:
            if not self._is_current(token):
                return self._state
            fallback = self._last_query or CityQuery(name=self.default_city)
            logger.info("Geolocation failed (%s); showing %s instead", exc.message, fallback)
            self._publish(Loading(fallback))
            await self._fetch(token, fallback)
            return self._state

        if not self._is_current(token):
            logger.debug("Dropping stale geolocation result for %s", resolution.query)
            return self._state

        self._last_query = resolution.query
        await self._complete(token, resolution.query, resolution.snapshot)
        return self._state

    def toggle_favorite(self, city: str) -> tuple[str, ...]:
        """Add or remove ``city`` from the favorites; independent of fetch state."""
        favorites = self.favorites_store.toggle(city)
        self._notify(self._favorites_listeners, favorites)
        return favorites

    # ---- sequencing ----
    def _next_token(self) -> int:
        self._token += 1
        return self._token

    def _is_current(self, token: int) -> bool:
        return token == self._token

    def _resolve_location(self) -> GeoResolution:
        if self.geo_resolver is None:
            raise GeolocationDenied("No location resolver configured")
        return self.geo_resolver.resolve()

    async def _fetch(self, token: int, query: CityQuery) -> None:
        try:
            snapshot = await asyncio.to_thread(self.client.fetch_current, query)
        except WeatherAPIError as exc:
            if not self._is_current(token):
                logger.debug("Dropping stale failure for %s", query)
                return
            kind = ErrorKind.CITY_NOT_FOUND
            if isinstance(exc, NetworkError):
                kind = ErrorKind.NETWORK_ERROR
            log = logger.warning if exc.is_server_error else logger.info
            log("Current conditions unavailable for %s: %s", query, exc)
            self._publish(Failed(query=query, error_kind=kind))
            return

        if not self._is_current(token):
            logger.debug("Dropping stale conditions for %s", query)
            return
        await self._complete(token, query, snapshot)

    async def _complete(self, token: int, query: CityQuery, snapshot: WeatherSnapshot) -> None:
        self._publish(Ready(query=query, snapshot=snapshot))
        await asyncio.gather(
            self._load_forecast(token, query),
            self._load_alerts(token, snapshot.coord),
        )

    async def _load_forecast(self, token: int, query: CityQuery) -> None:
        try:
            samples = await asyncio.to_thread(self.client.fetch_forecast_raw, query)
        except WeatherAPIError as exc:
            log = logger.warning if exc.is_server_error else logger.info
            log("Forecast unavailable for %s: %s", query, exc)
            return
        self._update_ready(token, forecast=tuple(self.reducer.reduce(samples)))

    async def _load_alerts(self, token: int, coord: Coord) -> None:
        try:
            alerts = await asyncio.to_thread(self.client.fetch_alerts, coord)
        except WeatherAPIError as exc:
            logger.info("Alerts unavailable: %s", exc)
            return
        self._update_ready(token, alerts=tuple(alerts))

    def _update_ready(self, token: int, **changes: Any) -> None:
        if not self._is_current(token) or not isinstance(self._state, Ready):
            logger.debug("Dropping stale update: %s", ", ".join(changes))
            return
        self._publish(replace(self._state, **changes))

    # ---- publication ----
    def _publish(self, state: SessionState) -> None:
        self._state = state
        self._notify(self._listeners, state)

    @staticmethod
    def _notify(listeners: list[Callable[[Any], None]], value: Any) -> None:
        for listener in list(listeners):
            try:
                listener(value)
            except Exception as exc:
                logger.warning("Listener %r failed: %s", listener, exc)


def _remover(listeners: list[Any], listener: Any) -> Callable[[], None]:
    def remove() -> None:
        if listener in listeners:
            listeners.remove(listener)

    return remove
