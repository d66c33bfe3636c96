"""Render session state as plain text lines for the terminal."""

from __future__ import annotations

from cityweather.common.enums import ErrorKind
from cityweather.session.state import Failed, Idle, Loading, Ready, SessionState
from cityweather.settings import UserSettings
from cityweather.utils.formatting import format_temperature
from cityweather.utils.time import TimeUtils

ERROR_MESSAGES = {
    ErrorKind.CITY_NOT_FOUND: "City not found: {query}",
    ErrorKind.NETWORK_ERROR: "Network error while fetching {query}",
}


class TextRenderer:
    """Turns a SessionState into lines of text."""

    def __init__(self, config: UserSettings):
        self.config = config

    def render(self, state: SessionState, favorites: tuple[str, ...] = ()) -> list[str]:
        if isinstance(state, Idle):
            return ["No city selected."]
        if isinstance(state, Loading):
            return [f"Loading {state.query or 'current location'}..."]
        if isinstance(state, Failed):
            return [ERROR_MESSAGES[state.error_kind].format(query=state.query)]
        return self._render_ready(state, favorites)

    def _render_ready(self, state: Ready, favorites: tuple[str, ...]) -> list[str]:
        wx = state.snapshot
        deg = self.config.temperature_unit
        speed = self.config.speed_unit
        star = " *" if wx.name in favorites else ""
        offset = wx.timezone_offset

        lines = [
            f"{wx.name}, {wx.country}{star}",
            f"{format_temperature(wx.temp, deg)}  {wx.condition.description}",
            f"Feels like {wx.display_feels_like}{deg}  "
            f"min {wx.display_min}{deg}  max {wx.display_max}{deg}",
            f"Humidity {wx.humidity}%  Pressure {wx.pressure} hPa  Clouds {wx.clouds}%",
            f"Wind {wx.wind_speed} {speed} {wx.wind_cardinal} ({wx.wind_deg}°)"
            + (f"  gusts {wx.wind_gust} {speed}" if wx.wind_gust is not None else ""),
        ]
        if wx.visibility_km is not None:
            lines.append(f"Visibility {wx.visibility_km:.1f} km")
        lines.append(
            f"Sunrise {TimeUtils.format_clock(wx.sunrise, offset)}  "
            f"Sunset {TimeUtils.format_clock(wx.sunset, offset)}"
        )

        if state.forecast:
            lines.append("Forecast:")
            lines.extend(
                f"  {p.date.isoformat()}  {p.temperature}{deg}" for p in state.forecast
            )
        for alert in state.alerts:
            lines.append(f"ALERT: {alert.event} ({alert.sender_name or 'unknown source'})")
        return lines
