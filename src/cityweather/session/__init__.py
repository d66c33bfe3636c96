"""Weather session: trigger sequencing and view state."""

from cityweather.common.enums import ErrorKind

from .session import WeatherSession
from .state import Failed, Idle, Loading, Ready, SessionState

__all__ = [
    "ErrorKind",
    "Failed",
    "Idle",
    "Loading",
    "Ready",
    "SessionState",
    "WeatherSession",
]
