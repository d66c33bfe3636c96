# src/cityweather/utils/time.py
"""Time and date handling utilities."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone


class TimeUtils:
    """Time-related utility functions.

    OpenWeather reports instants as UNIX timestamps and locations as a fixed
    offset in seconds from UTC; these helpers turn both into aware datetimes.
    """

    @staticmethod
    def epoch_to_datetime(timestamp: int) -> datetime:
        """Convert UNIX timestamp to UTC datetime with timezone information.

        Args:
            timestamp: UNIX timestamp (seconds since epoch)

        Returns:
            Timezone-aware datetime object in UTC
        """
        return datetime.fromtimestamp(timestamp, tz=UTC)

    @staticmethod
    def offset_timezone(offset_seconds: int) -> timezone:
        """Build a fixed-offset timezone from a provider offset.

        Args:
            offset_seconds: Shift in seconds from UTC

        Returns:
            timezone object with the correct offset
        """
        return timezone(timedelta(seconds=offset_seconds))

    @staticmethod
    def format_clock(dt: datetime, offset_seconds: int = 0) -> str:
        """Format an instant as a 24-hour ``HH:MM`` clock in the given offset."""
        return dt.astimezone(TimeUtils.offset_timezone(offset_seconds)).strftime("%H:%M")
