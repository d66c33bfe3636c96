from collections.abc import Callable
from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_validator

from cityweather.utils.time import TimeUtils

ValidatorCallable = Callable[[type[Any], Any], Any]


class TimeStampModel(BaseModel):
    """Base model with timestamp conversion utilities.

    This class serves as a base for models that need to convert UNIX timestamps
    to datetime objects with consistent timezone handling.
    """

    @classmethod
    def convert_timestamp(cls, v: int) -> datetime:
        """Convert UNIX timestamp to UTC datetime with timezone information.

        Args:
            v: UNIX timestamp (seconds since epoch)

        Returns:
            datetime: Timezone-aware datetime object in UTC
        """
        return TimeUtils.epoch_to_datetime(v)

    @staticmethod
    def timestamp_validator(*field_names: str) -> ValidatorCallable:
        """Factory method to create timestamp field validators.

        Args:
            field_names: The field names to validate

        Returns:
            A validator method for the specified fields
        """

        @field_validator(*field_names, mode="before")
        def validate_timestamp(cls: type[Any], v: Any) -> Any:
            if isinstance(v, (int, float)) and not isinstance(v, bool):
                return TimeStampModel.convert_timestamp(int(v))
            return v

        return validate_timestamp
