from enum import Enum


class ErrorKind(Enum):
    """Session-visible reasons a current-conditions fetch failed.

    Both are recoverable; the presentation layer may word them differently.
    """

    CITY_NOT_FOUND = "city_not_found"  # user-correctable
    NETWORK_ERROR = "network_error"  # transient
