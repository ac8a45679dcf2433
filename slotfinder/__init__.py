from .exceptions import (
    ConfigError,
    InvalidRequestError,
    InvalidTimeRangeError,
    SlotFinderError,
)
from .models import (
    DAY_LENGTH,
    END_OF_DAY,
    ORDER_BY_END,
    ORDER_BY_START,
    START_OF_DAY,
    WHOLE_DAY,
    Event,
    MeetingRequest,
    TimeRange,
)
from .scheduler import find_open_slots

__all__ = [
    "ConfigError",
    "DAY_LENGTH",
    "END_OF_DAY",
    "Event",
    "InvalidRequestError",
    "InvalidTimeRangeError",
    "MeetingRequest",
    "ORDER_BY_END",
    "ORDER_BY_START",
    "START_OF_DAY",
    "SlotFinderError",
    "TimeRange",
    "WHOLE_DAY",
    "find_open_slots",
]
