# slotfinder/exceptions.py


class SlotFinderError(Exception):
    """Base class for everything slotfinder raises."""


class InvalidTimeRangeError(SlotFinderError, ValueError):
    """A time range falls outside the day or ends before it starts."""


class InvalidRequestError(SlotFinderError, ValueError):
    """A meeting request or event table cannot be used for a query."""


class ConfigError(SlotFinderError):
    """An environment setting could not be parsed."""
