# slotfinder/models.py
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Union

from .exceptions import InvalidRequestError, InvalidTimeRangeError

START_OF_DAY = 0
END_OF_DAY = 23 * 60 + 59   # last valid minute
DAY_LENGTH = END_OF_DAY + 1  # exclusive day boundary


@dataclass(frozen=True)
class TimeRange:
    """Half-open range [start, end) in minutes since midnight."""
    start: int
    end: int

    def __post_init__(self):
        if self.start < START_OF_DAY or self.end > DAY_LENGTH:
            raise InvalidTimeRangeError(
                f"range [{self.start}, {self.end}) is outside the day"
            )
        if self.start > self.end:
            raise InvalidTimeRangeError(
                f"range starts at {self.start} after it ends at {self.end}"
            )

    @classmethod
    def from_start_end(cls, start: int, end: int, inclusive: bool) -> "TimeRange":
        return cls(start, end + 1 if inclusive else end)

    @classmethod
    def from_start_duration(cls, start: int, duration: int) -> "TimeRange":
        return cls(start, start + duration)

    @property
    def duration(self) -> int:
        return self.end - self.start

    def contains(self, other: Union[int, "TimeRange"]) -> bool:
        """
        Point containment for an int minute, full containment for a range.
        An empty range is contained wherever its start point is.
        """
        if isinstance(other, TimeRange):
            if other.duration == 0:
                return self.start <= other.start <= self.end
            return self.start <= other.start and other.end <= self.end
        return self.start <= other < self.end

    def overlaps(self, other: "TimeRange") -> bool:
        # zero-length ranges never overlap anything
        if self.duration == 0 or other.duration == 0:
            return False
        return self.start < other.end and other.start < self.end

    def label(self) -> str:
        return f"{_clock(self.start)}-{_clock(self.end)}"

    def __str__(self) -> str:
        return f"Range: [{self.start}, {self.end})"


def _clock(minute: int) -> str:
    return f"{minute // 60:02d}:{minute % 60:02d}"


def ORDER_BY_START(r: TimeRange):
    """Sort key: earliest start first, shorter first on ties."""
    return (r.start, r.end)


def ORDER_BY_END(r: TimeRange):
    return (r.end, r.start)


WHOLE_DAY = TimeRange.from_start_end(START_OF_DAY, END_OF_DAY, inclusive=True)


@dataclass(frozen=True)
class Event:
    name: str
    when: TimeRange
    attendees: FrozenSet[str] = frozenset()

    def __post_init__(self):
        # accept any iterable of names, store it immutably
        object.__setattr__(self, "attendees", _name_set(self.attendees, "attendees"))


@dataclass(frozen=True)
class MeetingRequest:
    attendees: FrozenSet[str] = frozenset()           # mandatory
    duration: int = 30                                # minutes
    optional_attendees: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "duration", _whole_minutes(self.duration))
        object.__setattr__(self, "attendees", _name_set(self.attendees, "attendees"))
        object.__setattr__(self, "optional_attendees",
                           _name_set(self.optional_attendees, "optional_attendees"))

    def with_optional_attendee(self, attendee: str) -> "MeetingRequest":
        return MeetingRequest(
            attendees=self.attendees,
            duration=self.duration,
            optional_attendees=self.optional_attendees | {attendee},
        )


def as_attendees(names: Iterable[str]) -> FrozenSet[str]:
    """Normalise a user-supplied list of names (drops blanks and whitespace)."""
    return frozenset(n.strip() for n in names if n and n.strip())


def _name_set(names, what: str) -> FrozenSet[str]:
    # a bare string would otherwise become a set of its characters
    if isinstance(names, str):
        raise InvalidRequestError(
            f"{what} must be a collection of names, got the string {names!r}"
        )
    return frozenset(names)


def _whole_minutes(duration) -> int:
    try:
        whole = int(duration)
    except (TypeError, ValueError, OverflowError):
        raise InvalidRequestError(
            f"duration must be a whole number of minutes >= 0, got {duration!r}"
        ) from None
    if whole != duration or whole < 0:
        raise InvalidRequestError(
            f"duration must be a whole number of minutes >= 0, got {duration!r}"
        )
    return whole
