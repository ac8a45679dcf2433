# slotfinder/marks.py
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

from .models import END_OF_DAY, Event, MeetingRequest

logger = logging.getLogger(__name__)


class Mark(Enum):
    # END sorts before START at the same minute
    END = 0
    START = 1


class Relevance(Enum):
    MANDATORY = "mandatory"
    OPTIONAL = "optional"
    NONE = "none"


@dataclass(frozen=True)
class TimeMark:
    time: int
    kind: Mark
    advisory: bool = False  # only constrains the first (with-optionals) pass


def chronological(mark: TimeMark):
    return (mark.time, mark.kind.value)


def classify_relevance(event: Event, request: MeetingRequest) -> Relevance:
    """
    How an event constrains the request.

    Returns:
        MANDATORY if the event shares an attendee with the request's required
        attendees (or with its optional ones when nobody is required),
        OPTIONAL if it only shares optional attendees, NONE otherwise.
    """
    if event.attendees & request.attendees:
        return Relevance.MANDATORY
    if event.attendees & request.optional_attendees:
        if not request.attendees:
            return Relevance.MANDATORY
        return Relevance.OPTIONAL
    return Relevance.NONE


def build_time_marks(events: Iterable[Event],
                     request: MeetingRequest) -> List[TimeMark]:
    """Start/end marks for every relevant event plus the end-of-day sentinel, sorted."""
    marks: List[TimeMark] = []
    for event in events:
        relevance = classify_relevance(event, request)
        if relevance is Relevance.NONE:
            continue
        advisory = relevance is Relevance.OPTIONAL
        marks.append(TimeMark(event.when.start, Mark.START, advisory))
        marks.append(TimeMark(event.when.end, Mark.END, advisory))

    # sentinel: closes whatever window is still open at the end of the day
    marks.append(TimeMark(END_OF_DAY + 1, Mark.START, False))

    marks.sort(key=chronological)
    logger.debug("built %d time marks (%d relevant events)",
                 len(marks), (len(marks) - 1) // 2)
    return marks
