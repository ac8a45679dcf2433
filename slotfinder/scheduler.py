# slotfinder/scheduler.py
import logging
from typing import Iterable, List

from .marks import build_time_marks
from .models import Event, MeetingRequest, TimeRange
from .sweep import sweep_open_slots

logger = logging.getLogger(__name__)


def find_open_slots(events: Iterable[Event],
                    request: MeetingRequest) -> List[TimeRange]:
    """
    Find every free window in the day long enough for the request.

    Optional attendees' conflicts are honoured first. If that leaves no slot
    at all, the query is answered again for the required attendees only, and
    whatever that second pass gives (possibly nothing) is the answer.
    """
    marks = build_time_marks(events, request)

    # 1) Everyone, optional attendees included
    open_slots = sweep_open_slots(marks, request.duration, include_advisory=True)
    if open_slots:
        return open_slots

    # 2) Required attendees only
    logger.debug("no slot of %d min with optional attendees; retrying without them",
                 request.duration)
    return sweep_open_slots(marks, request.duration, include_advisory=False)
