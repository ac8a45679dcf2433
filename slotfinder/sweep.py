# slotfinder/sweep.py
from typing import List, Sequence

from .marks import Mark, TimeMark
from .models import START_OF_DAY, TimeRange


def sweep_open_slots(marks: Sequence[TimeMark],
                     duration: int,
                     include_advisory: bool = True) -> List[TimeRange]:
    """
    Walk chronologically ordered marks and collect every maximal free window
    at least `duration` minutes long.

    marks: output of build_time_marks (must end with the sentinel START).
    include_advisory: when False, marks from optional-only events are skipped
                      as if those events did not exist.

    Returns:
        Non-overlapping TimeRanges sorted by start.
    """
    open_slots: List[TimeRange] = []
    overlapping = 0
    candidate_start = START_OF_DAY

    for mark in marks:
        if mark.advisory and not include_advisory:
            continue

        if mark.kind is Mark.END:
            overlapping -= 1
            if overlapping == 0:
                candidate_start = mark.time
        elif mark.kind is Mark.START:
            if overlapping == 0 and mark.time - candidate_start >= duration:
                open_slots.append(TimeRange(candidate_start, mark.time))
            overlapping += 1

    return open_slots
