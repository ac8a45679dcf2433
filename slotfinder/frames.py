# slotfinder/frames.py
from typing import Iterable, List

import numpy as np
import pandas as pd

from .exceptions import InvalidRequestError
from .marks import Relevance, classify_relevance
from .models import DAY_LENGTH, Event, MeetingRequest, TimeRange, as_attendees

SLOT_COLUMNS = ["start", "end", "duration", "label"]
EVENT_COLUMNS = ["name", "start", "end", "attendees"]


def slots_to_frame(slots: Iterable[TimeRange]) -> pd.DataFrame:
    """Query result as a dataframe, one row per open slot, in result order."""
    rows = [{
        "start": r.start,
        "end": r.end,
        "duration": r.duration,
        "label": r.label(),
    } for r in slots]
    if not rows:
        return pd.DataFrame(columns=SLOT_COLUMNS)
    return pd.DataFrame(rows, columns=SLOT_COLUMNS)


def events_to_frame(events: Iterable[Event]) -> pd.DataFrame:
    rows = [{
        "name": e.name,
        "start": e.when.start,
        "end": e.when.end,
        "attendees": ", ".join(sorted(e.attendees)),
    } for e in events]
    if not rows:
        return pd.DataFrame(columns=EVENT_COLUMNS)
    return pd.DataFrame(rows, columns=EVENT_COLUMNS)


def _split_attendees(value) -> frozenset:
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return frozenset()
    if isinstance(value, str):
        return as_attendees(value.split(","))
    return as_attendees(value)


def events_from_frame(df: pd.DataFrame) -> List[Event]:
    """
    Build events from a table with name/start/end/attendees columns.

    attendees may be a comma separated string or a list of names.
    Raises InvalidRequestError for missing columns or blank times; bad ranges raise
    InvalidTimeRangeError from TimeRange itself.
    """
    missing = [c for c in EVENT_COLUMNS if c not in df.columns]
    if missing:
        raise InvalidRequestError(f"event table is missing columns: {', '.join(missing)}")

    events = []
    for _, r in df.iterrows():
        if pd.isna(r["start"]) or pd.isna(r["end"]):
            raise InvalidRequestError(f"event {r['name']!r} has no start or end time")
        events.append(Event(
            name=str(r["name"]),
            when=TimeRange(int(r["start"]), int(r["end"])),
            attendees=_split_attendees(r["attendees"]),
        ))
    return events


def occupancy_mask(events: Iterable[Event],
                   request: MeetingRequest,
                   include_advisory: bool = True) -> np.ndarray:
    """Per-minute mask of the day, True where a relevant event is in progress."""
    blocked = np.zeros(DAY_LENGTH, dtype=bool)
    for event in events:
        relevance = classify_relevance(event, request)
        if relevance is Relevance.NONE:
            continue
        if relevance is Relevance.OPTIONAL and not include_advisory:
            continue
        blocked[event.when.start:event.when.end] = True
    return blocked


def free_runs(mask: np.ndarray) -> List[TimeRange]:
    """Maximal runs of False in an occupancy mask, as TimeRanges."""
    # pad with busy minutes on both sides so every run has an edge
    padded = np.concatenate(([True], mask, [True])).astype(np.int8)
    edges = np.diff(padded)
    starts = np.flatnonzero(edges == -1)
    ends = np.flatnonzero(edges == 1)
    return [TimeRange(int(s), int(e)) for s, e in zip(starts, ends)]
