import numpy as np
import pandas as pd
import pytest

from slotfinder import (
    DAY_LENGTH,
    Event,
    InvalidRequestError,
    InvalidTimeRangeError,
    MeetingRequest,
    TimeRange,
    find_open_slots,
)
from slotfinder.frames import (
    EVENT_COLUMNS,
    SLOT_COLUMNS,
    events_from_frame,
    events_to_frame,
    free_runs,
    occupancy_mask,
    slots_to_frame,
)


@pytest.fixture
def day():
    events = [
        Event("Standup", TimeRange(540, 555), {"alice", "bob"}),
        Event("Review", TimeRange(600, 690), {"alice"}),
        Event("Lunch", TimeRange(720, 780), {"carol"}),
        Event("Call", TimeRange(900, 945), {"dave"}),
    ]
    request = MeetingRequest(attendees={"alice", "bob"}, duration=30,
                             optional_attendees={"carol"})
    return events, request


def test_slots_to_frame():
    df = slots_to_frame([TimeRange(0, 540), TimeRange(555, 600)])
    assert list(df.columns) == SLOT_COLUMNS
    assert df["duration"].tolist() == [540, 45]
    assert df["label"].tolist() == ["00:00-09:00", "09:15-10:00"]


def test_empty_frames_keep_columns():
    assert list(slots_to_frame([]).columns) == SLOT_COLUMNS
    assert list(events_to_frame([]).columns) == EVENT_COLUMNS
    assert slots_to_frame([]).empty


def test_events_frame_roundtrip(day):
    events, _ = day
    df = events_to_frame(events)
    assert df.loc[0, "attendees"] == "alice, bob"
    assert events_from_frame(df) == events


def test_events_from_frame_accepts_lists_and_blanks():
    df = pd.DataFrame({
        "name": ["a", "b"],
        "start": [60, 120],
        "end": [90, 150],
        "attendees": [["x", " y "], None],
    })
    events = events_from_frame(df)
    assert events[0].attendees == frozenset({"x", "y"})
    assert events[1].attendees == frozenset()


def test_events_from_frame_missing_columns():
    with pytest.raises(InvalidRequestError, match="attendees"):
        events_from_frame(pd.DataFrame({"name": ["a"], "start": [0], "end": [10]}))


def test_events_from_frame_blank_times():
    df = pd.DataFrame({"name": ["a"], "start": [float("nan")], "end": [50], "attendees": ["x"]})
    with pytest.raises(InvalidRequestError, match="no start or end"):
        events_from_frame(df)


def test_events_from_frame_bad_range():
    df = pd.DataFrame({"name": ["a"], "start": [100], "end": [50], "attendees": ["x"]})
    with pytest.raises(InvalidTimeRangeError):
        events_from_frame(df)


def test_occupancy_mask(day):
    events, request = day
    mask = occupancy_mask(events, request)
    assert mask.shape == (DAY_LENGTH,)
    assert mask.dtype == np.bool_
    assert mask[540:555].all()
    assert mask[720:780].all()       # carol is optional
    assert not mask[900:945].any()   # dave is not invited
    assert mask.sum() == 15 + 90 + 60

    required_only = occupancy_mask(events, request, include_advisory=False)
    assert not required_only[720:780].any()


def test_free_runs():
    mask = np.zeros(DAY_LENGTH, dtype=bool)
    assert free_runs(mask) == [TimeRange(0, DAY_LENGTH)]

    mask[0:60] = True
    mask[100:200] = True
    assert free_runs(mask) == [TimeRange(60, 100), TimeRange(200, DAY_LENGTH)]

    assert free_runs(np.ones(DAY_LENGTH, dtype=bool)) == []


def test_sweep_agrees_with_occupancy_mask(day):
    events, request = day
    expected = [r for r in free_runs(occupancy_mask(events, request))
                if r.duration >= request.duration]
    assert find_open_slots(events, request) == expected
