import logging
from datetime import datetime, time, timedelta

import pandas as pd
import plotly.express as px
import streamlit as st
from prometheus_client import Counter, Summary, start_http_server
from streamlit_calendar import calendar

from slotfinder import (
    DAY_LENGTH,
    Event,
    MeetingRequest,
    SlotFinderError,
    TimeRange,
    find_open_slots,
)
from slotfinder.config import configure_logging, load_settings
from slotfinder.frames import events_to_frame, occupancy_mask, slots_to_frame
from slotfinder.models import as_attendees

logger = logging.getLogger(__name__)

if "settings" not in st.session_state:
    st.session_state.settings = load_settings()
    configure_logging(st.session_state.settings)
settings = st.session_state.settings


# ✅ Create metrics only once
if "QUERY_TIME" not in st.session_state:
    st.session_state.QUERY_TIME = Summary(
        "slot_query_seconds",
        "Time spent finding open meeting slots",
    )
QUERY_TIME = st.session_state.QUERY_TIME

if "QUERY_OUTCOME" not in st.session_state:
    st.session_state.QUERY_OUTCOME = Counter(
        "slot_query_total",
        "Slot queries by whose conflicts the answer honours",
        ["outcome"],  # all_attendees | required_only | none
    )
QUERY_OUTCOME = st.session_state.QUERY_OUTCOME

# ✅ Start metrics server only once
if "metrics_started" not in st.session_state:
    start_http_server(settings.metrics_port)
    st.session_state.metrics_started = True


def minute_of(t: time) -> int:
    return t.hour * 60 + t.minute


def at_minute(minute: int) -> str:
    """ISO timestamp of a minute of the configured calendar day."""
    base = datetime.combine(settings.calendar_day, time.min)
    return (base + timedelta(minutes=minute)).isoformat()


def names_input(label: str, key: str) -> frozenset:
    raw = st.text_input(label, key=key, help="Comma separated names")
    return as_attendees(raw.split(","))


# Session State Setup
if "events" not in st.session_state:
    st.session_state.events = []  # list[Event]

if "slots" not in st.session_state:
    st.session_state.slots = None  # list[TimeRange] once queried

if "request" not in st.session_state:
    st.session_state.request = None


# Sidebar: Inputs
st.sidebar.title("Meeting Slot Finder")

st.sidebar.subheader("Add Event")
with st.sidebar.form("event_form"):
    ev_name = st.text_input("Name", key="ev_name")
    ev_start = st.time_input("Start", value=time(9, 0), key="ev_start")
    ev_end = st.time_input("End", value=time(10, 0), key="ev_end")
    ev_to_midnight = st.checkbox("Runs until midnight", key="ev_to_midnight")
    ev_attendees = names_input("Attendees", key="ev_attendees")
    add_event = st.form_submit_button("Add Event")
    if add_event:
        end_minute = DAY_LENGTH if ev_to_midnight else minute_of(ev_end)
        try:
            st.session_state.events.append(
                Event(
                    name=ev_name or f"event {len(st.session_state.events) + 1}",
                    when=TimeRange(minute_of(ev_start), end_minute),
                    attendees=ev_attendees,
                )
            )
        except SlotFinderError as exc:
            st.sidebar.error(str(exc))

if st.sidebar.button("Clear events"):
    st.session_state.events = []
    st.session_state.slots = None

st.sidebar.subheader("Meeting Request")
with st.sidebar.form("request_form"):
    req_attendees = names_input("Required attendees", key="req_attendees")
    req_optional = names_input("Optional attendees", key="req_optional")
    req_duration = st.number_input("Duration (minutes)", min_value=0,
                                   max_value=2 * DAY_LENGTH, step=15,
                                   value=settings.default_duration)
    find = st.form_submit_button("Find Slots")


# Main
st.title("Open Meeting Slots")

st.markdown("### Current Events")
if st.session_state.events:
    st.dataframe(events_to_frame(st.session_state.events))
else:
    st.write("No events yet.")


if find:
    try:
        request = MeetingRequest(
            attendees=req_attendees,
            duration=int(req_duration),
            optional_attendees=req_optional,
        )
    except SlotFinderError as exc:
        st.error(str(exc))
    else:
        with QUERY_TIME.time():
            slots = find_open_slots(st.session_state.events, request)

        full_mask = occupancy_mask(st.session_state.events, request)
        if not slots:
            outcome = "none"
        elif any(full_mask[r.start:r.end].any() for r in slots):
            outcome = "required_only"
        else:
            outcome = "all_attendees"
        QUERY_OUTCOME.labels(outcome=outcome).inc()
        logger.info("query for %s: %d slots (%s)",
                    sorted(request.attendees), len(slots), outcome)

        st.session_state.request = request
        st.session_state.slots = slots
        st.session_state.outcome = outcome


# Day view with FullCalendar
if st.session_state.slots is not None:
    slots = st.session_state.slots
    request = st.session_state.request

    st.markdown("## Day View")
    if st.session_state.outcome == "required_only":
        st.warning("No slot works for every optional attendee; "
                   "showing slots for required attendees only.")
    elif st.session_state.outcome == "none":
        st.info("No open slot is long enough for this meeting.")

    cal_events = []
    for r in slots:
        cal_events.append({
            "title": f"Open ({r.duration} min)",
            "start": at_minute(r.start),
            "end": at_minute(r.end),
            "color": "#2ca02c",  # green
        })
    for i, ev in enumerate(st.session_state.events):
        cal_events.append({
            "title": ev.name,
            "start": at_minute(ev.when.start),
            "end": at_minute(ev.when.end),
            "id": f"ev{i}",
            "color": "#7f7f7f",  # grey
        })

    cal_options = {
        "initialView": "timeGridDay",
        "initialDate": settings.calendar_day.isoformat(),
        "slotMinTime": "00:00:00",
        "slotMaxTime": "24:00:00",
        "allDaySlot": False,
        "nowIndicator": False,
    }
    calendar(events=cal_events, options=cal_options, key="calendar")

    st.markdown("### Open Slots")
    st.dataframe(slots_to_frame(slots))

    # Occupancy plot for transparency
    occ = pd.DataFrame({
        "hour": [m / 60 for m in range(DAY_LENGTH)],
        "required": occupancy_mask(st.session_state.events, request,
                                   include_advisory=False).astype(int),
        "with optional": occupancy_mask(st.session_state.events, request).astype(int),
    }).melt(id_vars="hour", var_name="attendees", value_name="busy")
    fig = px.line(occ, x="hour", y="busy", color="attendees", line_shape="hv",
                  labels={"hour": "Hour of day", "busy": "Busy"})
    st.plotly_chart(fig, use_container_width=True)
else:
    st.info("Add some events, describe the meeting and click **Find Slots**.")
