# main.py
import logging

import matplotlib.pyplot as plt
import numpy as np

from slotfinder import Event, MeetingRequest, TimeRange, find_open_slots
from slotfinder.config import configure_logging, load_settings
from slotfinder.frames import events_to_frame, occupancy_mask, slots_to_frame

logger = logging.getLogger(__name__)


def main():
    settings = load_settings()
    configure_logging(settings)

    events = [
        Event(
            name="Standup",
            when=TimeRange.from_start_duration(9 * 60, 15),
            attendees={"alice", "bob"},
        ),
        Event(
            name="Design Review",
            when=TimeRange.from_start_end(10 * 60, 11 * 60 + 30, inclusive=False),
            attendees={"alice"},
        ),
        Event(
            name="1:1",
            when=TimeRange.from_start_duration(11 * 60 + 30, 30),
            attendees={"bob"},
        ),
        Event(
            name="Lunch & Learn",
            when=TimeRange.from_start_duration(12 * 60 + 30, 60),
            attendees={"carol"},
        ),
        Event(
            name="Customer Call",
            when=TimeRange.from_start_duration(15 * 60, 45),
            attendees={"dave"},  # not invited, ignored
        ),
    ]

    request = MeetingRequest(
        attendees={"alice", "bob"},
        duration=settings.default_duration,
        optional_attendees={"carol"},
    )

    slots = find_open_slots(events, request)
    logger.info("found %d open slots for %s", len(slots), sorted(request.attendees))

    print("=== Events ===")
    print(events_to_frame(events))
    print("=== Open Slots ===")
    print(slots_to_frame(slots))

    # Plot occupancy, required vs everyone
    minutes = np.arange(len(occupancy_mask(events, request)))
    plt.figure(figsize=(10, 3))
    plt.step(minutes / 60, occupancy_mask(events, request, include_advisory=False),
             where="post", label="required attendees")
    plt.step(minutes / 60, occupancy_mask(events, request) * 0.9,
             where="post", label="with optional attendees")
    for r in slots:
        plt.axvspan(r.start / 60, r.end / 60, alpha=0.15, color="green")
    plt.title("Busy minutes and open slots")
    plt.xlabel("Hour of day")
    plt.yticks([0, 1], ["free", "busy"])
    plt.legend(loc="upper right")
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
