"""Summary statistics - Pure functions."""

import math
from dataclasses import dataclass

from quakefeed.core.event import Event


DEFAULT_STATS_THRESHOLD = 5.0


@dataclass(frozen=True)
class EventStats:
    """Aggregate statistics over a filtered event list.

    Attributes:
        total: Number of events
        above_threshold: Events with a magnitude >= the threshold
        largest_magnitude: Event with the largest magnitude, None if no
            event has a magnitude
    """
    total: int
    above_threshold: int
    largest_magnitude: Event | None


def compute_stats(
    events: list[Event],
    threshold: float = DEFAULT_STATS_THRESHOLD,
) -> EventStats:
    """Compute summary statistics for a list of events.

    Pure function. On a tie for largest magnitude the first event in input
    order wins, which is the most recent one for pipeline output.

    Args:
        events: Events to summarize (typically filtered, newest first)
        threshold: Magnitude threshold for above_threshold (inclusive)

    Returns:
        EventStats for the events
    """
    above_threshold = 0
    largest: Event | None = None

    for event in events:
        if event.magnitude is None or math.isnan(event.magnitude):
            continue
        if event.magnitude >= threshold:
            above_threshold += 1
        if largest is None or event.magnitude > largest.magnitude:
            largest = event

    return EventStats(
        total=len(events),
        above_threshold=above_threshold,
        largest_magnitude=largest,
    )
