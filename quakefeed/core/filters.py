"""Filter/sort pipeline - Pure functions.

Narrows a fetched event collection by recency, magnitude and free-text
place search, then orders it most recent first. All functions are pure
with no side effects; inputs are never mutated.
"""

import time
from dataclasses import dataclass
from enum import Enum

from quakefeed.core.event import Event


HOUR_MS = 60 * 60 * 1000
DAY_MS = 24 * HOUR_MS


class TimeWindow(Enum):
    """Fixed lookback durations offered by the feed.

    Each value is (feed_name, duration_ms, label).
    """
    HOUR = ("hour", HOUR_MS, "Past Hour")
    DAY = ("day", DAY_MS, "Past Day")
    WEEK = ("week", 7 * DAY_MS, "Past Week")
    MONTH = ("month", 30 * DAY_MS, "Past Month")

    @property
    def feed_name(self) -> str:
        return self.value[0]

    @property
    def duration_ms(self) -> int:
        return self.value[1]

    @property
    def label(self) -> str:
        return self.value[2]

    @classmethod
    def parse(cls, name: "str | TimeWindow") -> "TimeWindow":
        """Look up a window by feed name ('hour', 'day', ...).

        Raises:
            ValueError: If the name is not a known window
        """
        if isinstance(name, TimeWindow):
            return name

        normalized = str(name).strip().lower()
        for window in cls:
            if window.feed_name == normalized:
                return window

        known = ", ".join(w.feed_name for w in cls)
        raise ValueError(f"Unknown time window '{name}' (expected one of: {known})")


@dataclass(frozen=True)
class FilterParams:
    """The three user-controlled filter parameters.

    Attributes:
        time_window: Lookback window
        min_magnitude: Minimum magnitude (inclusive)
        search_text: Free-text place query (blank = no filter)
    """
    time_window: TimeWindow = TimeWindow.DAY
    min_magnitude: float = 0.0
    search_text: str = ""


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def feed_url(window: TimeWindow, base_url: str) -> str:
    """Build the USGS summary feed URL for a time window."""
    return f"{base_url.rstrip('/')}/all_{window.feed_name}.geojson"


def filter_by_time_window(
    events: list[Event],
    window: TimeWindow,
    now: int,
) -> list[Event]:
    """Keep events that occurred within the window ending at `now`.

    Pure function.

    Args:
        events: Events to filter
        window: Lookback window
        now: Reference time in epoch milliseconds

    Returns:
        Events with occurred_at_ms >= now - window.duration_ms
    """
    cutoff = now - window.duration_ms
    return [e for e in events if e.occurred_at_ms >= cutoff]


def filter_by_magnitude(
    events: list[Event],
    min_magnitude: float,
) -> list[Event]:
    """Keep events whose magnitude is present and >= min_magnitude.

    Pure function. An absent magnitude fails every threshold, including 0.
    """
    return [
        e for e in events
        if e.magnitude is not None and e.magnitude >= min_magnitude
    ]


def normalize_query(search_text: str | None) -> str:
    """Trim and case-fold a search query; blank input becomes ''."""
    if not search_text:
        return ""
    return search_text.strip().casefold()


def filter_by_place(
    events: list[Event],
    search_text: str | None,
) -> list[Event]:
    """Keep events whose place contains the query (case-insensitive).

    Pure function. A blank or whitespace-only query passes every event.
    """
    query = normalize_query(search_text)
    if not query:
        return list(events)

    return [e for e in events if query in (e.place or "").casefold()]


def sort_most_recent_first(events: list[Event]) -> list[Event]:
    """Stable sort by origin time, newest first.

    Pure function. Events with equal timestamps keep their input order.
    """
    return sorted(events, key=lambda e: -e.occurred_at_ms)


def apply_filters(
    events: list[Event],
    time_window: TimeWindow,
    min_magnitude: float,
    search_text: str | None,
    now: int | None = None,
) -> list[Event]:
    """Run the full filter/sort pipeline.

    Pure function apart from sampling the clock once when `now` is not
    given. The same cutoff applies to every event in the pass.

    Args:
        events: Raw event collection
        time_window: Lookback window
        min_magnitude: Minimum magnitude (inclusive)
        search_text: Free-text place query
        now: Reference time in epoch milliseconds (sampled if None)

    Returns:
        New list of matching events, most recent first
    """
    if now is None:
        now = now_ms()

    result = filter_by_time_window(events, time_window, now)
    result = filter_by_magnitude(result, min_magnitude)
    result = filter_by_place(result, search_text)
    return sort_most_recent_first(result)


def apply_filter_params(
    events: list[Event],
    params: FilterParams,
    now: int | None = None,
) -> list[Event]:
    """Run the pipeline with a FilterParams bundle."""
    return apply_filters(
        events,
        params.time_window,
        params.min_magnitude,
        params.search_text,
        now=now,
    )
