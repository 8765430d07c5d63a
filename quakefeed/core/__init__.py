"""Functional Core - Pure functions with no side effects.

This module contains all windowing logic as pure functions:
- Event parsing
- Magnitude / intensity classification
- Filter/sort pipeline
- Summary statistics
- Scroll list windowing
- Map viewport windowing

All functions here are deterministic and have no I/O.
"""

from quakefeed.core.event import Event, parse_events, has_product
from quakefeed.core.magnitude import (
    MagnitudeBand,
    classify_magnitude,
    classify_intensity,
    format_intensity,
)
from quakefeed.core.filters import TimeWindow, FilterParams, apply_filters
from quakefeed.core.stats import EventStats, compute_stats
from quakefeed.core.list_window import ListWindow, compute_list_window
from quakefeed.core.spatial import ViewportBounds, visible_events

__all__ = [
    # Event
    "Event",
    "parse_events",
    "has_product",
    # Classification
    "MagnitudeBand",
    "classify_magnitude",
    "classify_intensity",
    "format_intensity",
    # Pipeline
    "TimeWindow",
    "FilterParams",
    "apply_filters",
    # Stats
    "EventStats",
    "compute_stats",
    # Windowing
    "ListWindow",
    "compute_list_window",
    "ViewportBounds",
    "visible_events",
]
