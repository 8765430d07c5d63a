"""Display formatting - Pure functions.

This module formats event data for tables, popups and the JSON surface.
All functions are pure with no side effects.
"""

from datetime import datetime, timezone
from typing import Any

from quakefeed.core.event import Event, has_product
from quakefeed.core.event_detail import MOMENT_TENSOR
from quakefeed.core.list_window import ListWindow
from quakefeed.core.magnitude import (
    classify_magnitude,
    format_intensity,
    marker_style,
)
from quakefeed.core.stats import EventStats


NOT_AVAILABLE = "N/A"


def format_magnitude(magnitude: float | None) -> str:
    """Format a magnitude to one decimal place, "N/A" if absent."""
    if magnitude is None:
        return NOT_AVAILABLE
    return f"{magnitude:.1f}"


def format_depth(depth_km: float | None) -> str:
    if depth_km is None:
        return NOT_AVAILABLE
    return f"{depth_km:.1f} km"


def format_coordinates(longitude: float | None, latitude: float | None) -> str:
    """Format as e.g. "37.775°N, 122.419°W".

    Pure function.
    """
    if longitude is None or latitude is None:
        return NOT_AVAILABLE

    lat_hemisphere = "N" if latitude >= 0 else "S"
    lon_hemisphere = "E" if longitude >= 0 else "W"
    return (
        f"{abs(latitude):.3f}°{lat_hemisphere}, "
        f"{abs(longitude):.3f}°{lon_hemisphere}"
    )


def format_timestamp(epoch_ms: int | None) -> str:
    """Format epoch milliseconds as a UTC timestamp string."""
    if epoch_ms is None:
        return NOT_AVAILABLE
    moment = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
    return moment.strftime("%Y-%m-%d %H:%M:%S UTC")


def format_event_summary(event: Event) -> str:
    """Format a one-line summary of an event.

    Pure function.

    Args:
        event: Event to summarize

    Returns:
        One-line summary string
    """
    return (
        f"M{format_magnitude(event.magnitude)} - {event.place or 'Unknown location'} "
        f"at {format_timestamp(event.occurred_at_ms)} "
        f"(depth: {format_depth(event.depth_km)})"
    )


def format_stats_summary(stats: EventStats, threshold: float) -> str:
    """Format stats for a log line or status bar.

    Pure function.
    """
    if stats.largest_magnitude is None:
        largest = NOT_AVAILABLE
    else:
        largest = (
            f"M{format_magnitude(stats.largest_magnitude.magnitude)} "
            f"{stats.largest_magnitude.place}"
        )
    return (
        f"{stats.total} events, "
        f"{stats.above_threshold} at or above M{threshold:.1f}, "
        f"largest: {largest}"
    )


def event_to_dict(event: Event) -> dict[str, Any]:
    """Convert an Event to a JSON-serializable dict.

    Pure function. Adds the derived classification and marker style so the
    presentation layer doesn't re-derive them.
    """
    classification = classify_magnitude(event.magnitude)
    style = marker_style(event.magnitude)
    return {
        "id": event.id,
        "magnitude": event.magnitude,
        "magnitude_label": classification.label,
        "magnitude_color": classification.color,
        "place": event.place,
        "time": event.occurred_at_ms,
        "time_display": format_timestamp(event.occurred_at_ms),
        "latitude": event.latitude,
        "longitude": event.longitude,
        "depth_km": event.depth_km,
        "tsunami": event.tsunami,
        "mag_type": event.mag_type,
        "status": event.status,
        "url": event.url,
        "detail_url": event.detail_url,
        "intensity": format_intensity(event.mmi),
        "has_moment_tensor": has_product(event, MOMENT_TENSOR),
        "marker": {"color": style.color, "radius": style.radius},
    }


def stats_to_dict(stats: EventStats, threshold: float) -> dict[str, Any]:
    largest = stats.largest_magnitude
    return {
        "total": stats.total,
        "above_threshold": stats.above_threshold,
        "threshold": threshold,
        "largest_magnitude": event_to_dict(largest) if largest else None,
    }


def window_to_dict(window: ListWindow) -> dict[str, Any]:
    return {
        "start_index": window.start_index,
        "end_index": window.end_index,
        "offset_top_px": window.offset_top_px,
        "offset_bottom_px": window.offset_bottom_px,
        "total_height_px": window.total_height_px,
    }
