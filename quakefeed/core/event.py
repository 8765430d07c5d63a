"""Seismic event model and parsing - Pure functions.

This module handles parsing USGS GeoJSON features into typed Event objects.
All functions are pure with no side effects.

Partial records are kept: an event with no magnitude yet, no coordinates
or an empty place is still a real event in the feed. Only records without
an id or an origin time are dropped, since they cannot be identified or
ordered.
"""

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Event:
    """Immutable seismic event.

    Attributes:
        id: Unique USGS event ID, stable across refreshes
        magnitude: Event magnitude, None if not yet measured
        place: Human-readable location description (may be empty)
        occurred_at_ms: Origin time in epoch milliseconds
        longitude: Epicenter longitude, None if unknown
        latitude: Epicenter latitude, None if unknown
        depth_km: Depth in kilometers (optional)
        tsunami: Whether the tsunami flag is set
        product_types: Comma-separated list of available product types
        updated_ms: Last update time in epoch milliseconds (optional)
        url: USGS event page URL
        detail_url: USGS event detail GeoJSON URL
        mag_type: Magnitude type (e.g., 'ml', 'mw')
        status: Review status ('automatic' or 'reviewed')
        title: Feed-supplied title
        felt: Number of "felt" reports (optional)
        mmi: Maximum estimated intensity (optional)
        alert: PAGER alert level (optional)
    """
    id: str
    magnitude: float | None
    place: str
    occurred_at_ms: int
    longitude: float | None
    latitude: float | None
    depth_km: float | None = None
    tsunami: bool = False
    product_types: str = ""
    updated_ms: int | None = None
    url: str = ""
    detail_url: str = ""
    mag_type: str = ""
    status: str = ""
    title: str = ""
    felt: int | None = None
    mmi: float | None = None
    alert: str | None = None

    @property
    def coordinates(self) -> tuple[float, float] | None:
        """Return (latitude, longitude), or None if the event can't be placed."""
        if self.latitude is None or self.longitude is None:
            return None
        return (self.latitude, self.longitude)

    @property
    def has_magnitude(self) -> bool:
        return self.magnitude is not None


def _optional_float(value: Any) -> float | None:
    """Coerce to a finite float, mapping missing or malformed values to None.

    NaN and infinity count as malformed; the feed's JSON can carry them.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return result if math.isfinite(result) else None


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _optional_str(value: Any) -> str:
    """Return value if it is a string, else ''."""
    return value if isinstance(value, str) else ""


def _flag(value: Any) -> bool:
    """Read a 0/1 feed flag; JSON booleans are accepted too."""
    if isinstance(value, bool):
        return value
    return bool(_optional_int(value) or 0)


def parse_event(feature: dict[str, Any]) -> Event | None:
    """Parse a single GeoJSON feature into an Event.

    Pure function: takes raw dict, returns typed Event or None if the
    feature has no usable id or origin time.

    Args:
        feature: GeoJSON feature dict from a USGS feed

    Returns:
        Event object or None if parsing fails
    """
    if not isinstance(feature, dict):
        return None

    event_id = feature.get("id")
    if not event_id or not isinstance(event_id, str):
        return None

    props = feature.get("properties") or {}
    geometry = feature.get("geometry") or {}
    coords = geometry.get("coordinates") or []

    # USGS uses milliseconds since epoch
    occurred_at_ms = _optional_int(props.get("time"))
    if occurred_at_ms is None:
        return None

    longitude = _optional_float(coords[0]) if len(coords) > 0 else None
    latitude = _optional_float(coords[1]) if len(coords) > 1 else None
    depth_km = _optional_float(coords[2]) if len(coords) > 2 else None

    return Event(
        id=event_id,
        magnitude=_optional_float(props.get("mag")),
        place=_optional_str(props.get("place")),
        occurred_at_ms=occurred_at_ms,
        longitude=longitude,
        latitude=latitude,
        depth_km=depth_km,
        tsunami=_flag(props.get("tsunami")),
        product_types=_optional_str(props.get("types")),
        updated_ms=_optional_int(props.get("updated")),
        url=_optional_str(props.get("url")),
        detail_url=_optional_str(props.get("detail")),
        mag_type=_optional_str(props.get("magType")),
        status=_optional_str(props.get("status")),
        title=_optional_str(props.get("title")),
        felt=_optional_int(props.get("felt")),
        mmi=_optional_float(props.get("mmi")),
        alert=_optional_str(props.get("alert")) or None,
    )


def parse_events(geojson: dict[str, Any]) -> list[Event]:
    """Parse a USGS GeoJSON FeatureCollection into a list of Events.

    Pure function: drops unusable features and keeps feed order. Ordering
    for presentation is done by the filter pipeline.

    Args:
        geojson: Full GeoJSON FeatureCollection

    Returns:
        List of valid Event objects
    """
    features = geojson.get("features") or []
    events = []

    for feature in features:
        event = parse_event(feature)
        if event is not None:
            events.append(event)

    return events


def has_product(event: Event, product_type: str) -> bool:
    """Check whether a secondary data product is available for an event.

    Pure function.

    Args:
        event: Event to check
        product_type: Product type tag, e.g. 'moment-tensor' or 'shakemap'

    Returns:
        True if the tag is present in the event's product types
    """
    tags = {t.strip() for t in event.product_types.split(",") if t.strip()}
    return product_type in tags


def find_by_id(events: list[Event], event_id: str | None) -> Event | None:
    """Find an event by id in a collection.

    Pure function. This is how a selection is carried across refreshes.
    """
    if event_id is None:
        return None
    for event in events:
        if event.id == event_id:
            return event
    return None
