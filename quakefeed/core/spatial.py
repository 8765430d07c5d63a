"""Map viewport windowing - Pure functions.

Reduces an event collection to the markers that fall inside a map's
current geographic viewport. The viewport is padded a little so markers
don't pop in and out at the exact edge, and viewports that straddle the
antimeridian (±180°) are handled explicitly.
All functions are pure with no side effects.
"""

import math
from dataclasses import dataclass

from quakefeed.core.event import Event


DEFAULT_PADDING_RATIO = 0.1
FULL_CIRCLE_DEG = 360.0


def normalize_longitude(longitude: float) -> float:
    """Map any longitude into the half-open range (-180, 180].

    Pure function.
    """
    wrapped = math.fmod(longitude + 180.0, FULL_CIRCLE_DEG)
    if wrapped <= 0:
        wrapped += FULL_CIRCLE_DEG
    return wrapped - 180.0


def longitude_span(west: float, east: float) -> float:
    """Eastward span in degrees from west edge to east edge.

    Pure function. Un-normalized edges (as reported by a map panned past
    the antimeridian) are measured directly; normalized edges with
    east < west are measured across the antimeridian.
    """
    span = east - west
    if span >= FULL_CIRCLE_DEG:
        return FULL_CIRCLE_DEG
    if span < 0:
        span += FULL_CIRCLE_DEG
    return span


@dataclass(frozen=True)
class ViewportBounds:
    """Geographic rectangle of a map viewport.

    Attributes:
        north: Northern latitude edge
        south: Southern latitude edge
        east: Eastern longitude edge
        west: Western longitude edge
        full_longitude: True if every longitude is inside the viewport
    """
    north: float
    south: float
    east: float
    west: float
    full_longitude: bool = False

    @classmethod
    def world(cls) -> "ViewportBounds":
        """Bounds covering the whole globe."""
        return cls(north=90.0, south=-90.0, east=180.0, west=-180.0)

    @property
    def is_degenerate(self) -> bool:
        """True if the bounds can't contain anything (not yet laid out)."""
        edges = (self.north, self.south, self.east, self.west)
        if any(math.isnan(edge) for edge in edges):
            return True
        return self.north < self.south

    @property
    def covers_all_longitudes(self) -> bool:
        if self.full_longitude:
            return True
        return longitude_span(self.west, self.east) >= FULL_CIRCLE_DEG

    @property
    def crosses_antimeridian(self) -> bool:
        """True if the normalized rectangle straddles the ±180° meridian."""
        if self.covers_all_longitudes:
            return False
        return normalize_longitude(self.east) < normalize_longitude(self.west)

    def pad(self, ratio: float) -> "ViewportBounds":
        """Expand by `ratio` of the span on each side.

        Pure function. The result has normalized longitude edges, or
        full_longitude set once the padded span covers the globe.
        """
        if self.is_degenerate:
            return self

        ratio = max(0.0, ratio)
        lat_buffer = (self.north - self.south) * ratio

        if self.covers_all_longitudes:
            lon_span = FULL_CIRCLE_DEG
        else:
            lon_span = longitude_span(self.west, self.east)
        lon_buffer = lon_span * ratio

        north = self.north + lat_buffer
        south = self.south - lat_buffer

        if lon_span + 2 * lon_buffer >= FULL_CIRCLE_DEG:
            return ViewportBounds(
                north=north,
                south=south,
                east=180.0,
                west=-180.0,
                full_longitude=True,
            )

        return ViewportBounds(
            north=north,
            south=south,
            east=normalize_longitude(self.east + lon_buffer),
            west=normalize_longitude(self.west - lon_buffer),
        )

    def contains(self, latitude: float, longitude: float) -> bool:
        """Check if a point is within these bounds.

        Latitude is a closed interval test. Longitude is normalized first;
        when the rectangle straddles the antimeridian, points west of the
        west edge are shifted by +360° and compared against east + 360°,
        so the test is a single interval in one numeric frame.
        """
        if self.is_degenerate:
            return False
        if math.isnan(latitude) or math.isnan(longitude):
            return False

        if not self.south <= latitude <= self.north:
            return False

        if self.covers_all_longitudes:
            return True

        lon = normalize_longitude(longitude)
        west = normalize_longitude(self.west)
        east = normalize_longitude(self.east)

        if east >= west:
            return west <= lon <= east

        if lon < west:
            lon += FULL_CIRCLE_DEG
        return west <= lon <= east + FULL_CIRCLE_DEG


def is_in_viewport(event: Event, bounds: ViewportBounds) -> bool:
    """Check if an event can be placed inside the bounds.

    Pure function. Events without coordinates are never in a viewport.
    """
    if event.latitude is None or event.longitude is None:
        return False
    return bounds.contains(event.latitude, event.longitude)


def visible_events(
    events: list[Event],
    bounds: ViewportBounds,
    padding_ratio: float = DEFAULT_PADDING_RATIO,
) -> list[Event]:
    """Filter events to those inside the padded viewport.

    Pure function. O(n) over the collection; input order is kept.

    Args:
        events: Events to window
        bounds: Current map viewport
        padding_ratio: Fraction of each span to add on every side

    Returns:
        New list of events inside the padded bounds
    """
    if bounds.is_degenerate:
        return []

    padded = bounds.pad(padding_ratio)
    return [e for e in events if is_in_viewport(e, padded)]


def bounds_of(events: list[Event]) -> ViewportBounds | None:
    """Smallest non-wrapping rectangle containing every placeable event.

    Pure function. Used to fit the map to the current result set;
    returns None when no event has coordinates.
    """
    placed = [e for e in events if e.coordinates is not None]
    if not placed:
        return None

    latitudes = [e.latitude for e in placed]
    longitudes = [normalize_longitude(e.longitude) for e in placed]

    return ViewportBounds(
        north=max(latitudes),
        south=min(latitudes),
        east=max(longitudes),
        west=min(longitudes),
    )
