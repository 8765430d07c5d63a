"""Unit tests for map viewport windowing.

Pure function tests - no mocks needed, fast execution.
"""

import math

import pytest

from quakefeed.core.event import Event
from quakefeed.core.spatial import (
    ViewportBounds,
    bounds_of,
    is_in_viewport,
    longitude_span,
    normalize_longitude,
    visible_events,
)


def make_event(event_id, latitude, longitude):
    return Event(
        id=event_id,
        magnitude=3.0,
        place="",
        occurred_at_ms=0,
        longitude=longitude,
        latitude=latitude,
    )


class TestNormalizeLongitude:
    """Tests for normalize_longitude()."""

    @pytest.mark.parametrize("raw,expected", [
        (0.0, 0.0),
        (179.0, 179.0),
        (180.0, 180.0),
        (-180.0, 180.0),
        (190.0, -170.0),
        (-190.0, 170.0),
        (540.0, 180.0),
        (-370.0, -10.0),
    ])
    def test_wraps_into_range(self, raw, expected):
        assert normalize_longitude(raw) == pytest.approx(expected)


class TestLongitudeSpan:
    """Tests for longitude_span()."""

    def test_simple_span(self):
        assert longitude_span(-10, 20) == 30

    def test_crossing_span(self):
        assert longitude_span(170, -170) == 20

    def test_capped_at_full_circle(self):
        assert longitude_span(-200, 200) == 360


class TestViewportBounds:
    """Tests for ViewportBounds."""

    def test_world_contains_everything(self):
        world = ViewportBounds.world()

        assert world.contains(0, 0)
        assert world.contains(90, 180)
        assert world.contains(-90, -180)

    def test_crosses_antimeridian(self):
        assert ViewportBounds(10, -10, -170, 170).crosses_antimeridian
        assert not ViewportBounds(10, -10, 20, -20).crosses_antimeridian
        assert not ViewportBounds.world().crosses_antimeridian

    def test_degenerate(self):
        assert ViewportBounds(-10, 10, 20, -20).is_degenerate
        assert ViewportBounds(math.nan, 0, 0, 0).is_degenerate
        assert not ViewportBounds(10, -10, 20, -20).is_degenerate

    def test_degenerate_contains_nothing(self):
        assert not ViewportBounds(-10, 10, 20, -20).contains(0, 0)

    def test_latitude_edges_inclusive(self):
        bounds = ViewportBounds(north=10, south=-10, east=20, west=-20)

        assert bounds.contains(10, 0)
        assert bounds.contains(-10, 0)
        assert not bounds.contains(10.01, 0)

    def test_longitude_edges_inclusive(self):
        bounds = ViewportBounds(north=10, south=-10, east=20, west=-20)

        assert bounds.contains(0, 20)
        assert bounds.contains(0, -20)
        assert not bounds.contains(0, 20.01)

    def test_straddling_rectangle(self):
        bounds = ViewportBounds(north=10, south=-10, east=-170, west=170)

        assert bounds.contains(0, 175)
        assert bounds.contains(0, -175)
        assert bounds.contains(0, 180)
        assert not bounds.contains(0, 0)
        assert not bounds.contains(0, 160)

    def test_straddling_excludes_far_negative(self):
        """Negative longitudes east of the east edge stay outside."""
        bounds = ViewportBounds(north=10, south=-10, east=-170, west=170)

        assert not bounds.contains(0, -160)

    def test_unnormalized_edges(self):
        """A map panned past 180° can report east > 180."""
        bounds = ViewportBounds(north=10, south=-10, east=190, west=170)

        assert bounds.crosses_antimeridian
        assert bounds.contains(0, -175)
        assert not bounds.contains(0, -160)

    def test_nan_point(self):
        bounds = ViewportBounds.world()

        assert not bounds.contains(math.nan, 0)


class TestPad:
    """Tests for ViewportBounds.pad()."""

    def test_pads_each_side(self):
        padded = ViewportBounds(north=10, south=-10, east=20, west=-20).pad(0.1)

        assert padded.north == pytest.approx(12)
        assert padded.south == pytest.approx(-12)
        assert padded.east == pytest.approx(24)
        assert padded.west == pytest.approx(-24)

    def test_zero_padding_is_identity(self):
        bounds = ViewportBounds(north=10, south=-10, east=20, west=-20)

        assert bounds.pad(0) == bounds

    def test_pads_across_antimeridian(self):
        padded = ViewportBounds(north=10, south=-10, east=-170, west=170).pad(0.1)

        assert padded.east == pytest.approx(-168)
        assert padded.west == pytest.approx(168)
        assert padded.crosses_antimeridian

    def test_padding_wraps_edge(self):
        padded = ViewportBounds(north=10, south=-10, east=178, west=158).pad(0.25)

        assert padded.east == pytest.approx(-177)
        assert padded.crosses_antimeridian

    def test_wide_viewport_becomes_full_longitude(self):
        padded = ViewportBounds(north=60, south=-60, east=170, west=-170).pad(0.1)

        assert padded.full_longitude
        assert padded.contains(0, 179.9)

    def test_degenerate_unchanged(self):
        bounds = ViewportBounds(north=-10, south=10, east=20, west=-20)

        assert bounds.pad(0.1) is bounds


class TestVisibleEvents:
    """Tests for visible_events()."""

    @pytest.fixture
    def events(self):
        return [
            make_event("fiji", -18.0, 178.0),
            make_event("tonga", -20.0, -175.0),
            make_event("london", 51.5, 0.0),
            make_event("unplaced", None, None),
        ]

    def test_world_bounds_no_padding(self, events):
        result = visible_events(events, ViewportBounds.world(), padding_ratio=0)

        assert [e.id for e in result] == ["fiji", "tonga", "london"]

    def test_antimeridian_viewport(self, events):
        bounds = ViewportBounds(north=0, south=-30, east=-170, west=170)

        result = visible_events(events, bounds)

        assert [e.id for e in result] == ["fiji", "tonga"]

    def test_padding_reveals_edge_marker(self):
        near = make_event("near", 0.0, 21.0)
        bounds = ViewportBounds(north=10, south=-10, east=20, west=-20)

        assert visible_events([near], bounds, padding_ratio=0) == []
        assert visible_events([near], bounds, padding_ratio=0.1) == [near]

    def test_missing_coordinates_never_visible(self, events):
        assert not is_in_viewport(events[3], ViewportBounds.world())

    def test_degenerate_bounds(self, events):
        assert visible_events(events, ViewportBounds(-10, 10, 20, -20)) == []

    def test_result_is_subset_in_order(self, events):
        bounds = ViewportBounds(north=60, south=-30, east=10, west=-10)

        result = visible_events(events, bounds)

        assert [e.id for e in result] == ["london"]
        assert all(e in events for e in result)


class TestBoundsOf:
    """Tests for bounds_of()."""

    def test_encloses_all_placed_events(self):
        events = [
            make_event("a", 10.0, -20.0),
            make_event("b", -5.0, 30.0),
            make_event("c", None, None),
        ]

        bounds = bounds_of(events)

        assert bounds == ViewportBounds(north=10.0, south=-5.0, east=30.0, west=-20.0)
        assert all(is_in_viewport(e, bounds) for e in events[:2])

    def test_no_placed_events(self):
        assert bounds_of([make_event("c", None, None)]) is None
