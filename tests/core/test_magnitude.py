"""Unit tests for magnitude and intensity classification.

Pure function tests - no mocks needed, fast execution.
"""

import pytest

from quakefeed.core.magnitude import (
    INTENSITY_NOT_REPORTED,
    INTENSITY_UNKNOWN,
    MARKER_COLOR_UNKNOWN,
    MagnitudeBand,
    classify_intensity,
    classify_magnitude,
    format_intensity,
    intensity_label,
    intensity_roman,
    magnitude_band,
    magnitude_color,
    magnitude_label,
    marker_style,
)


class TestMagnitudeBand:
    """Tests for magnitude_band() thresholds."""

    @pytest.mark.parametrize("magnitude,expected", [
        (0.0, MagnitudeBand.MINOR),
        (2.49, MagnitudeBand.MINOR),
        (2.5, MagnitudeBand.LIGHT),
        (4.49, MagnitudeBand.LIGHT),
        (4.5, MagnitudeBand.MODERATE),
        (6.0, MagnitudeBand.STRONG),
        (7.0, MagnitudeBand.MAJOR),
        (7.99, MagnitudeBand.MAJOR),
        (8.0, MagnitudeBand.GREAT),
        (9.5, MagnitudeBand.GREAT),
    ])
    def test_half_open_thresholds(self, magnitude, expected):
        assert magnitude_band(magnitude) == expected

    def test_none_is_unknown(self):
        assert magnitude_band(None) == MagnitudeBand.UNKNOWN

    def test_nan_is_unknown(self):
        assert magnitude_band(float("nan")) == MagnitudeBand.UNKNOWN

    def test_negative_magnitude_is_minor(self):
        """Small negative magnitudes are real measurements."""
        assert magnitude_band(-0.5) == MagnitudeBand.MINOR

    def test_bands_are_ordered(self):
        assert MagnitudeBand.UNKNOWN < MagnitudeBand.MINOR < MagnitudeBand.GREAT


class TestClassifyMagnitude:
    """Tests for classify_magnitude()."""

    def test_moderate(self):
        result = classify_magnitude(5.2)

        assert result.band == MagnitudeBand.MODERATE
        assert result.label == "Moderate"
        assert result.color == "warning"

    def test_unknown(self):
        result = classify_magnitude(None)

        assert result.band == MagnitudeBand.UNKNOWN
        assert result.label == "Unknown"
        assert result.color == "muted"

    def test_labels_are_stable(self):
        assert magnitude_label(1.0) == "Minor"
        assert magnitude_label(3.0) == "Light"
        assert magnitude_label(6.5) == "Strong"
        assert magnitude_label(7.5) == "Major"
        assert magnitude_label(8.1) == "Great"

    def test_colors(self):
        assert magnitude_color(1.0) == "success"
        assert magnitude_color(3.0) == "secondary"
        assert magnitude_color(6.5) == "destructive"
        assert magnitude_color(8.5) == "destructive"


class TestMarkerStyle:
    """Tests for marker_style()."""

    def test_unknown_magnitude(self):
        style = marker_style(None)

        assert style.color == MARKER_COLOR_UNKNOWN
        assert style.radius == 6.0

    def test_radius_scales_with_magnitude(self):
        assert marker_style(5.0).radius == 10.0

    def test_radius_clamped(self):
        assert marker_style(0.5).radius == 4.0
        assert marker_style(12.0).radius == 20.0

    def test_color_steps(self):
        assert marker_style(7.2).color == "#dc2626"
        assert marker_style(6.1).color == "#ea580c"
        assert marker_style(5.0).color == "#f59e0b"
        assert marker_style(4.0).color == "#eab308"
        assert marker_style(3.0).color == "#84cc16"
        assert marker_style(1.0).color == "#22c55e"


class TestClassifyIntensity:
    """Tests for classify_intensity() Modified Mercalli bands."""

    @pytest.mark.parametrize("value,roman,label", [
        (1.0, "I", "Not felt"),
        (2.0, "II", "Weak"),
        (3.9, "III", "Weak"),
        (4.0, "IV", "Light"),
        (5.5, "V", "Moderate"),
        (6.2, "VI", "Strong"),
        (7.0, "VII", "Very strong"),
        (8.0, "VIII", "Severe"),
        (9.0, "IX", "Violent"),
        (10.0, "X", "Extreme"),
        (11.5, "XI", "Extreme"),
        (12.0, "XII", "Extreme"),
        (15.0, "XII", "Extreme"),
    ])
    def test_bands(self, value, roman, label):
        result = classify_intensity(value)

        assert result.roman == roman
        assert result.label == label

    def test_below_one_is_unknown(self):
        assert classify_intensity(0.5) == INTENSITY_UNKNOWN

    def test_none_is_not_reported(self):
        assert classify_intensity(None) == INTENSITY_NOT_REPORTED

    def test_unknown_and_not_reported_are_distinct(self):
        assert INTENSITY_UNKNOWN != INTENSITY_NOT_REPORTED

    def test_infinity_is_top_band(self):
        assert classify_intensity(float("inf")).roman == "XII"


class TestFormatIntensity:
    """Tests for format_intensity() and accessors."""

    def test_formats_known_value(self):
        assert format_intensity(6.2) == "6.2 (VI – Strong)"

    def test_not_reported(self):
        assert format_intensity(None) == "Not reported"

    def test_unknown(self):
        assert format_intensity(0.3) == "Unknown"

    def test_roman_accessor(self):
        assert intensity_roman(8.4) == "VIII"
        assert intensity_roman(None) is None
        assert intensity_roman(0) is None

    def test_label_accessor(self):
        assert intensity_label(2.5) == "Weak"
        assert intensity_label(None) is None
