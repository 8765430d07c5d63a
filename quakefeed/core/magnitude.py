"""Magnitude and intensity classification - Pure functions.

Maps magnitudes to severity bands and intensity values to Modified
Mercalli bands. Every function here is total: absent or out-of-range
input maps to an explicit "unknown" result rather than an error.
"""

import math
from dataclasses import dataclass
from enum import IntEnum


class MagnitudeBand(IntEnum):
    """Severity bands, ordered low to high."""
    UNKNOWN = 0
    MINOR = 1
    LIGHT = 2
    MODERATE = 3
    STRONG = 4
    MAJOR = 5
    GREAT = 6


@dataclass(frozen=True)
class MagnitudeClass:
    """Classification of a magnitude.

    Attributes:
        band: Severity band
        label: Display label (e.g., "Moderate")
        color: Color tag used by the presentation layer
    """
    band: MagnitudeBand
    label: str
    color: str


# Upper bounds are exclusive; anything at or above the last bound is GREAT
_MAGNITUDE_THRESHOLDS: tuple[tuple[float, MagnitudeBand], ...] = (
    (2.5, MagnitudeBand.MINOR),
    (4.5, MagnitudeBand.LIGHT),
    (6.0, MagnitudeBand.MODERATE),
    (7.0, MagnitudeBand.STRONG),
    (8.0, MagnitudeBand.MAJOR),
)

_BAND_STYLE: dict[MagnitudeBand, tuple[str, str]] = {
    MagnitudeBand.UNKNOWN: ("Unknown", "muted"),
    MagnitudeBand.MINOR: ("Minor", "success"),
    MagnitudeBand.LIGHT: ("Light", "secondary"),
    MagnitudeBand.MODERATE: ("Moderate", "warning"),
    MagnitudeBand.STRONG: ("Strong", "destructive"),
    MagnitudeBand.MAJOR: ("Major", "destructive"),
    MagnitudeBand.GREAT: ("Great", "destructive"),
}


def magnitude_band(magnitude: float | None) -> MagnitudeBand:
    """Get the severity band for a magnitude.

    Pure function.
    """
    if magnitude is None or math.isnan(magnitude):
        return MagnitudeBand.UNKNOWN

    for upper, band in _MAGNITUDE_THRESHOLDS:
        if magnitude < upper:
            return band

    return MagnitudeBand.GREAT


def classify_magnitude(magnitude: float | None) -> MagnitudeClass:
    """Classify a magnitude into band, label and color.

    Pure function.

    Args:
        magnitude: Magnitude value, or None if not measured

    Returns:
        MagnitudeClass for the magnitude (UNKNOWN band for None)
    """
    band = magnitude_band(magnitude)
    label, color = _BAND_STYLE[band]
    return MagnitudeClass(band=band, label=label, color=color)


def magnitude_label(magnitude: float | None) -> str:
    """Get a human-readable severity label."""
    return classify_magnitude(magnitude).label


def magnitude_color(magnitude: float | None) -> str:
    """Get the color tag for a magnitude."""
    return classify_magnitude(magnitude).color


@dataclass(frozen=True)
class MarkerStyle:
    """Map marker appearance for an event.

    Attributes:
        color: Fill color (hex)
        radius: Circle radius in pixels
    """
    color: str
    radius: float


MARKER_COLOR_UNKNOWN = "#64748b"
MARKER_RADIUS_UNKNOWN = 6.0
MARKER_RADIUS_MIN = 4.0
MARKER_RADIUS_MAX = 20.0


def get_marker_color(magnitude: float | None) -> str:
    """Get a hex fill color for a map marker.

    Pure function.
    """
    if magnitude is None or math.isnan(magnitude):
        return MARKER_COLOR_UNKNOWN
    if magnitude >= 7.0:
        return "#dc2626"  # red
    elif magnitude >= 6.0:
        return "#ea580c"  # orange
    elif magnitude >= 5.0:
        return "#f59e0b"  # amber
    elif magnitude >= 4.0:
        return "#eab308"  # yellow
    elif magnitude >= 3.0:
        return "#84cc16"  # lime
    else:
        return "#22c55e"  # green


def marker_style(magnitude: float | None) -> MarkerStyle:
    """Get marker color and radius for a magnitude.

    Pure function. Radius scales with magnitude and is clamped so tiny
    events stay clickable and great ones don't cover the map.
    """
    color = get_marker_color(magnitude)
    if magnitude is None or math.isnan(magnitude):
        return MarkerStyle(color=color, radius=MARKER_RADIUS_UNKNOWN)

    radius = max(MARKER_RADIUS_MIN, min(magnitude * 2, MARKER_RADIUS_MAX))
    return MarkerStyle(color=color, radius=radius)


# ===== Modified Mercalli Intensity =====

@dataclass(frozen=True)
class IntensityClass:
    """Classification of an intensity value.

    Attributes:
        roman: Roman numeral band (None for unknown / not reported)
        label: Descriptive label
    """
    roman: str | None
    label: str

    @property
    def is_known(self) -> bool:
        return self.roman is not None


INTENSITY_NOT_REPORTED = IntensityClass(roman=None, label="Not reported")
INTENSITY_UNKNOWN = IntensityClass(roman=None, label="Unknown")

# Band n covers [n, n+1); XII is open-ended
_INTENSITY_BANDS: tuple[IntensityClass, ...] = (
    IntensityClass("I", "Not felt"),
    IntensityClass("II", "Weak"),
    IntensityClass("III", "Weak"),
    IntensityClass("IV", "Light"),
    IntensityClass("V", "Moderate"),
    IntensityClass("VI", "Strong"),
    IntensityClass("VII", "Very strong"),
    IntensityClass("VIII", "Severe"),
    IntensityClass("IX", "Violent"),
    IntensityClass("X", "Extreme"),
    IntensityClass("XI", "Extreme"),
    IntensityClass("XII", "Extreme"),
)


def classify_intensity(value: float | None) -> IntensityClass:
    """Classify an intensity value into a Modified Mercalli band.

    Pure function.

    Args:
        value: Intensity (1-12+), or None if not reported

    Returns:
        IntensityClass for the band, INTENSITY_NOT_REPORTED for None,
        or INTENSITY_UNKNOWN for values below 1
    """
    if value is None:
        return INTENSITY_NOT_REPORTED

    if math.isnan(value) or value < 1:
        return INTENSITY_UNKNOWN

    if value >= len(_INTENSITY_BANDS):
        return _INTENSITY_BANDS[-1]

    return _INTENSITY_BANDS[int(math.floor(value)) - 1]


def format_intensity(value: float | None) -> str:
    """Format an intensity as e.g. "6.2 (VI – Strong)".

    Pure function. Returns the bare label for unknown / not reported.
    """
    intensity = classify_intensity(value)
    if not intensity.is_known:
        return intensity.label
    return f"{value:.1f} ({intensity.roman} – {intensity.label})"


def intensity_roman(value: float | None) -> str | None:
    """Get just the Roman numeral, or None if unknown / not reported."""
    return classify_intensity(value).roman


def intensity_label(value: float | None) -> str | None:
    """Get just the descriptive label, or None if unknown / not reported."""
    intensity = classify_intensity(value)
    return intensity.label if intensity.is_known else None
