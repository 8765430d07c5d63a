"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field

from quakefeed.core.filters import TimeWindow
from quakefeed.core.list_window import DEFAULT_ITEM_HEIGHT_PX, DEFAULT_OVERSCAN
from quakefeed.core.spatial import DEFAULT_PADDING_RATIO
from quakefeed.core.stats import DEFAULT_STATS_THRESHOLD


USGS_FEED_BASE = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary"

# Range offered by the magnitude slider
MIN_MAGNITUDE_RANGE = (0.0, 9.0)

# Coalescing window recommended for map move/zoom notifications
RECOMMENDED_DEBOUNCE_MS = (100, 200)
MAX_DEBOUNCE_MS = 1000


@dataclass
class ListViewConfig:
    """Settings for the scrolling event table.

    Attributes:
        item_height_px: Estimated fixed row height
        overscan: Extra rows rendered beyond each visible edge
        initial_container_height_px: Container height assumed before layout
    """
    item_height_px: float = DEFAULT_ITEM_HEIGHT_PX
    overscan: int = DEFAULT_OVERSCAN
    initial_container_height_px: float = 600


@dataclass
class MapViewConfig:
    """Settings for the map marker window.

    Attributes:
        padding_ratio: Fraction of the viewport span added on each side
        debounce_ms: Delay for coalescing move/zoom notifications
    """
    padding_ratio: float = DEFAULT_PADDING_RATIO
    debounce_ms: int = 150


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        default_time_window: Feed window shown on startup
        default_min_magnitude: Magnitude filter shown on startup
        stats_threshold: Magnitude counted as "significant" in stats
        refresh_interval_seconds: Feed freshness / auto-refresh cadence
        feed_base_url: Base URL of the USGS summary feeds
        request_timeout_seconds: HTTP timeout for feed and detail requests
        list_view: Table windowing settings
        map_view: Map windowing settings
    """
    default_time_window: str = "day"
    default_min_magnitude: float = 0.0
    stats_threshold: float = DEFAULT_STATS_THRESHOLD
    refresh_interval_seconds: int = 60
    feed_base_url: str = USGS_FEED_BASE
    request_timeout_seconds: int = 30
    list_view: ListViewConfig = field(default_factory=ListViewConfig)
    map_view: MapViewConfig = field(default_factory=MapViewConfig)

    @property
    def time_window(self) -> TimeWindow:
        """Default window as an enum, falling back to DAY if unknown."""
        try:
            return TimeWindow.parse(self.default_time_window)
        except ValueError:
            return TimeWindow.DAY


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_list_view(list_view: ListViewConfig) -> list[ValidationError]:
    """Validate table windowing settings.

    Pure function.
    """
    errors = []

    if list_view.item_height_px <= 0:
        errors.append(ValidationError(
            field="list_view.item_height_px",
            message=f"Item height must be positive, got {list_view.item_height_px}",
        ))

    if list_view.overscan < 0:
        errors.append(ValidationError(
            field="list_view.overscan",
            message=f"Overscan must be non-negative, got {list_view.overscan}",
        ))

    if list_view.initial_container_height_px < 0:
        errors.append(ValidationError(
            field="list_view.initial_container_height_px",
            message="Initial container height must be non-negative",
        ))

    return errors


def validate_map_view(map_view: MapViewConfig) -> list[ValidationError]:
    """Validate map windowing settings.

    Pure function.
    """
    errors = []

    if not 0 <= map_view.padding_ratio <= 1:
        errors.append(ValidationError(
            field="map_view.padding_ratio",
            message=f"Padding ratio {map_view.padding_ratio} out of range [0, 1]",
        ))

    low, high = RECOMMENDED_DEBOUNCE_MS
    if not 0 <= map_view.debounce_ms <= MAX_DEBOUNCE_MS:
        errors.append(ValidationError(
            field="map_view.debounce_ms",
            message=f"Debounce {map_view.debounce_ms}ms out of range [0, {MAX_DEBOUNCE_MS}]",
        ))
    elif not low <= map_view.debounce_ms <= high:
        errors.append(ValidationError(
            field="map_view.debounce_ms",
            message=f"Debounce {map_view.debounce_ms}ms outside recommended {low}-{high}ms",
            severity="warning",
        ))

    return errors


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    try:
        TimeWindow.parse(config.default_time_window)
    except ValueError as e:
        errors.append(ValidationError(
            field="default_time_window",
            message=str(e),
        ))

    low, high = MIN_MAGNITUDE_RANGE
    if not low <= config.default_min_magnitude <= high:
        errors.append(ValidationError(
            field="default_min_magnitude",
            message=f"Minimum magnitude {config.default_min_magnitude} out of range [{low}, {high}]",
        ))

    if config.refresh_interval_seconds <= 0:
        errors.append(ValidationError(
            field="refresh_interval_seconds",
            message=f"Refresh interval must be positive, got {config.refresh_interval_seconds}",
        ))

    if config.request_timeout_seconds <= 0:
        errors.append(ValidationError(
            field="request_timeout_seconds",
            message=f"Request timeout must be positive, got {config.request_timeout_seconds}",
        ))

    if not config.feed_base_url.startswith(("http://", "https://")):
        errors.append(ValidationError(
            field="feed_base_url",
            message=f"Feed URL is not an HTTP(S) URL: {config.feed_base_url}",
        ))

    errors.extend(validate_list_view(config.list_view))
    errors.extend(validate_map_view(config.map_view))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
