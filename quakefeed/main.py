"""Cloud Function Entry Point.

This module provides the HTTP entry point for Google Cloud Functions.
It's a thin wrapper that loads configuration, keeps one Dashboard per
instance, and serializes the windowed feed as JSON.

Query params:
    window: Feed window (hour/day/week/month)
    min_magnitude: Minimum magnitude filter
    q: Place search text
    scroll_offset, container_height: Table scroll viewport (px)
    north, south, east, west: Map viewport (all four, or none)
    refresh: "1" to bypass the feed cache
"""

import json
import logging
import os
import threading
from typing import Any

import functions_framework
from flask import Request, Response

from quakefeed.core.config import Config
from quakefeed.core.formatter import event_to_dict, stats_to_dict, window_to_dict
from quakefeed.core.spatial import ViewportBounds
from quakefeed.orchestrator import Dashboard
from quakefeed.shell.config_loader import load_config, load_config_from_env


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Max-Age": "3600",
}

BOUNDS_PARAMS = ("north", "south", "east", "west")

_dashboard: Dashboard | None = None
_dashboard_lock = threading.Lock()


def _get_config() -> Config:
    """Load configuration from file or environment."""
    config_path = os.environ.get("QUAKEFEED_CONFIG")

    if config_path:
        return load_config(config_path)
    elif os.environ.get("TIME_WINDOW") or os.environ.get("MIN_MAGNITUDE"):
        return load_config_from_env()
    else:
        return load_config()


def _get_dashboard() -> Dashboard:
    """Get or create the per-instance dashboard."""
    global _dashboard
    if _dashboard is None:
        _dashboard = Dashboard(_get_config())
    return _dashboard


def _json_response(data: dict[str, Any], status: int = 200) -> Response:
    """Create a JSON response with CORS headers."""
    response = Response(
        json.dumps(data, default=str),
        status=status,
        mimetype="application/json",
    )
    for key, value in CORS_HEADERS.items():
        response.headers[key] = value
    return response


def _float_arg(request: Request, name: str, default: float | None = None) -> float | None:
    """Read a float query param.

    Raises:
        ValueError: If the value is present but not a number
    """
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"Query parameter '{name}' must be a number, got '{raw}'")


def _parse_bounds(request: Request) -> ViewportBounds | None:
    """Read the map viewport, if all four edges are given.

    Raises:
        ValueError: If only some edges are given or one isn't a number
    """
    present = [name for name in BOUNDS_PARAMS if request.args.get(name)]
    if not present:
        return None
    if len(present) != len(BOUNDS_PARAMS):
        missing = sorted(set(BOUNDS_PARAMS) - set(present))
        raise ValueError(f"Incomplete map bounds, missing: {', '.join(missing)}")

    return ViewportBounds(
        north=_float_arg(request, "north"),
        south=_float_arg(request, "south"),
        east=_float_arg(request, "east"),
        west=_float_arg(request, "west"),
    )


def handle_feed_request(request: Request, dashboard: Dashboard) -> Response:
    """Serve one windowed feed request against a dashboard.

    Args:
        request: Flask request
        dashboard: Dashboard holding the feed and viewport state

    Returns:
        JSON response
    """
    if request.method == "OPTIONS":
        response = Response("", status=204)
        for key, value in CORS_HEADERS.items():
            response.headers[key] = value
        return response

    # Absent params mean the configured defaults, not the previous request's
    config = dashboard.config
    try:
        window = request.args.get("window") or config.time_window
        min_magnitude = _float_arg(request, "min_magnitude", config.default_min_magnitude)
        search_text = request.args.get("q", "")
        scroll_offset = _float_arg(request, "scroll_offset", 0.0)
        container_height = _float_arg(
            request,
            "container_height",
            config.list_view.initial_container_height_px,
        )
        bounds = _parse_bounds(request)
        dashboard.set_filters(
            time_window=window,
            min_magnitude=min_magnitude,
            search_text=search_text,
            refetch=False,
        )
    except ValueError as e:
        return _json_response({"status": "error", "message": str(e)}, status=400)

    force = request.args.get("refresh") == "1"
    state = dashboard.refresh(force=force)

    if state.error:
        return _json_response(
            {
                "status": "error",
                "message": "Failed to fetch earthquake data",
                "error": state.error,
            },
            status=502,
        )

    list_window = dashboard.list_windower.observe(scroll_offset, container_height)

    response_data: dict[str, Any] = {
        "status": "success",
        "filters": {
            "window": state.filters.time_window.feed_name,
            "min_magnitude": state.filters.min_magnitude,
            "q": state.filters.search_text,
        },
        "stats": stats_to_dict(state.stats, state.stats_threshold),
        "list_window": window_to_dict(list_window),
        "rows": [event_to_dict(e) for e in dashboard.visible_rows()],
        "fetched_at": state.fetched_at_ms,
        "error": None,
    }

    if bounds is not None:
        markers = dashboard.map_windower.set_viewport(bounds)
        response_data["markers"] = [event_to_dict(e) for e in markers]

    return _json_response(response_data)


@functions_framework.http
def earthquake_feed(request: Request) -> Response:
    """HTTP Cloud Function entry point.

    Args:
        request: Flask request object

    Returns:
        JSON response with stats, the visible table rows and map markers
    """
    try:
        with _dashboard_lock:
            return handle_feed_request(request, _get_dashboard())
    except Exception as e:
        logger.exception("Unexpected error serving earthquake feed")
        return _json_response({"status": "error", "message": str(e)}, status=500)
