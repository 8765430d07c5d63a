"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config, ListViewConfig, MapViewConfig) are defined in
quakefeed/core/config.py so the core never touches files or env vars.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from quakefeed.core.config import (
    Config,
    ListViewConfig,
    MapViewConfig,
    USGS_FEED_BASE,
    validate_config,
)


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "config/config.yaml"


def _resolve_value(value: Any) -> Any:
    """Resolve a ${VAR} placeholder from the environment.

    Non-string values and plain strings are returned unchanged. An unset
    variable leaves the placeholder in place (and is logged).
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _parse_list_view(data: dict[str, Any]) -> ListViewConfig:
    """Parse table windowing settings from config data."""
    defaults = ListViewConfig()
    return ListViewConfig(
        item_height_px=float(_resolve_value(data.get("item_height_px", defaults.item_height_px))),
        overscan=int(_resolve_value(data.get("overscan", defaults.overscan))),
        initial_container_height_px=float(_resolve_value(data.get(
            "initial_container_height_px",
            defaults.initial_container_height_px,
        ))),
    )


def _parse_map_view(data: dict[str, Any]) -> MapViewConfig:
    """Parse map windowing settings from config data."""
    defaults = MapViewConfig()
    return MapViewConfig(
        padding_ratio=float(_resolve_value(data.get("padding_ratio", defaults.padding_ratio))),
        debounce_ms=int(_resolve_value(data.get("debounce_ms", defaults.debounce_ms))),
    )


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object

    Raises:
        ValueError: If a numeric field can't be converted
    """
    defaults = Config()

    def get(key: str, default: Any) -> Any:
        return _resolve_value(data.get(key, default))

    return Config(
        default_time_window=str(get("default_time_window", defaults.default_time_window)),
        default_min_magnitude=float(get("default_min_magnitude", defaults.default_min_magnitude)),
        stats_threshold=float(get("stats_threshold", defaults.stats_threshold)),
        refresh_interval_seconds=int(get("refresh_interval_seconds", defaults.refresh_interval_seconds)),
        feed_base_url=str(get("feed_base_url", defaults.feed_base_url)),
        request_timeout_seconds=int(get("request_timeout_seconds", defaults.request_timeout_seconds)),
        list_view=_parse_list_view(data.get("list_view") or {}),
        map_view=_parse_map_view(data.get("map_view") or {}),
    )


def _log_validation(config: Config) -> None:
    result = validate_config(config)
    for error in result.errors:
        if error.severity == "error":
            logger.error("Config error in %s: %s", error.field, error.message)
        else:
            logger.warning("Config warning in %s: %s", error.field, error.message)


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses QUAKEFEED_CONFIG env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("QUAKEFEED_CONFIG", DEFAULT_CONFIG_PATH)

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)
    _log_validation(config)

    logger.info(
        "Loaded config: window=%s, min_magnitude=%.1f, refresh=%ds",
        config.default_time_window,
        config.default_min_magnitude,
        config.refresh_interval_seconds,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        TIME_WINDOW: Default feed window (hour/day/week/month)
        MIN_MAGNITUDE: Default minimum magnitude
        STATS_THRESHOLD: Magnitude counted as significant in stats
        REFRESH_INTERVAL_SECONDS: Feed freshness interval
        FEED_BASE_URL: USGS summary feed base URL

    Returns:
        Config object from environment
    """
    config = Config(
        default_time_window=os.environ.get("TIME_WINDOW", "day"),
        default_min_magnitude=float(os.environ.get("MIN_MAGNITUDE", "0")),
        stats_threshold=float(os.environ.get("STATS_THRESHOLD", "5.0")),
        refresh_interval_seconds=int(os.environ.get("REFRESH_INTERVAL_SECONDS", "60")),
        feed_base_url=os.environ.get("FEED_BASE_URL", USGS_FEED_BASE),
    )
    _log_validation(config)
    return config
