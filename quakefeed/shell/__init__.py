"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with the outside world:
- USGS feed client (HTTP)
- Event feed snapshot / invalidation
- Debounce timers
- Stateful viewport windowers (observer notifications)
- Configuration loading (environment/files)

Keep this layer thin and simple. All windowing logic should be in core.
"""

from quakefeed.shell.usgs_client import USGSClient
from quakefeed.shell.feed import EventFeed, FeedSnapshot
from quakefeed.shell.debounce import Debouncer
from quakefeed.shell.viewport import ListWindower, MapWindower
from quakefeed.shell.config_loader import load_config, Config

__all__ = [
    "USGSClient",
    "EventFeed",
    "FeedSnapshot",
    "Debouncer",
    "ListWindower",
    "MapWindower",
    "load_config",
    "Config",
]
