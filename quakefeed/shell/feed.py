"""Event feed collaborator - Imperative Shell.

Supplies the core with an already-parsed event collection, refetching
when the cached snapshot is stale or after invalidate(). Fetch failures
are reported as a snapshot with an error and no events; they are never
raised into the core.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable

import requests

from quakefeed.core.event import Event, parse_events
from quakefeed.core.event_detail import MomentTensorSolution, parse_moment_tensor
from quakefeed.core.filters import TimeWindow
from quakefeed.shell.usgs_client import USGSClient


logger = logging.getLogger(__name__)


DEFAULT_REFRESH_INTERVAL_SECONDS = 60


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class FeedSnapshot:
    """Result of one feed fetch.

    Attributes:
        events: Parsed events (empty on failure)
        fetched_at_ms: When the fetch completed, epoch milliseconds
        window: Time window the feed covers
        error: Error message if the fetch failed
    """
    events: list[Event] = field(default_factory=list)
    fetched_at_ms: int = 0
    window: TimeWindow = TimeWindow.DAY
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class DetailResult:
    """Result of looking up an event's moment-tensor solution.

    Attributes:
        solution: Preferred solution, None if unavailable
        error: Error message if the lookup failed
    """
    solution: MomentTensorSolution | None = None
    error: str | None = None


class EventFeed:
    """Cached access to the USGS summary feed for one time window."""

    def __init__(
        self,
        client: USGSClient | None = None,
        window: TimeWindow = TimeWindow.DAY,
        refresh_interval_seconds: float = DEFAULT_REFRESH_INTERVAL_SECONDS,
        clock: Callable[[], int] = _wall_clock_ms,
    ) -> None:
        """Initialize event feed.

        Args:
            client: USGS client (created if not provided)
            window: Initial feed window
            refresh_interval_seconds: Age after which a snapshot is stale
            clock: Returns the current time in epoch milliseconds
        """
        self.client = client or USGSClient()
        self.refresh_interval_seconds = refresh_interval_seconds
        self.clock = clock
        self._window = window
        self._snapshot: FeedSnapshot | None = None

    @property
    def window(self) -> TimeWindow:
        return self._window

    def set_window(self, window: TimeWindow) -> None:
        """Switch feeds; the next snapshot() fetches the new window."""
        if window != self._window:
            self._window = window
            self.invalidate()

    def invalidate(self) -> None:
        """Force the next snapshot() to refetch, bypassing freshness."""
        self._snapshot = None

    def is_stale(self) -> bool:
        if self._snapshot is None:
            return True
        age_ms = self.clock() - self._snapshot.fetched_at_ms
        return age_ms >= self.refresh_interval_seconds * 1000

    def snapshot(self) -> FeedSnapshot:
        """Return the current snapshot, fetching if stale.

        A failed fetch is not cached, so the next call retries.
        """
        if not self.is_stale() and self._snapshot is not None:
            return self._snapshot

        snapshot = self._fetch()
        if snapshot.ok:
            self._snapshot = snapshot
        return snapshot

    def _fetch(self) -> FeedSnapshot:
        window = self._window
        try:
            geojson = self.client.fetch_feed(window)
        except requests.Timeout:
            logger.error("USGS feed request timed out (%s)", window.feed_name)
            return FeedSnapshot(
                fetched_at_ms=self.clock(),
                window=window,
                error="Request timed out",
            )
        except (requests.RequestException, ValueError) as e:
            logger.error("USGS feed request failed: %s", str(e))
            return FeedSnapshot(
                fetched_at_ms=self.clock(),
                window=window,
                error=str(e),
            )

        events = parse_events(geojson)
        logger.info("Parsed %d events from %s feed", len(events), window.feed_name)

        return FeedSnapshot(
            events=events,
            fetched_at_ms=self.clock(),
            window=window,
        )


def fetch_moment_tensor(client: USGSClient, event: Event) -> DetailResult:
    """Look up the preferred moment-tensor solution for an event.

    Args:
        client: USGS client
        event: Event whose detail document to fetch

    Returns:
        DetailResult with the solution, or an error message
    """
    if not event.detail_url:
        return DetailResult(error="Event has no detail URL")

    try:
        detail = client.fetch_event_detail(event.detail_url)
    except (requests.RequestException, ValueError) as e:
        logger.warning("Event detail request failed for %s: %s", event.id, str(e))
        return DetailResult(error=str(e))

    return DetailResult(solution=parse_moment_tensor(detail))
