"""Orchestrator - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core and the stateful shell components. It's the "glue" that makes the
dashboard work:

    feed snapshot -> filter/sort pipeline -> stats
                                         -> list windower (table rows)
                                         -> map windower (markers)
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable

from quakefeed.core.config import Config
from quakefeed.core.event import Event, find_by_id
from quakefeed.core.filters import FilterParams, TimeWindow, apply_filter_params, now_ms
from quakefeed.core.formatter import format_stats_summary
from quakefeed.core.stats import EventStats, compute_stats
from quakefeed.shell.feed import DetailResult, EventFeed, FeedSnapshot, fetch_moment_tensor
from quakefeed.shell.usgs_client import USGSClient
from quakefeed.shell.viewport import ListWindower, MapWindower


logger = logging.getLogger(__name__)


@dataclass
class DashboardState:
    """Everything the presentation layer needs after a recomputation.

    Attributes:
        filters: Filter parameters in effect
        events: Filtered events, most recent first
        stats: Summary statistics over the filtered events
        stats_threshold: Magnitude threshold used for the stats
        selected: Currently selected event, if still in the feed
        fetched_at_ms: When the underlying snapshot was fetched
        error: Fetch error, if the last refresh failed
    """
    filters: FilterParams
    events: list[Event]
    stats: EventStats
    stats_threshold: float
    selected: Event | None
    fetched_at_ms: int
    error: str | None = None

    @property
    def success(self) -> bool:
        """Returns True if the last fetch succeeded."""
        return self.error is None

    @property
    def summary(self) -> str:
        """Human-readable summary of the dashboard state."""
        text = format_stats_summary(self.stats, self.stats_threshold)
        if self.error:
            text += f" (fetch failed: {self.error})"
        return text


class Dashboard:
    """Coordinates the event feed, filters, stats and viewport windows.

    This class wires together:
    - Event feed (fetches and caches the USGS summary feed)
    - Core functions (filtering, sorting, stats)
    - List windower (visible table rows)
    - Map windower (visible markers, debounced)
    """

    def __init__(
        self,
        config: Config,
        feed: EventFeed | None = None,
        list_windower: ListWindower | None = None,
        map_windower: MapWindower | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        """Initialize dashboard with configuration.

        Args:
            config: Application configuration
            feed: Event feed (created if not provided)
            list_windower: Table windower (created if not provided)
            map_windower: Map windower (created if not provided)
            clock: Returns the current time in epoch milliseconds
        """
        self.config = config
        self.clock = clock
        self.filters = FilterParams(
            time_window=config.time_window,
            min_magnitude=max(0.0, config.default_min_magnitude),
            search_text="",
        )
        self.feed = feed or EventFeed(
            client=USGSClient(
                base_url=config.feed_base_url,
                timeout=config.request_timeout_seconds,
            ),
            window=self.filters.time_window,
            refresh_interval_seconds=config.refresh_interval_seconds,
            clock=clock,
        )
        self.list_windower = list_windower or ListWindower.from_config(config.list_view)
        self.map_windower = map_windower or MapWindower.from_config(config.map_view)

        self._snapshot = FeedSnapshot(window=self.filters.time_window)
        self._selected_id: str | None = None
        self._state: DashboardState | None = None

    @property
    def state(self) -> DashboardState:
        """Latest state, recomputed from the cached snapshot if needed."""
        if self._state is None:
            return self._recompute()
        return self._state

    def refresh(self, force: bool = False) -> DashboardState:
        """Pull the feed (refetching if stale) and recompute everything.

        Args:
            force: Invalidate the feed cache first (manual refresh)

        Returns:
            New dashboard state
        """
        if force:
            logger.info("Manual refresh requested")
            self.feed.invalidate()

        self.feed.set_window(self.filters.time_window)
        self._snapshot = self.feed.snapshot()

        if self._snapshot.error:
            logger.warning("Feed refresh failed: %s", self._snapshot.error)

        state = self._recompute()
        logger.info("Refresh complete: %s", state.summary)
        return state

    def set_filters(
        self,
        time_window: TimeWindow | str | None = None,
        min_magnitude: float | None = None,
        search_text: str | None = None,
        refetch: bool = True,
    ) -> DashboardState:
        """Update filter parameters and recompute.

        Changing the time window switches feeds and refetches; the other
        parameters recompute from the cached snapshot. With refetch=False
        the caller is expected to call refresh() itself.
        """
        filters = self.filters
        if time_window is not None:
            filters = replace(filters, time_window=TimeWindow.parse(time_window))
        if min_magnitude is not None:
            filters = replace(filters, min_magnitude=max(0.0, float(min_magnitude)))
        if search_text is not None:
            filters = replace(filters, search_text=search_text)

        window_changed = filters.time_window != self.filters.time_window
        self.filters = filters

        if window_changed and refetch:
            return self.refresh()
        return self._recompute()

    def select(self, event_id: str | None) -> Event | None:
        """Select an event by id; the selection survives refreshes."""
        self._selected_id = event_id
        selected = find_by_id(self._snapshot.events, event_id)
        if self._state is not None:
            self._state = replace(self._state, selected=selected)
        return selected

    def clear_selection(self) -> None:
        self.select(None)

    def visible_rows(self) -> list[Event]:
        """Table rows inside the current scroll window."""
        return self.list_windower.visible_slice(self.state.events)

    def visible_markers(self) -> list[Event]:
        """Map markers inside the last settled viewport."""
        return self.map_windower.visible

    def moment_tensor(self, event: Event) -> DetailResult:
        """Fetch the preferred moment-tensor solution for an event."""
        return fetch_moment_tensor(self.feed.client, event)

    def close(self) -> None:
        """Teardown: cancel pending map recomputations."""
        self.map_windower.close()

    def _recompute(self) -> DashboardState:
        snapshot = self._snapshot
        events = apply_filter_params(snapshot.events, self.filters, now=self.clock())
        stats = compute_stats(events, self.config.stats_threshold)

        selected = find_by_id(snapshot.events, self._selected_id)
        if selected is None and self._selected_id is not None and snapshot.ok:
            logger.info("Selected event %s no longer in feed", self._selected_id)
            self._selected_id = None

        self.list_windower.set_item_count(len(events))
        self.map_windower.set_events(events)

        self._state = DashboardState(
            filters=self.filters,
            events=events,
            stats=stats,
            stats_threshold=self.config.stats_threshold,
            selected=selected,
            fetched_at_ms=snapshot.fetched_at_ms,
            error=snapshot.error,
        )
        return self._state
