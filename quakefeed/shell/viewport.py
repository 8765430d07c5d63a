"""Viewport windowers - Imperative Shell.

Stateful wrappers that the presentation layer pushes scroll, resize and
map move notifications into. They hold the latest viewport state, call
the pure windowing functions from the core, and notify subscribers when
the visible window changes.

- ListWindower recomputes synchronously on every scroll/resize (O(1)).
- MapWindower recomputes on move/zoom settle through a Debouncer, since
  each recomputation scans the full event collection.
"""

import logging
import threading
from typing import Callable, Generic, Sequence, TypeVar

from quakefeed.core.config import ListViewConfig, MapViewConfig
from quakefeed.core.event import Event
from quakefeed.core.list_window import (
    DEFAULT_ITEM_HEIGHT_PX,
    DEFAULT_OVERSCAN,
    ListWindow,
    compute_list_window,
    slice_window,
)
from quakefeed.core.spatial import (
    DEFAULT_PADDING_RATIO,
    ViewportBounds,
    visible_events,
)
from quakefeed.shell.debounce import Debouncer, TimerFactory


logger = logging.getLogger(__name__)


T = TypeVar("T")


class Observable(Generic[T]):
    """Minimal subscribe/notify support."""

    def __init__(self) -> None:
        self._handlers: list[Callable[[T], None]] = []

    def subscribe(self, handler: Callable[[T], None]) -> Callable[[], None]:
        """Register a handler for window changes.

        Returns:
            Function that unregisters the handler
        """
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def _notify(self, value: T) -> None:
        for handler in list(self._handlers):
            handler(value)


class ListWindower(Observable[ListWindow]):
    """Tracks the visible row range of a scrolling list."""

    def __init__(
        self,
        item_height: float = DEFAULT_ITEM_HEIGHT_PX,
        overscan: int = DEFAULT_OVERSCAN,
        container_height: float = 0.0,
        item_count: int = 0,
    ) -> None:
        """Initialize list windower.

        Args:
            item_height: Estimated fixed row height (px)
            overscan: Extra rows beyond each visible edge
            container_height: Container height before the first resize
                observation (0 if not laid out yet)
            item_count: Initial number of rows
        """
        super().__init__()
        self.item_height = item_height
        self.overscan = overscan
        self._item_count = item_count
        self._scroll_offset = 0.0
        self._container_height = container_height
        self._window = self._compute()

    @classmethod
    def from_config(cls, list_view: ListViewConfig) -> "ListWindower":
        return cls(
            item_height=list_view.item_height_px,
            overscan=list_view.overscan,
            container_height=list_view.initial_container_height_px,
        )

    @property
    def window(self) -> ListWindow:
        return self._window

    @property
    def item_count(self) -> int:
        return self._item_count

    @property
    def scroll_offset(self) -> float:
        return self._scroll_offset

    @property
    def container_height(self) -> float:
        return self._container_height

    def observe_scroll(self, scroll_offset: float) -> ListWindow:
        """Handle a scroll notification."""
        self._scroll_offset = scroll_offset
        return self._recompute()

    def observe_resize(self, container_height: float) -> ListWindow:
        """Handle a container resize notification."""
        self._container_height = container_height
        return self._recompute()

    def observe(self, scroll_offset: float, container_height: float) -> ListWindow:
        """Handle a combined scroll + size observation."""
        self._scroll_offset = scroll_offset
        self._container_height = container_height
        return self._recompute()

    def set_item_count(self, item_count: int) -> ListWindow:
        """Update the row count after the filtered list changes."""
        self._item_count = item_count
        return self._recompute()

    def visible_slice(self, items: Sequence[T]) -> list[T]:
        """Return the rows of `items` inside the current window."""
        return slice_window(items, self._window)

    def _compute(self) -> ListWindow:
        return compute_list_window(
            item_count=self._item_count,
            item_height=self.item_height,
            scroll_offset=self._scroll_offset,
            container_height=self._container_height,
            overscan=self.overscan,
        )

    def _recompute(self) -> ListWindow:
        window = self._compute()
        if window != self._window:
            self._window = window
            logger.debug(
                "List window %d-%d of %d",
                window.start_index,
                window.end_index,
                self._item_count,
            )
            self._notify(window)
        return window


class MapWindower(Observable[list[Event]]):
    """Tracks the events visible in a map viewport.

    Move/zoom notifications are debounced; only the final viewport of a
    burst triggers a recomputation. The event list is held by reference
    only until the next set_events().
    """

    def __init__(
        self,
        padding_ratio: float = DEFAULT_PADDING_RATIO,
        debounce_seconds: float = 0.15,
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        """Initialize map windower.

        Args:
            padding_ratio: Fraction of the viewport span added on each side
            debounce_seconds: Coalescing window for move/zoom notifications
            timer_factory: Cancelable timer factory for the debouncer
        """
        super().__init__()
        self.padding_ratio = padding_ratio
        self._lock = threading.Lock()
        self._events: list[Event] = []
        self._bounds: ViewportBounds | None = None
        self._visible: list[Event] = []
        self._debouncer = Debouncer(debounce_seconds, self.set_viewport, timer_factory)

    @classmethod
    def from_config(
        cls,
        map_view: MapViewConfig,
        timer_factory: TimerFactory = threading.Timer,
    ) -> "MapWindower":
        return cls(
            padding_ratio=map_view.padding_ratio,
            debounce_seconds=map_view.debounce_ms / 1000,
            timer_factory=timer_factory,
        )

    @property
    def bounds(self) -> ViewportBounds | None:
        """Last settled viewport, None until the map has reported one."""
        with self._lock:
            return self._bounds

    @property
    def visible(self) -> list[Event]:
        """Events inside the last settled viewport."""
        with self._lock:
            return list(self._visible)

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def on_viewport_change(self, bounds: ViewportBounds) -> None:
        """Handle a move/zoom notification (debounced)."""
        self._debouncer.trigger(bounds)

    def set_viewport(self, bounds: ViewportBounds) -> list[Event]:
        """Apply a settled viewport immediately."""
        with self._lock:
            self._bounds = bounds
        return self._recompute()

    def set_events(self, events: list[Event]) -> list[Event]:
        """Replace the event collection and recompute for the current viewport."""
        with self._lock:
            self._events = events
        return self._recompute()

    def flush(self) -> bool:
        """Apply a pending viewport change now instead of waiting."""
        return self._debouncer.flush()

    def close(self) -> None:
        """Teardown: drop any pending recomputation."""
        self._debouncer.cancel()
        self._handlers.clear()

    def _recompute(self) -> list[Event]:
        with self._lock:
            if self._bounds is None:
                visible: list[Event] = []
            else:
                visible = visible_events(self._events, self._bounds, self.padding_ratio)
            self._visible = visible

        logger.debug("Map window: %d of %d events visible", len(visible), len(self._events))
        self._notify(list(visible))
        return list(visible)
