"""Scroll list windowing - Pure functions.

Reduces a long, fixed-row-height list to the contiguous index range a
scroll viewport needs, plus the padding heights that keep the scrollable
region the right total height. Computation is O(1) per observation.
"""

import math
from dataclasses import dataclass
from typing import Sequence, TypeVar


T = TypeVar("T")

DEFAULT_ITEM_HEIGHT_PX = 57
DEFAULT_OVERSCAN = 10


@dataclass(frozen=True)
class ListWindow:
    """The slice of a list to materialize.

    Attributes:
        start_index: First index to render (inclusive)
        end_index: Last index to render (inclusive), -1 when empty
        offset_top_px: Padding above the first rendered item
        offset_bottom_px: Padding below the last rendered item
        total_height_px: Height of the full list
    """
    start_index: int
    end_index: int
    offset_top_px: float
    offset_bottom_px: float
    total_height_px: float = 0

    @property
    def is_empty(self) -> bool:
        return self.end_index < self.start_index

    @property
    def count(self) -> int:
        """Number of items in the window."""
        return 0 if self.is_empty else self.end_index - self.start_index + 1

    def contains(self, index: int) -> bool:
        return self.start_index <= index <= self.end_index


EMPTY_WINDOW = ListWindow(
    start_index=0,
    end_index=-1,
    offset_top_px=0,
    offset_bottom_px=0,
    total_height_px=0,
)


def compute_list_window(
    item_count: int,
    item_height: float,
    scroll_offset: float,
    container_height: float,
    overscan: int = DEFAULT_OVERSCAN,
) -> ListWindow:
    """Compute the visible index range for a scroll position.

    Pure function.

    Args:
        item_count: Total number of items
        item_height: Estimated fixed height of one item (px)
        scroll_offset: Current scroll offset (px)
        container_height: Height of the scroll container (px), 0 before layout
        overscan: Extra items to render beyond each visible edge

    Returns:
        ListWindow describing the range and padding; EMPTY_WINDOW when
        there is nothing to render
    """
    if item_count <= 0 or not item_height or item_height <= 0:
        return EMPTY_WINDOW

    scroll_offset = max(0.0, scroll_offset or 0.0)
    container_height = max(0.0, container_height or 0.0)
    overscan = max(0, overscan)

    last_index = item_count - 1
    total_height = item_count * item_height

    start_index = max(0, math.floor(scroll_offset / item_height) - overscan)
    end_index = min(
        last_index,
        math.ceil((scroll_offset + container_height) / item_height) + overscan,
    )
    # Scrolled past the end (e.g. list shrank after a refresh)
    start_index = min(start_index, end_index)

    return ListWindow(
        start_index=start_index,
        end_index=end_index,
        offset_top_px=start_index * item_height,
        offset_bottom_px=total_height - (end_index + 1) * item_height,
        total_height_px=total_height,
    )


def slice_window(items: Sequence[T], window: ListWindow) -> list[T]:
    """Return the items covered by a window.

    Pure function. Tolerates a window computed for a longer list.
    """
    if window.is_empty:
        return []
    return list(items[window.start_index:window.end_index + 1])
