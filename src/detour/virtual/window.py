"""Render window calculation for fixed-height virtualized lists.

Maps a scroll position onto the half-open index range ``[start, end)`` of
items that must be materialized to cover the viewport, widened by an
overscan margin on both sides and clamped to the collection bounds.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from detour.virtual.errors import InvalidConfigurationError

DEFAULT_OVERSCAN_ITEMS = 2


@dataclass(frozen=True)
class RenderWindow:
    """Half-open range of item indices to materialize."""

    start_index: int
    end_index: int

    def __len__(self) -> int:
        return self.end_index - self.start_index

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.start_index <= index < self.end_index

    def indices(self) -> range:
        return range(self.start_index, self.end_index)


EMPTY_WINDOW = RenderWindow(0, 0)


def validate_item_height(item_height: float) -> None:
    if not _is_finite_number(item_height) or item_height <= 0:
        raise InvalidConfigurationError(
            f"item_height must be a positive number, got {item_height!r}"
        )


def validate_viewport_height(viewport_height: float) -> None:
    if not _is_finite_number(viewport_height) or viewport_height < 0:
        raise InvalidConfigurationError(
            f"viewport_height must be a non-negative number, got {viewport_height!r}"
        )


def validate_count(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidConfigurationError(
            f"{name} must be a non-negative integer, got {value!r}"
        )


def compute_window(
    scroll_offset: float,
    item_height: float,
    viewport_height: float,
    item_count: int,
    overscan_items: int = DEFAULT_OVERSCAN_ITEMS,
) -> RenderWindow:
    """Return the window of items covering the viewport plus overscan.

    A negative *scroll_offset* (over-scroll bounce) is treated as ``0``.
    Offsets past the end of the content yield a window clamped to
    *item_count*; when the whole viewport lies beyond the content the
    window collapses to ``(item_count, item_count)``.

    Raises ``InvalidConfigurationError`` for a non-positive *item_height*,
    a negative *viewport_height*, or negative / non-integer counts.
    """
    validate_item_height(item_height)
    validate_count("item_count", item_count)
    validate_count("overscan_items", overscan_items)
    if not _is_finite_number(scroll_offset):
        raise InvalidConfigurationError(
            f"scroll_offset must be a finite number, got {scroll_offset!r}"
        )
    validate_viewport_height(viewport_height)

    if item_count == 0:
        return EMPTY_WINDOW

    offset = max(0, scroll_offset)
    raw_start = math.floor(offset / item_height) - overscan_items
    raw_end = math.ceil((offset + viewport_height) / item_height) + overscan_items

    end_index = min(item_count, raw_end)
    start_index = min(max(0, raw_start), end_index)
    return RenderWindow(start_index, end_index)


def _is_finite_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
