"""Host integration surface for the windowing engine.

``render_window`` is the stateless entry point. ``VirtualScroller`` is a thin
stateful wrapper a host can keep per scrolling container: it stores the
current viewport and geometry, and memoizes the last window so repeated
updates with unchanged inputs skip the window arithmetic. It never keeps a
previous composited output; hosts wanting continuity between frames compare
two outputs with ``diff_outputs``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Generic, TypeVar

from detour.virtual.compositor import CompositedOutput, composite
from detour.virtual.keys import KeyExtractor, KeyResolver
from detour.virtual.window import (
    DEFAULT_OVERSCAN_ITEMS,
    RenderWindow,
    compute_window,
    validate_count,
    validate_item_height,
    validate_viewport_height,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Viewport:
    """Scroll position and visible extent reported by the host."""

    scroll_offset: float = 0
    viewport_height: float = 0


@dataclass(frozen=True)
class KeyDiff:
    entered: tuple[str, ...]
    exited: tuple[str, ...]
    retained: tuple[str, ...]


def render_window(
    collection: Sequence[T],
    viewport: Viewport,
    item_height: float,
    overscan_items: int = DEFAULT_OVERSCAN_ITEMS,
    key_resolver: KeyResolver[T] | KeyExtractor[T] | None = None,
    item_count: int | None = None,
) -> CompositedOutput[T]:
    """Compute the window for *viewport* and composite *collection* into it."""
    if item_count is None:
        item_count = len(collection)
    window = compute_window(
        viewport.scroll_offset,
        item_height,
        viewport.viewport_height,
        item_count,
        overscan_items,
    )
    return composite(collection, window, item_height, key_resolver, item_count)


def diff_outputs(
    previous: CompositedOutput[object] | None, current: CompositedOutput[object]
) -> KeyDiff:
    """Compare the keys of two outputs, preserving each output's row order."""
    before = previous.keys if previous is not None else ()
    after = current.keys
    before_set = set(before)
    after_set = set(after)
    return KeyDiff(
        entered=tuple(k for k in after if k not in before_set),
        exited=tuple(k for k in before if k not in after_set),
        retained=tuple(k for k in after if k in before_set),
    )


_WindowInputs = tuple[float, float, float, int, int]


class VirtualScroller(Generic[T]):
    """Stateful wrapper around ``compute_window`` and ``composite``.

    Call ``update`` after every scroll, resize, item-height or collection
    change. Geometry setters validate eagerly so a bad value fails at the call
    that introduced it.
    """

    def __init__(
        self,
        item_height: float,
        viewport_height: float = 0,
        overscan_items: int = DEFAULT_OVERSCAN_ITEMS,
        key_extractor: KeyExtractor[T] | None = None,
    ) -> None:
        validate_item_height(item_height)
        validate_count("overscan_items", overscan_items)
        self._item_height = item_height
        self._overscan_items = overscan_items
        self._keys: KeyResolver[T] = KeyResolver(key_extractor)
        self._viewport = Viewport(0, 0)
        self.resize(viewport_height)

        self._last_inputs: _WindowInputs | None = None
        self._last_window: RenderWindow | None = None

    # ── Geometry ─────────────────────────────────────────────────────

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def item_height(self) -> float:
        return self._item_height

    @property
    def overscan_items(self) -> int:
        return self._overscan_items

    def scroll_to(self, scroll_offset: float) -> None:
        self._viewport = replace(self._viewport, scroll_offset=scroll_offset)

    def scroll_by(self, delta: float) -> None:
        self.scroll_to(self._viewport.scroll_offset + delta)

    def resize(self, viewport_height: float) -> None:
        validate_viewport_height(viewport_height)
        self._viewport = replace(self._viewport, viewport_height=viewport_height)

    def set_item_height(self, item_height: float) -> None:
        validate_item_height(item_height)
        self._item_height = item_height

    def set_overscan_items(self, overscan_items: int) -> None:
        validate_count("overscan_items", overscan_items)
        self._overscan_items = overscan_items

    def set_key_extractor(self, key_extractor: KeyExtractor[T] | None) -> None:
        self._keys = KeyResolver(key_extractor)

    # ── Computation ──────────────────────────────────────────────────

    def window_for(self, item_count: int) -> RenderWindow:
        inputs: _WindowInputs = (
            self._viewport.scroll_offset,
            self._item_height,
            self._viewport.viewport_height,
            item_count,
            self._overscan_items,
        )
        if inputs == self._last_inputs and self._last_window is not None:
            return self._last_window

        window = compute_window(*inputs)
        self._last_inputs = inputs
        self._last_window = window
        logger.debug(
            "Window [%d, %d) of %d at offset %s",
            window.start_index,
            window.end_index,
            item_count,
            self._viewport.scroll_offset,
        )
        return window

    def update(
        self, collection: Sequence[T], item_count: int | None = None
    ) -> CompositedOutput[T]:
        if item_count is None:
            item_count = len(collection)
        window = self.window_for(item_count)
        return composite(
            collection, window, self._item_height, self._keys, item_count
        )
