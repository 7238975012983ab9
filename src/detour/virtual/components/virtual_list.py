"""VirtualList component - fixed-height rows drawn through the windowing engine."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Callable, Generic, TypeVar

from detour.virtual.compositor import CompositedOutput, empty_output
from detour.virtual.components.spacer import Spacer
from detour.virtual.errors import InvalidConfigurationError
from detour.virtual.keys import KeyExtractor
from detour.virtual.scroller import VirtualScroller
from detour.virtual.utils import truncate_to_width
from detour.virtual.window import DEFAULT_OVERSCAN_ITEMS

T = TypeVar("T")

RenderItem = Callable[[T, int, int], list[str]]


def _require_whole_rows(name: str, value: int) -> None:
    # Terminal geometry is counted in rows
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigurationError(f"{name} must be a whole number of rows, got {value!r}")


class VirtualList(Generic[T]):
    """Scrollable list that only renders the rows near the viewport.

    ``render_item(item, index, width)`` returns the lines for one item. Each
    item is clipped or padded to exactly ``item_height`` rows and every row to
    ``width`` columns, so the list always renders ``viewport_height`` rows.
    """

    def __init__(
        self,
        items: Sequence[T],
        render_item: RenderItem[T],
        item_height: int = 1,
        viewport_height: int = 10,
        overscan_items: int = DEFAULT_OVERSCAN_ITEMS,
        key_extractor: KeyExtractor[T] | None = None,
    ) -> None:
        _require_whole_rows("item_height", item_height)
        _require_whole_rows("viewport_height", viewport_height)
        self._items = items
        self._render_item = render_item
        self._scroller: VirtualScroller[T] = VirtualScroller(
            item_height=item_height,
            viewport_height=viewport_height,
            overscan_items=overscan_items,
            key_extractor=key_extractor,
        )
        self._last_output: CompositedOutput[T] = empty_output(item_height)

        # Cache
        self._cached_width: int | None = None
        self._cached_lines: list[str] | None = None

    # ── State ────────────────────────────────────────────────────────

    @property
    def scroll_offset(self) -> int:
        return int(self._scroller.viewport.scroll_offset)

    @property
    def viewport_height(self) -> int:
        return self._scroller.viewport.viewport_height

    @property
    def item_height(self) -> int:
        return self._scroller.item_height

    @property
    def total_height(self) -> int:
        return len(self._items) * self.item_height

    @property
    def max_scroll_offset(self) -> int:
        return max(0, self.total_height - self.viewport_height)

    @property
    def last_output(self) -> CompositedOutput[T]:
        """Composited output of the most recent render."""
        return self._last_output

    def set_items(self, items: Sequence[T]) -> None:
        self._items = items
        self._clamp_scroll()
        self.invalidate()

    def set_item_height(self, item_height: int) -> None:
        _require_whole_rows("item_height", item_height)
        self._scroller.set_item_height(item_height)
        self._clamp_scroll()
        self.invalidate()

    def resize(self, viewport_height: int) -> None:
        _require_whole_rows("viewport_height", viewport_height)
        self._scroller.resize(viewport_height)
        self._clamp_scroll()
        self.invalidate()

    # ── Scrolling ────────────────────────────────────────────────────

    def scroll_to(self, offset: int) -> None:
        self._scroller.scroll_to(min(max(0, offset), self.max_scroll_offset))
        self.invalidate()

    def scroll_by(self, delta: int) -> None:
        self.scroll_to(self.scroll_offset + delta)

    def page_down(self) -> None:
        self.scroll_by(max(1, self.viewport_height))

    def page_up(self) -> None:
        self.scroll_by(-max(1, self.viewport_height))

    def scroll_to_index(self, index: int) -> None:
        """Scroll the minimum distance that brings item *index* fully into view."""
        if not self._items:
            return
        index = min(max(0, index), len(self._items) - 1)
        top = index * self.item_height
        bottom = top + self.item_height
        if top < self.scroll_offset:
            self.scroll_to(top)
        elif bottom > self.scroll_offset + self.viewport_height:
            self.scroll_to(bottom - self.viewport_height)

    def _clamp_scroll(self) -> None:
        offset = min(max(0, self.scroll_offset), self.max_scroll_offset)
        self._scroller.scroll_to(offset)

    # ── Rendering ────────────────────────────────────────────────────

    def invalidate(self) -> None:
        self._cached_width = None
        self._cached_lines = None

    def render(self, width: int) -> list[str]:
        if self._cached_lines is not None and self._cached_width == width:
            return self._cached_lines

        self._clamp_scroll()
        output = self._scroller.update(self._items)
        self._last_output = output

        rows: list[str] = []
        for visible in output.visible_items:
            lines = self._render_item(visible.item, visible.index, width)
            rows.extend(self._fit_item(lines, width))

        # The window always starts at or above the viewport top
        skip = self.scroll_offset - int(output.leading_spacer_height)
        result = rows[skip : skip + self.viewport_height]
        if len(result) < self.viewport_height:
            result.extend(Spacer(self.viewport_height - len(result)).render(width))

        self._cached_width = width
        self._cached_lines = result
        return result

    def _fit_item(self, lines: list[str], width: int) -> list[str]:
        fitted = [
            truncate_to_width(line, width, pad=True)
            for line in lines[: self.item_height]
        ]
        missing = self.item_height - len(fitted)
        if missing > 0:
            fitted.extend(Spacer(missing).render(width))
        return fitted
