"""Layout composition: spacers around the materialized slice."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from detour.virtual.errors import (
    InconsistentCollectionError,
    InvalidConfigurationError,
)
from detour.virtual.keys import KeyResolver
from detour.virtual.window import (
    EMPTY_WINDOW,
    RenderWindow,
    validate_count,
    validate_item_height,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class VisibleItem(Generic[T]):
    index: int
    key: str
    item: T


@dataclass(frozen=True)
class CompositedOutput(Generic[T]):
    """Leading spacer, materialized items and trailing spacer.

    ``total_height`` always equals ``item_count * item_height``, so scrollbars
    and gesture handling see a stable content extent.
    """

    window: RenderWindow
    item_count: int
    item_height: float
    leading_spacer_height: float
    visible_items: tuple[VisibleItem[T], ...]
    trailing_spacer_height: float

    @property
    def total_height(self) -> float:
        return (
            self.leading_spacer_height
            + len(self.visible_items) * self.item_height
            + self.trailing_spacer_height
        )

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(v.key for v in self.visible_items)


def empty_output(item_height: float) -> CompositedOutput[Any]:
    return CompositedOutput(
        window=EMPTY_WINDOW,
        item_count=0,
        item_height=item_height,
        leading_spacer_height=0,
        visible_items=(),
        trailing_spacer_height=0,
    )


def composite(
    collection: Sequence[T],
    window: RenderWindow,
    item_height: float,
    key_resolver: KeyResolver[T] | Callable[[T, int], str] | None = None,
    item_count: int | None = None,
) -> CompositedOutput[T]:
    """Materialize ``collection[window.start_index:window.end_index]``.

    Only indices inside the window are read. *item_count* defaults to
    ``len(collection)``; a declared count that disagrees with the collection
    (a stale count cached apart from the data) raises
    ``InconsistentCollectionError`` instead of reading out of bounds.
    """
    validate_item_height(item_height)
    length = len(collection)
    if item_count is None:
        item_count = length
    validate_count("item_count", item_count)
    _validate_window(window)

    if item_count != length:
        raise InconsistentCollectionError(
            f"item_count {item_count} does not match collection length {length}"
        )
    if window.end_index > length:
        raise InconsistentCollectionError(
            f"window ends at {window.end_index} but collection has {length} items"
        )

    if key_resolver is None:
        resolve = KeyResolver().resolve
    elif isinstance(key_resolver, KeyResolver):
        resolve = key_resolver.resolve
    else:
        resolve = KeyResolver(key_resolver).resolve

    items: list[VisibleItem[T]] = []
    for i in window.indices():
        item = collection[i]
        items.append(VisibleItem(index=i, key=resolve(item, i), item=item))
    visible = tuple(items)
    _warn_duplicate_keys(visible)

    return CompositedOutput(
        window=window,
        item_count=item_count,
        item_height=item_height,
        leading_spacer_height=window.start_index * item_height,
        visible_items=visible,
        trailing_spacer_height=max(0, item_count - window.end_index) * item_height,
    )


def _validate_window(window: RenderWindow) -> None:
    if not 0 <= window.start_index <= window.end_index:
        raise InvalidConfigurationError(
            f"malformed window [{window.start_index}, {window.end_index})"
        )


def _warn_duplicate_keys(visible: tuple[VisibleItem[Any], ...]) -> None:
    seen: set[str] = set()
    for v in visible:
        if v.key in seen:
            logger.warning("Duplicate row key %r at index %d", v.key, v.index)
            return
        seen.add(v.key)
