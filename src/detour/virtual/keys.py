"""Stable item keys for virtualized rows.

Positional keys (``virtual-<index>``) are only stable while the collection
keeps its order and length. Items whose per-row state must survive removals
or reordering need an extractor keyed on their own identifier.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Generic, TypeVar

from detour.virtual.errors import InvalidConfigurationError

T = TypeVar("T")

KeyExtractor = Callable[[T, int], str]

POSITIONAL_KEY_PREFIX = "virtual-"


def positional_key(index: int) -> str:
    return f"{POSITIONAL_KEY_PREFIX}{index}"


def resolve_key(
    item: T, absolute_index: int, extractor: KeyExtractor[T] | None = None
) -> str:
    """Resolve the key for *item* at *absolute_index*."""
    if extractor is None:
        return positional_key(absolute_index)
    key = extractor(item, absolute_index)
    if not isinstance(key, str):
        raise InvalidConfigurationError(
            f"key extractor must return str, got {type(key).__name__}"
        )
    return key


class KeyResolver(Generic[T]):
    """Resolves row keys with an optional caller-supplied extractor."""

    def __init__(self, extractor: KeyExtractor[T] | None = None) -> None:
        self._extractor = extractor

    @property
    def is_positional(self) -> bool:
        return self._extractor is None

    def resolve(self, item: T, absolute_index: int) -> str:
        return resolve_key(item, absolute_index, self._extractor)

    __call__ = resolve


def key_by_field(name: str) -> KeyExtractor[Any]:
    """Build an extractor that reads *name* from a mapping or an attribute.

    ``key_by_field("id")`` keys saved detours (dataclasses) and their raw
    JSON dicts alike.
    """

    def extract(item: Any, index: int) -> str:
        if isinstance(item, Mapping):
            if name not in item:
                raise InvalidConfigurationError(
                    f"item at index {index} has no {name!r} key"
                )
            value = item[name]
        else:
            try:
                value = getattr(item, name)
            except AttributeError:
                raise InvalidConfigurationError(
                    f"item at index {index} has no {name!r} attribute"
                ) from None
        return str(value)

    return extract
