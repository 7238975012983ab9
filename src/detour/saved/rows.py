"""Row rendering for saved detours in a VirtualList."""

from __future__ import annotations

from typing import Callable

from detour.saved.types import SavedDetour
from detour.virtual.utils import truncate_to_width, visible_width

_STATUS_BADGES = {"planned": "[planned]", "completed": "[done]"}


def _identity(text: str) -> str:
    return text


class DetourRow:
    """Formats one saved detour as a title line and a details line."""

    LINES = 2

    def __init__(
        self,
        title: Callable[[str], str] = _identity,
        muted: Callable[[str], str] = _identity,
    ) -> None:
        self._title = title
        self._muted = muted

    def render(self, detour: SavedDetour, index: int, width: int) -> list[str]:
        badge = _STATUS_BADGES.get(detour.status, f"[{detour.status}]")
        prefix = f"{index + 1}. "
        name_width = max(0, width - visible_width(prefix) - visible_width(badge) - 1)
        name = truncate_to_width(detour.name, name_width, pad=True)
        first = f"{prefix}{self._title(name)} {badge}"

        details = " · ".join(p for p in (detour.interest, detour.poi.name) if p)
        indent = " " * visible_width(prefix)
        second = indent + self._muted(
            truncate_to_width(details, max(0, width - len(indent)))
        )
        return [first, second]

    __call__ = render
