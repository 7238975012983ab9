"""Spacer component that renders blank rows."""

from __future__ import annotations


class Spacer:
    """Inert block of blank rows standing in for unrendered content."""

    def __init__(self, lines: int = 1) -> None:
        self._lines = max(0, lines)

    @property
    def lines(self) -> int:
        return self._lines

    def set_lines(self, lines: int) -> None:
        self._lines = max(0, lines)

    def invalidate(self) -> None:
        pass

    def render(self, width: int) -> list[str]:
        return [" " * width] * self._lines
