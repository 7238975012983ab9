"""Tests for the Spacer and VirtualList components."""

from __future__ import annotations

import string

import pytest

from detour.virtual.components.spacer import Spacer
from detour.virtual.components.virtual_list import VirtualList
from detour.virtual.errors import InvalidConfigurationError
from detour.virtual.keys import key_by_field
from detour.virtual.utils import visible_width
from detour.virtual.window import RenderWindow

LETTERS = list(string.ascii_lowercase)


def _two_line_item(item: str, index: int, width: int) -> list[str]:
    return [f"{item}-top", f"{item}-bottom"]


def _make_list(
    items: list[str] | None = None, viewport_height: int = 5, **kwargs: object
) -> VirtualList[str]:
    return VirtualList(
        LETTERS if items is None else items,
        _two_line_item,
        item_height=2,
        viewport_height=viewport_height,
        **kwargs,  # type: ignore[arg-type]
    )


def _stripped(lines: list[str]) -> list[str]:
    return [line.rstrip() for line in lines]


# ---------------------------------------------------------------------------
# Spacer
# ---------------------------------------------------------------------------


class TestSpacer:
    """Spacer renders blank rows of the given width."""

    def test_renders_requested_lines(self) -> None:
        assert Spacer(3).render(4) == ["    ", "    ", "    "]

    def test_zero_lines(self) -> None:
        assert Spacer(0).render(10) == []

    def test_negative_lines_clamped(self) -> None:
        assert Spacer(-2).lines == 0

    def test_set_lines(self) -> None:
        spacer = Spacer()
        spacer.set_lines(2)
        assert len(spacer.render(1)) == 2


# ---------------------------------------------------------------------------
# VirtualList rendering
# ---------------------------------------------------------------------------


class TestVirtualListRender:
    """Always renders exactly viewport_height rows of the right width."""

    def test_top_of_list(self) -> None:
        vl = _make_list()
        lines = vl.render(10)
        assert _stripped(lines) == ["a-top", "a-bottom", "b-top", "b-bottom", "c-top"]
        assert all(visible_width(line) == 10 for line in lines)

    def test_partial_item_at_top(self) -> None:
        vl = _make_list()
        vl.scroll_to(3)
        assert _stripped(vl.render(10)) == [
            "b-bottom",
            "c-top",
            "c-bottom",
            "d-top",
            "d-bottom",
        ]

    def test_middle_of_list_uses_leading_spacer(self) -> None:
        vl = _make_list()
        vl.scroll_to(20)
        assert _stripped(vl.render(10)) == ["k-top", "k-bottom", "l-top", "l-bottom", "m-top"]
        out = vl.last_output
        assert out.window == RenderWindow(8, 15)
        assert out.leading_spacer_height == 16

    def test_scroll_clamped_to_content_end(self) -> None:
        vl = _make_list()
        vl.scroll_to(1000)
        assert vl.scroll_offset == vl.max_scroll_offset == 47
        assert _stripped(vl.render(10)) == ["x-bottom", "y-top", "y-bottom", "z-top", "z-bottom"]

    def test_scroll_clamped_to_zero(self) -> None:
        vl = _make_list()
        vl.scroll_to(-30)
        assert vl.scroll_offset == 0

    def test_short_list_filled_with_blank_rows(self) -> None:
        vl = _make_list(["a", "b"])
        lines = vl.render(8)
        assert _stripped(lines) == ["a-top", "a-bottom", "b-top", "b-bottom", ""]
        assert lines[-1] == " " * 8

    def test_empty_list(self) -> None:
        vl = _make_list([])
        assert vl.render(4) == ["    "] * 5
        assert vl.last_output.visible_items == ()

    def test_zero_viewport(self) -> None:
        vl = _make_list(viewport_height=0)
        assert vl.render(10) == []

    def test_only_window_items_rendered(self) -> None:
        rendered: list[int] = []

        def render_item(item: int, index: int, width: int) -> list[str]:
            rendered.append(index)
            return [str(item)]

        vl = VirtualList(list(range(10_000)), render_item, item_height=1, viewport_height=3)
        vl.scroll_to(5000)
        vl.render(20)
        assert rendered == list(range(4998, 5005))


class TestVirtualListItemFitting:
    """Items are clipped or padded to item_height rows and width columns."""

    def test_extra_lines_clipped(self) -> None:
        vl = VirtualList(["x"], lambda item, i, w: ["1", "2", "3"], item_height=2, viewport_height=2)
        assert _stripped(vl.render(5)) == ["1", "2"]

    def test_missing_lines_padded(self) -> None:
        vl = VirtualList(["x", "y"], lambda item, i, w: [item], item_height=2, viewport_height=4)
        assert _stripped(vl.render(5)) == ["x", "", "y", ""]

    def test_long_lines_truncated(self) -> None:
        vl = VirtualList(["abcdefghij"], lambda item, i, w: [item], item_height=1, viewport_height=1)
        assert vl.render(6) == ["abc..."]


class TestVirtualListScrolling:
    """Scrolling helpers keep the offset inside the content."""

    def test_page_down_and_up(self) -> None:
        vl = _make_list()
        vl.page_down()
        assert vl.scroll_offset == 5
        vl.page_up()
        assert vl.scroll_offset == 0

    def test_scroll_by(self) -> None:
        vl = _make_list()
        vl.scroll_by(7)
        vl.scroll_by(-2)
        assert vl.scroll_offset == 5

    def test_scroll_to_index_below(self) -> None:
        vl = _make_list()
        vl.scroll_to_index(10)
        assert vl.scroll_offset == 17
        assert _stripped(vl.render(10))[-2:] == ["k-top", "k-bottom"]

    def test_scroll_to_index_already_visible(self) -> None:
        vl = _make_list()
        vl.scroll_to(17)
        vl.scroll_to_index(9)
        assert vl.scroll_offset == 17

    def test_scroll_to_index_above(self) -> None:
        vl = _make_list()
        vl.scroll_to(17)
        vl.scroll_to_index(2)
        assert vl.scroll_offset == 4

    def test_set_items_clamps_scroll(self) -> None:
        vl = _make_list()
        vl.scroll_to(47)
        vl.set_items(LETTERS[:3])
        assert vl.scroll_offset == 1
        assert _stripped(vl.render(10)) == ["a-bottom", "b-top", "b-bottom", "c-top", "c-bottom"]

    def test_resize(self) -> None:
        vl = _make_list()
        vl.resize(2)
        assert _stripped(vl.render(10)) == ["a-top", "a-bottom"]


class TestVirtualListCacheAndKeys:
    """Render caching and stable keys in the last output."""

    def test_render_cached_until_invalidated(self) -> None:
        vl = _make_list()
        first = vl.render(10)
        assert vl.render(10) is first
        vl.scroll_by(1)
        assert vl.render(10) is not first

    def test_width_change_rerenders(self) -> None:
        vl = _make_list()
        first = vl.render(10)
        assert vl.render(12) is not first

    def test_keys_from_extractor(self) -> None:
        items = [{"id": f"d{i}", "name": f"n{i}"} for i in range(6)]
        vl = VirtualList(
            items,
            lambda item, i, w: [item["name"]],
            item_height=1,
            viewport_height=2,
            overscan_items=0,
            key_extractor=key_by_field("id"),
        )
        vl.render(10)
        assert vl.last_output.keys == ("d0", "d1")
        vl.set_items([items[0], *items[2:]])
        vl.render(10)
        assert vl.last_output.keys == ("d0", "d2")


class TestVirtualListGeometry:
    """Row geometry must be whole, valid row counts."""

    def test_fractional_item_height_rejected(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            VirtualList(LETTERS, _two_line_item, item_height=1.5)  # type: ignore[arg-type]

    def test_fractional_item_height_rejected_on_set(self) -> None:
        vl = _make_list()
        with pytest.raises(InvalidConfigurationError):
            vl.set_item_height(0.5)  # type: ignore[arg-type]
        assert vl.item_height == 2

    def test_fractional_viewport_rejected(self) -> None:
        vl = _make_list()
        with pytest.raises(InvalidConfigurationError):
            vl.resize(2.5)  # type: ignore[arg-type]

    def test_zero_item_height_rejected(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            VirtualList(LETTERS, _two_line_item, item_height=0)
