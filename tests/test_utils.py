"""Tests for detour.virtual.utils -- terminal text measurement."""

from __future__ import annotations

from detour.virtual.utils import (
    pad_to_width,
    strip_ansi,
    truncate_to_width,
    visible_width,
)


class TestVisibleWidth:
    """Measure the visible terminal width of text."""

    def test_plain_ascii(self) -> None:
        assert visible_width("hello") == 5

    def test_empty_string(self) -> None:
        assert visible_width("") == 0

    def test_ansi_codes_do_not_count(self) -> None:
        assert visible_width("\x1b[1mhi\x1b[0m") == 2

    def test_wide_cjk_characters_count_as_two(self) -> None:
        assert visible_width("世") == 2

    def test_mixed_ascii_and_wide(self) -> None:
        assert visible_width("A世B") == 4

    def test_tab_counts_as_three_spaces(self) -> None:
        assert visible_width("\t") == 3

    def test_combining_mark_is_one_cluster(self) -> None:
        # "e" + COMBINING ACUTE ACCENT
        assert visible_width("e\u0301") == 1

    def test_osc8_hyperlink_does_not_count(self) -> None:
        text = "\x1b]8;;https://example.com\x07link\x1b]8;;\x07"
        assert visible_width(text) == 4

    def test_middle_dot_separator(self) -> None:
        assert visible_width("Cafe · Park") == 11


class TestTruncateToWidth:
    """Fit text into a column budget."""

    def test_short_text_unchanged(self) -> None:
        assert truncate_to_width("hello", 10) == "hello"

    def test_exact_width_unchanged(self) -> None:
        assert truncate_to_width("hello", 5) == "hello"

    def test_long_text_gets_ellipsis(self) -> None:
        result = truncate_to_width("hello world", 8)
        assert result == "hello..."
        assert visible_width(result) == 8

    def test_custom_ellipsis(self) -> None:
        assert truncate_to_width("hello world", 6, "") == "hello "

    def test_zero_width(self) -> None:
        assert truncate_to_width("hello", 0) == ""

    def test_width_smaller_than_ellipsis(self) -> None:
        assert truncate_to_width("hello", 2) == ".."

    def test_pad(self) -> None:
        assert truncate_to_width("hi", 5, pad=True) == "hi   "

    def test_wide_characters_not_split(self) -> None:
        result = truncate_to_width("世世世", 5, "")
        assert result == "世世"
        assert visible_width(result) == 4

    def test_wide_characters_padded(self) -> None:
        result = truncate_to_width("世世世", 5, "", pad=True)
        assert visible_width(result) == 5

    def test_ansi_codes_preserved(self) -> None:
        result = truncate_to_width("\x1b[31mhello world\x1b[0m", 8)
        assert result.startswith("\x1b[31mhello")
        assert visible_width(result) == 8


class TestHelpers:
    """strip_ansi and pad_to_width."""

    def test_strip_ansi(self) -> None:
        assert strip_ansi("\x1b[1m\x1b[31mabc\x1b[0m") == "abc"

    def test_pad_to_width(self) -> None:
        assert pad_to_width("ab", 4) == "ab  "

    def test_pad_never_truncates(self) -> None:
        assert pad_to_width("abcdef", 4) == "abcdef"
