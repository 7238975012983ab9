"""Terminal text measurement for rendered rows.

Widths are measured in terminal columns: ANSI / OSC / APC escape sequences
take no space, grapheme clusters are measured as a unit, and wide (CJK,
emoji) clusters take two columns.
"""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth

# CSI, OSC 8 hyperlinks and APC payloads
_ESCAPE_RE = re.compile(
    r"\x1b\[[0-9;]*[mGKHJ]"
    r"|\x1b\]8;;[^\x07]*\x07"
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"
)

_TAB_WIDTH = 3

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cluster_width(cluster: str) -> int:
    if not cluster:
        return 0

    first = cluster[0]
    cp = ord(first)
    if len(cluster) == 1:
        if cp < 0x20 or 0x7F <= cp <= 0x9F:
            return 0
        return max(_wcwidth.wcwidth(first), 0)

    # VS16, ZWJ sequences, skin tones and flags render as one wide glyph
    for ch in cluster:
        c = ord(ch)
        if c in (0xFE0F, 0x200D) or 0x1F3FB <= c <= 0x1F3FF or 0x1F1E6 <= c <= 0x1F1FF:
            return 2
    if cp >= 0x1F000 or 0x2600 <= cp <= 0x27BF:
        return 2

    category = unicodedata.category(first)
    if category.startswith("M") or category == "Cf":
        return 0
    return max(_wcwidth.wcwidth(first), 0)


def strip_ansi(text: str) -> str:
    return _ESCAPE_RE.sub("", text)


def visible_width(text: str) -> int:
    """Visible terminal width of *text*, ignoring escape sequences."""
    if not text:
        return 0
    plain = strip_ansi(text).replace("\t", " " * _TAB_WIDTH)
    if plain.isascii() and plain.isprintable():
        return len(plain)

    cached = _width_cache.get(plain)
    if cached is not None:
        return cached

    width = sum(_cluster_width(g) for g in grapheme.graphemes(plain))
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[plain] = width
    return width


def _take_columns(text: str, max_cols: int) -> str:
    """Longest prefix of *text* fitting in *max_cols*, escapes kept intact."""
    out: list[str] = []
    cols = 0
    pos = 0
    for match in _ESCAPE_RE.finditer(text):
        cols, done = _take_plain(text[pos : match.start()], max_cols, cols, out)
        if done:
            return "".join(out)
        out.append(match.group())
        pos = match.end()
    _take_plain(text[pos:], max_cols, cols, out)
    return "".join(out)


def _take_plain(
    chunk: str, max_cols: int, cols: int, out: list[str]
) -> tuple[int, bool]:
    for cluster in grapheme.graphemes(chunk):
        w = _TAB_WIDTH if cluster == "\t" else _cluster_width(cluster)
        if cols + w > max_cols:
            return cols, True
        out.append(cluster)
        cols += w
    return cols, False


def truncate_to_width(
    text: str,
    max_width: int,
    ellipsis: str = "...",
    pad: bool = False,
) -> str:
    """Fit *text* into *max_width* columns.

    Overlong text is cut at a grapheme boundary and *ellipsis* appended (the
    ellipsis counts towards the width). With *pad* the result is
    right-padded to exactly *max_width*.
    """
    if max_width <= 0:
        return ""

    width = visible_width(text)
    if width <= max_width:
        return text + " " * (max_width - width) if pad else text

    room = max_width - visible_width(ellipsis)
    if room <= 0:
        return _take_columns(ellipsis, max_width)

    result = _take_columns(text, room) + ellipsis
    if pad:
        result = pad_to_width(result, max_width)
    return result


def pad_to_width(text: str, width: int) -> str:
    return text + " " * max(0, width - visible_width(text))
