"""Reading XPM pixmaps, from files or from in-memory line lists, into images."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from os import PathLike
from pathlib import Path

from .colors import text_to_rgb
from .image import Image

TRANSPARENT = 0xFF000000

_WORD_SEPARATORS = re.compile(r"[ \t]+")
_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be turned into an image."""


def split_words(text: str) -> list[str]:
    """Split ``text`` into words separated by spaces and tabs."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def find_outside_quotes(text: str, needle: str) -> int:
    """Return the first position of ``needle`` outside double quotes, or -1."""
    if not needle:
        raise ValueError("needle must not be empty")
    quoted = False
    for pos in range(len(text) - len(needle) + 1):
        if text[pos] == '"':
            quoted = not quoted
        if not quoted and text.startswith(needle, pos):
            return pos
    return -1


def _blank(text: str, start: int, stop: int) -> str:
    return text[:start] + " " * (stop - start) + text[stop:]


def strip_comments(text: str) -> str:
    """Replace C-style comments outside quoted strings with spaces.

    The text keeps its length. A line comment is blanked together with the
    newline that ends it; an unterminated comment runs to the end.
    """
    while (start := find_outside_quotes(text, "/*")) != -1:
        end = text.find("*/", start + 2)
        text = _blank(text, start, len(text) if end == -1 else end + 2)
    while (start := find_outside_quotes(text, "//")) != -1:
        end = text.find("\n", start + 2)
        text = _blank(text, start, len(text) if end == -1 else end + 1)
    return text


def quoted_lines(text: str) -> Iterator[str]:
    """Yield the contents of successive double-quoted strings in ``text``."""
    pos = 0
    while (start := text.find('"', pos)) != -1:
        end = text.find('"', start + 1)
        if end == -1:
            return
        yield text[start + 1 : end]
        pos = end + 1


def _atoi(word: str) -> int:
    match = _LEADING_INT.match(word)
    return int(match.group(1)) if match else 0


def _next_line(source: Iterator[str], what: str) -> str:
    line = next(source, None)
    if line is None:
        raise XpmError(f"XPM data ends before the {what}")
    return line


def _read_palette(source: Iterator[str], count: int, cpp: int) -> dict[str, int]:
    palette: dict[str, int] = {}
    # One- and two-character keys let a later definition replace an earlier
    # one; longer keys keep the first definition.
    first_wins = cpp > 2
    for _ in range(count):
        line = _next_line(source, "colour definitions")
        key = line[:cpp]
        words = split_words(line[cpp:])
        try:
            index = words.index("c")
        except ValueError:
            raise XpmError(f"colour definition without a 'c' entry: {line!r}") from None
        if index + 1 >= len(words):
            raise XpmError(f"colour definition without a colour: {line!r}")
        name = words[index + 1]
        end = words[index + 2] if index + 2 < len(words) else None
        color = text_to_rgb(name, end)
        if first_wins:
            palette.setdefault(key, color)
        else:
            palette[key] = color
    return palette


def parse_xpm(lines: Iterable[str]) -> Image:
    """Build an image from XPM lines: the header, the colours, then the pixel rows."""
    source = iter(lines)
    header = _next_line(source, "header")
    values = [_atoi(word) for word in split_words(header)[:4]]
    if len(values) < 4 or any(value <= 0 for value in values):
        raise XpmError(f"bad XPM header: {header!r}")
    width, height, ncolors, cpp = values
    palette = _read_palette(source, ncolors, cpp)
    image = Image(width, height)
    for y in range(height):
        row = _next_line(source, "pixel rows")
        if len(row) < width * cpp:
            raise XpmError(f"pixel row {y} is shorter than {width} pixels")
        keys = (row[start : start + cpp] for start in range(0, width * cpp, cpp))
        for x, key in enumerate(keys):
            color = palette.get(key, 0)
            if color == -1:
                color = TRANSPARENT
            image.set_pixel_bytes(x, y, color)
    return image


def xpm_to_image(data: Iterable[str]) -> Image:
    """Build an image from XPM data given as a sequence of unquoted lines."""
    return parse_xpm(data)


def xpm_file_to_image(path: str | PathLike[str]) -> Image:
    """Read an XPM file and return its image."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm(quoted_lines(strip_comments(text)))