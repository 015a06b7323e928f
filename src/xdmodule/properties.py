"""Parser for the Java ``.properties`` text format.

Follows the rules of ``java.util.Properties.load``:

* natural lines end with ``\\n``, ``\\r`` or ``\\r\\n``;
* a line ending with an odd number of backslashes continues on the next line,
  whose leading whitespace is dropped;
* blank lines and lines starting with ``#`` or ``!`` are comments;
* the key ends at the first unescaped ``=``, ``:`` or whitespace, and at most
  one ``=``/``:`` separator (surrounded by optional whitespace) is consumed;
* ``\\t``, ``\\n``, ``\\r``, ``\\f`` and ``\\uXXXX`` escapes are decoded, any
  other escaped character stands for itself.

Example::

    from xdmodule.properties import loads

    loads("options.timeout.description = Timeout in ms\\n")
    # {'options.timeout.description': 'Timeout in ms'}
"""

from __future__ import annotations

import re
from typing import IO, Iterator

from xdmodule.errors import PropertiesParseError

__all__ = ["load", "loads", "loads_bytes"]

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_SIMPLE_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _is_continued(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _logical_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, logical_line)`` pairs with comments removed."""
    pending: str | None = None
    start = 0
    for lineno, raw in enumerate(_LINE_BREAK.split(text), start=1):
        line = raw.lstrip(_WHITESPACE)
        if pending is None:
            if not line or line[0] in "#!":
                continue
            start = lineno
            pending = ""
        if _is_continued(line):
            pending += line[:-1]
            continue
        yield start, pending + line
        pending = None
    if pending is not None:
        yield start, pending


def _split_key_value(line: str) -> tuple[str, str]:
    key_end = len(line)
    value_start = len(line)
    has_separator = False
    escaped = False
    for i, c in enumerate(line):
        if not escaped:
            if c in _SEPARATORS:
                key_end, value_start, has_separator = i, i + 1, True
                break
            if c in _WHITESPACE:
                key_end, value_start = i, i + 1
                break
        escaped = c == "\\" and not escaped

    while value_start < len(line):
        c = line[value_start]
        if c not in _WHITESPACE:
            if has_separator or c not in _SEPARATORS:
                break
            has_separator = True
        value_start += 1

    return line[:key_end], line[value_start:]


def _unescape(text: str, lineno: int) -> str:
    if "\\" not in text:
        return text

    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        c = text[i]
        i += 1
        if c != "\\":
            out.append(c)
            continue
        if i >= n:
            break
        c = text[i]
        i += 1
        if c == "u":
            digits = text[i : i + 4]
            if len(digits) < 4 or not set(digits) <= _HEX_DIGITS:
                raise PropertiesParseError(
                    message=f"Malformed \\uxxxx encoding on line {lineno}: \\u{digits}",
                    line=lineno,
                )
            out.append(chr(int(digits, 16)))
            i += 4
        else:
            out.append(_SIMPLE_ESCAPES.get(c, c))

    result = "".join(out)
    # astral characters arrive as escaped surrogate pairs
    if any("\ud800" <= ch <= "\udfff" for ch in result):
        result = result.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")
    return result


def loads(text: str) -> dict[str, str]:
    """Parse properties text into an insertion-ordered dict.

    Keys keep the position of their first appearance; a later duplicate
    overwrites the earlier value.

    Raises:
        PropertiesParseError: On a malformed ``\\uXXXX`` escape.
    """
    result: dict[str, str] = {}
    for lineno, line in _logical_lines(text):
        raw_key, raw_value = _split_key_value(line)
        result[_unescape(raw_key, lineno)] = _unescape(raw_value, lineno)
    return result


def loads_bytes(data: bytes) -> dict[str, str]:
    """Parse raw properties bytes, decoded as UTF-8 with a Latin-1 fallback."""
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError:
        text = data.decode("latin-1")
    return loads(text)


def load(fp: IO[bytes] | IO[str]) -> dict[str, str]:
    """Parse properties from a binary or text file object."""
    content = fp.read()
    if isinstance(content, bytes):
        return loads_bytes(content)
    return loads(content)
