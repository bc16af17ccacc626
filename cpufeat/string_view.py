"""Small helpers for scanning the text of cpuinfo-like files.

Searches stop at the first NUL character, mirroring how the
underlying data is treated as a C string.
"""

from __future__ import annotations

_WHITESPACE = " \t\n\v\f\r"
_HEX_DIGITS = "0123456789abcdef"
_HEX_CHARS = frozenset("0123456789abcdefABCDEF")
_HEX_PREFIX = "0x"
_ATTRIBUTE_SEPARATOR = ": "


def _searchable(view: str) -> str:
    """Return the part of ``view`` before its first NUL character."""
    nul = view.find("\0")
    return view if nul < 0 else view[:nul]


def index_of_char(view: str, c: str) -> int:
    """Return the index of the first ``c`` in ``view``, or -1."""
    if len(c) != 1:
        raise ValueError("c must be a single character")
    return _searchable(view).find(c)


def index_of(view: str, sub_view: str) -> int:
    """Return the index of the first occurrence of ``sub_view``, or -1.

    An empty ``sub_view`` is never found.
    """
    if not sub_view:
        return -1
    index = view.find(sub_view)
    if index < 0 or index >= len(_searchable(view)):
        return -1
    return index


def starts_with(a: str, b: str) -> bool:
    """Return True when ``a`` begins with the non-empty string ``b``."""
    return bool(b) and a.startswith(b)


def trim_whitespace(view: str) -> str:
    """Strip leading and trailing ASCII whitespace."""
    return view.strip(_WHITESPACE)


def _digit_value(ch: str) -> int:
    if ch not in _HEX_CHARS:
        return -1
    return _HEX_DIGITS.index(ch.lower())


def parse_positive_number(view: str) -> int:
    """Parse a decimal or ``0x``-prefixed hexadecimal number.

    Returns -1 when ``view`` is empty or holds anything but digits.
    """
    if not view:
        return -1
    if starts_with(view, _HEX_PREFIX):
        digits, base = view[len(_HEX_PREFIX):], 16
    else:
        digits, base = view, 10
    result = 0
    for ch in digits:
        value = _digit_value(ch)
        if value < 0 or value >= base:
            return -1
        result = result * base + value
    return result


def copy_string(src: str, dst_size: int) -> str:
    """Return ``src`` truncated to fit a buffer of ``dst_size`` with a terminator."""
    if dst_size < 0:
        raise ValueError("dst_size must not be negative")
    if dst_size == 0:
        return ""
    return src[: dst_size - 1]


def has_word(line: str, word: str, separator: str) -> bool:
    """Return True when ``word`` appears in ``line`` delimited by ``separator``.

    A match is delimited when it sits at the start of the line or after a
    separator, and at the end of the line or before a separator.
    """
    if not word:
        return False
    start = 0
    while True:
        found = index_of(line[start:], word)
        if found < 0:
            return False
        position = start + found
        end = position + len(word)
        valid_before = position == 0 or line[position - 1] == separator
        valid_after = end == len(line) or line[end] == separator
        if valid_before and valid_after:
            return True
        start = end


def get_attribute_key_value(line: str) -> tuple[str, str] | None:
    """Split ``"key : value"`` into a trimmed ``(key, value)`` pair.

    Returns None when the line has no ``": "`` separator.
    """
    index = index_of(line, _ATTRIBUTE_SEPARATOR)
    if index < 0:
        return None
    key = trim_whitespace(line[:index])
    value = trim_whitespace(line[index + len(_ATTRIBUTE_SEPARATOR):])
    return key, value