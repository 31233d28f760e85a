"""Read and write flat ``key=value`` property files.

Implements the property-file syntax written by JVM tooling, so existing
``hoodie.properties``-style files load unchanged:

- ``#`` or ``!`` as the first non-blank character starts a comment line
- the key ends at the first unescaped ``=``, ``:`` or whitespace
- a line ending in an odd number of backslashes continues on the next line
- ``\\t \\n \\r \\f`` and ``\\uXXXX`` escapes are decoded, with UTF-16
  surrogate pairs combined into a single character
- files are read as UTF-8; undecodable bytes are a format error
- later occurrences of a key override earlier ones

Example:
    >>> from hoodie.foundation.application.properties_file import parse_properties
    >>> parse_properties("hoodie.memory.merge.fraction = 0.5\\n# comment\\n")
    {'hoodie.memory.merge.fraction': '0.5'}
"""

from __future__ import annotations

import re
import string
from pathlib import Path
from typing import TYPE_CHECKING

from hoodie.foundation.domain.exceptions import PropertiesFormatError

if TYPE_CHECKING:
    import os
    from collections.abc import Iterator, Mapping

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_COMMENT_MARKERS = "#!"

_HIGH_SURROGATES = (0xD800, 0xDBFF)
_LOW_SURROGATES = (0xDC00, 0xDFFF)

_DECODE_ESCAPES: dict[str, str] = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_ENCODE_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
    "\f": "\\f",
    "=": "\\=",
    ":": "\\:",
    "#": "\\#",
    "!": "\\!",
}


def _ends_with_continuation(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _logical_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, logical_line)`` pairs, joining continuations.

    Comment and blank lines are dropped unless they continue a previous line.
    """
    buffer: list[str] = []
    start = 0
    for number, raw in enumerate(_LINE_BREAK.split(text), start=1):
        line = raw.lstrip(_WHITESPACE)
        if not buffer:
            if not line or line[0] in _COMMENT_MARKERS:
                continue
            start = number
        if _ends_with_continuation(line):
            buffer.append(line[:-1])
            continue
        buffer.append(line)
        yield start, "".join(buffer)
        buffer = []
    if buffer:
        yield start, "".join(buffer)


def _split_entry(line: str) -> tuple[str, str]:
    """Split a logical line into its raw (still escaped) key and value."""
    length = len(line)
    index = 0
    while index < length:
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        index += 1
    key_end = min(index, length)

    while index < length and line[index] in _WHITESPACE:
        index += 1
    if index < length and line[index] in _SEPARATORS:
        index += 1
    while index < length and line[index] in _WHITESPACE:
        index += 1
    return line[:key_end], line[index:]


def _read_code_unit(raw: str, index: int, line_number: int, source: str | None) -> int:
    """Decode the four hex digits of a ``\\uXXXX`` escape starting at ``index``."""
    digits = raw[index : index + 4]
    if len(digits) != 4 or any(d not in string.hexdigits for d in digits):
        msg = f"malformed \\uxxxx escape '\\u{digits}'"
        raise PropertiesFormatError(msg, line_number, source)
    return int(digits, 16)


def _unescape(raw: str, line_number: int, source: str | None) -> str:
    decoded: list[str] = []
    length = len(raw)
    index = 0
    while index < length:
        char = raw[index]
        index += 1
        if char != "\\":
            decoded.append(char)
            continue
        if index >= length:
            break
        char = raw[index]
        index += 1
        if char != "u":
            decoded.append(_DECODE_ESCAPES.get(char, char))
            continue

        unit = _read_code_unit(raw, index, line_number, source)
        index += 4
        if _LOW_SURROGATES[0] <= unit <= _LOW_SURROGATES[1]:
            msg = f"unpaired low surrogate '\\u{unit:04X}'"
            raise PropertiesFormatError(msg, line_number, source)
        if _HIGH_SURROGATES[0] <= unit <= _HIGH_SURROGATES[1]:
            # Characters above U+FFFF are written as a UTF-16 surrogate pair
            low = None
            if raw.startswith("\\u", index):
                low = _read_code_unit(raw, index + 2, line_number, source)
            if low is None or not _LOW_SURROGATES[0] <= low <= _LOW_SURROGATES[1]:
                msg = f"unpaired high surrogate '\\u{unit:04X}'"
                raise PropertiesFormatError(msg, line_number, source)
            unit = 0x10000 + ((unit - 0xD800) << 10) + (low - 0xDC00)
            index += 6
        decoded.append(chr(unit))
    return "".join(decoded)


def parse_properties(text: str, source: str | None = None) -> dict[str, str]:
    """Parse property-file text into a fresh dict.

    Args:
        text: Full property-file content.
        source: Optional origin (usually a file path) for error context.

    Returns:
        Mapping of decoded keys to decoded values. Duplicate keys keep
        the last value.

    Raises:
        PropertiesFormatError: If an entry contains a malformed
            ``\\uXXXX`` escape or an unpaired surrogate.
    """
    properties: dict[str, str] = {}
    for line_number, line in _logical_lines(text):
        raw_key, raw_value = _split_entry(line)
        key = _unescape(raw_key, line_number, source)
        properties[key] = _unescape(raw_value, line_number, source)
    return properties


def load_properties(path: str | os.PathLike[str]) -> dict[str, str]:
    """Load a property file into a fresh dict.

    The whole file is parsed before anything is returned, so a caller that
    merges the result never observes a partially-read file. The file handle
    is released on every exit path.

    Args:
        path: Path of the property file (read as UTF-8).

    Returns:
        Mapping of keys to values as stored in the file.

    Raises:
        OSError: If the file cannot be opened or read.
        PropertiesFormatError: If the content is not valid UTF-8 or is
            otherwise malformed.
    """
    file_path = Path(path)
    with file_path.open("rb") as handle:
        data = handle.read()
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        line_number = data.count(b"\n", 0, e.start) + 1
        msg = f"invalid UTF-8 byte 0x{data[e.start]:02x} at offset {e.start}"
        raise PropertiesFormatError(msg, line_number, str(file_path)) from e
    return parse_properties(text, source=str(file_path))


def _escape(text: str, *, is_key: bool) -> str:
    escaped: list[str] = []
    for index, char in enumerate(text):
        if char == " ":
            escaped.append("\\ " if is_key or index == 0 else " ")
        else:
            escaped.append(_ENCODE_ESCAPES.get(char, char))
    return "".join(escaped)


def dump_properties(properties: Mapping[str, str], comment: str | None = None) -> str:
    """Render a mapping as property-file text.

    Keys are sorted so the output is stable across runs.

    Args:
        properties: Mapping of keys to string values.
        comment: Optional header, written as ``#`` comment lines.

    Returns:
        Property-file text that ``parse_properties`` reads back unchanged.
    """
    lines: list[str] = []
    if comment:
        lines.extend(f"# {line}" for line in _LINE_BREAK.split(comment))
    for key in sorted(properties):
        value = properties[key]
        lines.append(f"{_escape(key, is_key=True)}={_escape(value, is_key=False)}")
    return "\n".join(lines) + "\n" if lines else ""


def write_properties(
    path: str | os.PathLike[str],
    properties: Mapping[str, str],
    comment: str | None = None,
) -> None:
    """Write a mapping to a property file (UTF-8).

    Args:
        path: Destination file path. Overwritten if it exists.
        properties: Mapping of keys to string values.
        comment: Optional header comment.

    Raises:
        OSError: If the file cannot be written.
    """
    text = dump_properties(properties, comment)
    with Path(path).open("w", encoding="utf-8") as handle:
        handle.write(text)
