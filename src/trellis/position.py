"""Conversion between protocol positions and byte offsets.

Text is measured as UTF-8 bytes; ``Position.character`` counts code units of
the negotiated position encoding. A position past the end of the text, or one
reached through invalid UTF-8, maps to offset ``0``. A character past the end
of its line clamps to the line end.
"""

from __future__ import annotations

from trellis.protocol.enums import PositionEncodingKind
from trellis.protocol.structures import Position, Range

_NEWLINE = 0x0A


def code_units(scalar: int, encoding: PositionEncodingKind | str) -> int:
    """Number of code units ``scalar`` occupies in ``encoding``."""
    kind = PositionEncodingKind(encoding)
    if kind is PositionEncodingKind.UTF8:
        if scalar < 0x80:
            return 1
        if scalar < 0x800:
            return 2
        if scalar < 0x10000:
            return 3
        return 4
    if kind is PositionEncodingKind.UTF16:
        return 2 if scalar >= 0x10000 else 1
    return 1


def _as_bytes(text: str | bytes) -> bytes:
    if isinstance(text, str):
        return text.encode("utf-8", errors="surrogatepass")
    return bytes(text)


def _decode_scalar(data: bytes, index: int) -> tuple[int, int] | None:
    """Decode one UTF-8 scalar at ``index``; return ``(scalar, width)`` or None."""
    lead = data[index]
    if lead < 0x80:
        return lead, 1
    if 0xC2 <= lead <= 0xDF:
        width = 2
    elif 0xE0 <= lead <= 0xEF:
        width = 3
    elif 0xF0 <= lead <= 0xF4:
        width = 4
    else:
        return None
    chunk = data[index : index + width]
    if len(chunk) < width:
        return None
    try:
        decoded = chunk.decode("utf-8")
    except UnicodeDecodeError:
        return None
    return ord(decoded), width


def _line_start(data: bytes, line: int) -> int:
    index = 0
    for _ in range(line):
        newline = data.find(b"\n", index)
        if newline < 0:
            return len(data)
        index = newline + 1
    return index


def position_to_byte_offset(
    text: str | bytes,
    position: Position,
    encoding: PositionEncodingKind | str = PositionEncodingKind.UTF16,
) -> int:
    data = _as_bytes(text)
    index = _line_start(data, position.line)
    count = 0
    while count < position.character:
        if index >= len(data):
            return 0
        decoded = _decode_scalar(data, index)
        if decoded is None:
            return 0
        scalar, width = decoded
        if scalar == _NEWLINE:
            break
        count += code_units(scalar, encoding)
        if count > position.character:
            # Target lands inside a multi-unit scalar; stop before it.
            break
        index += width
    return index


def range_to_byte_offsets(
    text: str | bytes,
    range: Range,
    encoding: PositionEncodingKind | str = PositionEncodingKind.UTF16,
) -> tuple[int, int]:
    return (
        position_to_byte_offset(text, range.start, encoding),
        position_to_byte_offset(text, range.end, encoding),
    )


def end_of_line(
    text: str | bytes,
    position: Position,
    encoding: PositionEncodingKind | str = PositionEncodingKind.UTF16,
) -> Position:
    """Position of the newline ending ``position``'s line.

    Returns ``position`` unchanged when no newline follows it.
    """
    data = _as_bytes(text)
    index = position_to_byte_offset(data, position, encoding)
    newline = data.find(b"\n", index)
    if newline < 0:
        return position
    extra = 0
    while index < newline:
        decoded = _decode_scalar(data, index)
        if decoded is None:
            return position
        scalar, width = decoded
        extra += code_units(scalar, encoding)
        index += width
    return Position(line=position.line, character=position.character + extra)
