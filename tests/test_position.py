from __future__ import annotations

import pytest

from trellis.position import (
    code_units,
    end_of_line,
    position_to_byte_offset,
    range_to_byte_offsets,
)
from trellis.protocol.enums import PositionEncodingKind
from trellis.protocol.structures import Position, Range

TEXT = (
    "This is the first line\n"
    "This is the second line\n"
    "This is the third line\n"
    "Fourth line\U00012003\U00010000here"
)


def _pos(line: int, character: int) -> Position:
    return Position(line=line, character=character)


@pytest.mark.parametrize(
    ("encoding", "character"),
    [
        (PositionEncodingKind.UTF16, 15),
        (PositionEncodingKind.UTF32, 13),
        (PositionEncodingKind.UTF8, 19),
    ],
)
def test_offset_after_astral_scalars(encoding: PositionEncodingKind, character: int) -> None:
    assert position_to_byte_offset(TEXT, _pos(3, character), encoding) == 89


def test_default_encoding_is_utf16() -> None:
    assert position_to_byte_offset(TEXT, _pos(3, 15)) == 89


def test_offset_accepts_utf8_bytes() -> None:
    data = TEXT.encode("utf-8")
    assert position_to_byte_offset(data, _pos(3, 15), "utf-16") == 89


def test_offset_start_of_lines() -> None:
    assert position_to_byte_offset(TEXT, _pos(0, 0)) == 0
    assert position_to_byte_offset(TEXT, _pos(1, 0)) == 23
    assert position_to_byte_offset(TEXT, _pos(3, 0)) == 70


def test_character_past_line_end_clamps_to_newline() -> None:
    assert position_to_byte_offset(TEXT, _pos(0, 100)) == 22


def test_character_past_end_of_text_is_zero() -> None:
    assert position_to_byte_offset(TEXT, _pos(3, 150)) == 0


def test_line_past_end_of_text_starts_at_text_end() -> None:
    length = len(TEXT.encode("utf-8"))
    assert position_to_byte_offset(TEXT, _pos(10, 0)) == length
    assert position_to_byte_offset(TEXT, _pos(10, 1)) == 0


def test_target_inside_surrogate_pair_stops_before_scalar() -> None:
    assert position_to_byte_offset(TEXT, _pos(3, 12), PositionEncodingKind.UTF16) == 81


def test_target_inside_utf8_sequence_stops_before_scalar() -> None:
    assert position_to_byte_offset(TEXT, _pos(3, 13), PositionEncodingKind.UTF8) == 81


def test_invalid_utf8_yields_zero() -> None:
    assert position_to_byte_offset(b"ab\xffcd", _pos(0, 3), "utf-8") == 0


def test_range_offsets() -> None:
    span = Range(start=_pos(3, 15), end=_pos(3, 18))
    assert range_to_byte_offsets(TEXT, span, PositionEncodingKind.UTF16) == (89, 92)
    assert span.indexes_in(TEXT) == (89, 92)


def test_position_index_in_delegates() -> None:
    assert _pos(3, 13).index_in(TEXT, PositionEncodingKind.UTF32) == 89


def test_end_of_line_counts_code_units() -> None:
    text = "First line\nSecond line\nThird line\nFourth line\U00012003\U00010000here\n"
    assert end_of_line(text, _pos(3, 15), PositionEncodingKind.UTF16) == _pos(3, 19)
    assert end_of_line(text, _pos(3, 11), PositionEncodingKind.UTF16) == _pos(3, 19)
    assert end_of_line(text, _pos(3, 11), PositionEncodingKind.UTF8) == _pos(3, 23)


def test_end_of_line_without_newline_returns_input() -> None:
    assert end_of_line(TEXT, _pos(3, 15)) == _pos(3, 15)


@pytest.mark.parametrize(
    ("scalar", "utf8", "utf16", "utf32"),
    [
        (ord("a"), 1, 1, 1),
        (0xE9, 2, 1, 1),
        (0x20AC, 3, 1, 1),
        (0x1F600, 4, 2, 1),
    ],
)
def test_code_units(scalar: int, utf8: int, utf16: int, utf32: int) -> None:
    assert code_units(scalar, PositionEncodingKind.UTF8) == utf8
    assert code_units(scalar, PositionEncodingKind.UTF16) == utf16
    assert code_units(scalar, PositionEncodingKind.UTF32) == utf32
