import pytest

from dotfont.buffer.codec import decode_column, decode_columns, encode_bitmap, encode_column
from dotfont.errors import ConfigurationError, UnsupportedHeightError


def test_row_zero_is_most_significant_bit():
    bitmap = [[True], [False], [False], [False], [False], [False], [False], [False]]
    assert encode_bitmap(bitmap) == (0x80,)


def test_bottom_row_is_bit_zero_for_short_glyphs():
    bitmap = [[False, True], [False, False], [True, True]]
    assert encode_bitmap(bitmap) == (0b001, 0b101)


def test_full_column_at_height_eight():
    assert encode_bitmap([[True]] * 8) == (0xFF,)


def test_zero_column_bitmap_encodes_to_nothing():
    assert encode_bitmap(((),) * 5) == ()


def test_decode_ignores_bits_above_height():
    bitmap = decode_columns([0xFF], 1, 3)
    assert bitmap == ((True,), (True,), (True,))
    assert encode_bitmap(bitmap) == (0b111,)


def test_decode_missing_bytes_are_empty_columns():
    assert decode_columns([0b10], 2, 2) == ((True, False), (False, False))


@pytest.mark.parametrize("height", [1, 3, 7, 8])
def test_round_trip(height):
    bitmap = tuple(tuple((r * 3 + c) % 2 == 0 for c in range(5)) for r in range(height))
    data = encode_bitmap(bitmap)
    assert all(b < (1 << height) for b in data)
    assert decode_columns(data, 5, height) == bitmap


def test_single_column_helpers():
    assert encode_column([True, False, True]) == 0b101
    assert decode_column(0b101, 3) == (True, False, True)


def test_height_above_eight_is_rejected():
    with pytest.raises(UnsupportedHeightError):
        encode_bitmap([[False]] * 9)
    with pytest.raises(UnsupportedHeightError):
        decode_columns([0], 1, 9)


def test_height_zero_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        decode_columns([0], 1, 0)
