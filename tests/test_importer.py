import pytest

from dotfont.errors import (
    ArrayLengthMismatchError,
    ArraySizeMismatchError,
    ConfigurationError,
    OutOfBoundsError,
)
from dotfont.glyph import ImportSpec
from dotfont.io.importer import assemble_font


def test_fixed_mode_slices_per_character():
    result = assemble_font(ImportSpec(data="{0x80, 0x40, 0x01, 0x02}",
                                      character_set="AB", height=8, width=2))
    a, b = result.glyphs
    assert (a.character, a.data) == ("A", (0x80, 0x40))
    assert (b.character, b.data) == ("B", (0x01, 0x02))
    assert a.bitmap[0] == (True, False)
    assert a.bitmap[1] == (False, True)
    assert result.options == {'width': 2, 'height': 8, 'character_set': "AB",
                              'dynamic_width': False, 'spacing': 0}


def test_fixed_mode_drops_duplicate_characters():
    result = assemble_font(ImportSpec(data="[1, 2]", character_set="ABA", height=8, width=1))
    assert [g.character for g in result.glyphs] == ["A", "B"]


def test_fixed_mode_size_mismatch():
    with pytest.raises(ArraySizeMismatchError, match="Expected 4 bytes"):
        assemble_font(ImportSpec(data="{1, 2, 3}", character_set="AB", height=8, width=2))


def test_fixed_mode_empty_data():
    with pytest.raises(ArraySizeMismatchError, match="empty"):
        assemble_font(ImportSpec(data="", character_set="AB", height=8, width=2))


def test_fixed_mode_requires_positive_width():
    with pytest.raises(ConfigurationError):
        assemble_font(ImportSpec(data="{1}", character_set="A", height=8, width=0))


def test_fixed_mode_empty_charset_is_not_checked():
    result = assemble_font(ImportSpec(data="{1, 2, 3}", character_set="", height=8, width=2))
    assert result.glyphs == []


@pytest.mark.parametrize("height", [0, 9, -1])
def test_height_out_of_range(height):
    with pytest.raises(ConfigurationError):
        assemble_font(ImportSpec(data="{1}", character_set="A", height=height, width=1))


def test_dynamic_mode():
    result = assemble_font(ImportSpec(data="{0x01, 0x03, 0x07}", widths="{1, 2}",
                                      offsets="{0, 1}", character_set="AB",
                                      height=3, dynamic=True))
    a, b = result.glyphs
    assert a.data == (0x01,)
    assert b.data == (0x03, 0x07)
    assert b.bitmap == ((False, True), (True, True), (True, True))
    assert result.options['width'] == 2
    assert result.options['dynamic_width'] is True
    assert result.options['spacing'] == 0


def test_dynamic_mode_length_mismatch():
    with pytest.raises(ArrayLengthMismatchError):
        assemble_font(ImportSpec(data="{1, 2}", widths="[1]", offsets="[0]",
                                 character_set="AB", height=8, dynamic=True))


def test_dynamic_mode_empty_widths():
    with pytest.raises(ArrayLengthMismatchError, match="empty"):
        assemble_font(ImportSpec(data="{1, 2}", widths="", offsets="",
                                 character_set="AB", height=8, dynamic=True))


def test_dynamic_mode_out_of_bounds_names_character():
    with pytest.raises(OutOfBoundsError, match="'B' \\(index 1\\)"):
        assemble_font(ImportSpec(data="{1, 2}", widths="{1, 2}", offsets="{0, 1}",
                                 character_set="AB", height=8, dynamic=True))


def test_dynamic_mode_empty_charset_is_noop():
    result = assemble_font(ImportSpec(data="{1, 2}", widths="{1}", offsets="{0}",
                                      character_set="", height=8, dynamic=True))
    assert result.glyphs == []
    assert result.options['width'] == 8


def test_zero_width_dynamic_glyph():
    result = assemble_font(ImportSpec(data="{0xFF}", widths="{0, 1}", offsets="{0, 0}",
                                      character_set=" A", height=8, dynamic=True))
    space, a = result.glyphs
    assert space.width == 0
    assert space.bitmap == ((),) * 8
    assert a.data == (0xFF,)


def test_values_are_masked_to_height():
    result = assemble_font(ImportSpec(data="{0xFF}", character_set="A", height=4, width=1))
    assert result.glyphs[0].data == (0x0F,)
