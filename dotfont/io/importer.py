"""
FontImportAssembler - Glyph Records from Imported Tables
========================================================
Rebuilds a font from array text copied out of C or Python source.

Fixed width:
    data = characters x width column bytes, one chunk per character

Dynamic width:
    data    = all glyph columns concatenated
    widths  = column count per character
    offsets = start of each character in data

The character set gives the order of the tables. Duplicate characters
are dropped (first occurrence wins) before matching them to table rows.
"""

from typing import Any, Dict, List, NamedTuple, Sequence

from ..buffer.codec import decode_columns
from ..errors import (
    ArrayLengthMismatchError,
    ArraySizeMismatchError,
    ConfigurationError,
    OutOfBoundsError,
)
from ..glyph import GlyphRecord, ImportSpec
from ..text.charsets import unique_characters
from .parser import parse_array

# Nominal width reported for a dynamic font without characters
DEFAULT_WIDTH = 8


class FontImport(NamedTuple):
    """
    Result of an import.

    Attributes:
        glyphs: Glyph records in character-set order
        options: Recovered RenderOptions fields (width, height,
            character_set, dynamic_width, spacing)
    """
    glyphs: List[GlyphRecord]
    options: Dict[str, Any]


def _glyph(ch: str, columns: Sequence[int], height: int) -> GlyphRecord:
    bitmap = decode_columns(columns, len(columns), height)
    return GlyphRecord.from_bitmap(ch, bitmap)


def assemble_font(spec: ImportSpec) -> FontImport:
    """
    Parse and validate imported tables.

    Args:
        spec: Raw tables and layout

    Returns:
        FontImport with glyphs and recovered options

    Raises:
        ConfigurationError: Height outside 1-8, or fixed width <= 0
        ArrayLengthMismatchError: Dynamic tables disagree in length
        ArraySizeMismatchError: Fixed data is not characters x width bytes
        OutOfBoundsError: A glyph reaches past the end of the data
    """
    if spec.height <= 0 or spec.height > 8:
        raise ConfigurationError(f"Invalid height: {spec.height}. Must be between 1 and 8.")

    chars = unique_characters(spec.character_set)
    if spec.dynamic:
        return _assemble_dynamic(spec, chars)
    return _assemble_fixed(spec, chars)


def _assemble_dynamic(spec: ImportSpec, chars: List[str]) -> FontImport:
    data = parse_array(spec.data)
    widths = parse_array(spec.widths)
    offsets = parse_array(spec.offsets)

    glyphs = []
    max_width = 0

    if chars:
        if not widths:
            raise ArrayLengthMismatchError(
                f"Widths array appears to be empty or could not be parsed, but there "
                f"are {len(chars)} characters in the set.")
        if len(widths) != len(chars) or len(offsets) != len(chars):
            raise ArrayLengthMismatchError(
                f"Mismatch in array lengths: Character set ({len(chars)}), widths "
                f"({len(widths)}), and offsets ({len(offsets)}) must all be the same size.")

    for i, ch in enumerate(chars):
        width = widths[i]
        offset = offsets[i]
        if width < 0 or offset < 0:
            raise OutOfBoundsError(
                f"Character {ch!r} (index {i}) has a negative offset or width "
                f"({offset}, {width}).")
        if offset + width > len(data):
            raise OutOfBoundsError(
                f"Character {ch!r} (index {i}) has an offset+width ({offset}+{width}) "
                f"that exceeds the data array bounds ({len(data)}).")

        max_width = max(max_width, width)
        glyphs.append(_glyph(ch, data[offset:offset + width], spec.height))

    return FontImport(glyphs, {
        'width': max_width if max_width > 0 else DEFAULT_WIDTH,
        'height': spec.height,
        'character_set': spec.character_set,
        'dynamic_width': True,
        'spacing': 0,
    })


def _assemble_fixed(spec: ImportSpec, chars: List[str]) -> FontImport:
    width = spec.width
    if width <= 0:
        raise ConfigurationError(
            f"Invalid width: {width}. Must be a positive number for fixed-width fonts.")

    data = parse_array(spec.data)
    if chars:
        if not data:
            raise ArraySizeMismatchError(
                f"Data array is empty or could not be parsed, but found {len(chars)} "
                f"character(s) in the set.")
        expected = len(chars) * width
        if len(data) != expected:
            raise ArraySizeMismatchError(
                f"Data array size mismatch. Expected {expected} bytes ({len(chars)} chars "
                f"* {width} width), but found {len(data)}.")

    glyphs = [_glyph(ch, data[i * width:(i + 1) * width], spec.height)
              for i, ch in enumerate(chars)]

    return FontImport(glyphs, {
        'width': width,
        'height': spec.height,
        'character_set': spec.character_set,
        'dynamic_width': False,
        'spacing': 0,
    })
