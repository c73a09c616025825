"""
FormatConverter - Fixed and Dynamic Width Layouts
=================================================
Pure transformations over glyph sequences: fixed <-> dynamic width
conversion and vertical realignment. Bytes are always re-encoded from
the resulting bitmaps.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from ..buffer.bitmap import blank_bitmap, fit_columns, realign_rows, trim_columns
from ..errors import ConfigurationError
from ..glyph import Align, GlyphRecord
from .importer import FontImport


def to_fixed(glyphs: Sequence[GlyphRecord], target_width: int) -> List[GlyphRecord]:
    """
    Give every glyph exactly `target_width` columns by truncating or
    padding trailing columns.
    """
    if target_width < 0:
        raise ConfigurationError(f"Fixed width cannot be negative (got {target_width}).")
    out = []
    for glyph in glyphs:
        if glyph.width == target_width:
            out.append(glyph)
        else:
            out.append(glyph.with_bitmap(fit_columns(glyph.bitmap, target_width)))
    return out


def to_dynamic(glyphs: Sequence[GlyphRecord], original_width: int) -> Tuple[List[GlyphRecord], int]:
    """
    Trim every glyph to its ink columns.

    The space character keeps max(1, original_width // 2) empty columns.

    Returns:
        (converted glyphs, widest resulting glyph)
    """
    max_width = 0
    out = []
    for glyph in glyphs:
        if glyph.character == " ":
            bitmap = blank_bitmap(glyph.height, max(1, original_width // 2))
        else:
            bitmap = trim_columns(glyph.bitmap)
        converted = glyph.with_bitmap(bitmap)
        max_width = max(max_width, converted.width)
        out.append(converted)
    return out, max_width


def realign(glyphs: Sequence[GlyphRecord], direction: str) -> List[GlyphRecord]:
    """Move each glyph's content to the top or bottom edge."""
    out = []
    for glyph in glyphs:
        bitmap = realign_rows(glyph.bitmap, direction)
        out.append(glyph if bitmap == glyph.bitmap else glyph.with_bitmap(bitmap))
    return out


def convert_import(result: FontImport, convert: bool = False,
                   fixed_width: Optional[int] = None,
                   align: Optional[str] = None) -> FontImport:
    """
    Apply the optional post-import steps.

    Args:
        result: Output of assemble_font()
        convert: Switch layout (dynamic -> fixed or fixed -> dynamic)
        fixed_width: Target width for dynamic -> fixed (default: the
            recovered max width)
        align: "top", "bottom" or None to keep rows as imported

    Returns:
        New FontImport with converted glyphs and updated options
    """
    glyphs = list(result.glyphs)
    options: Dict = dict(result.options)

    if convert:
        if options.get('dynamic_width'):
            width = fixed_width if fixed_width is not None else options['width']
            glyphs = to_fixed(glyphs, width)
            options.update(dynamic_width=False, width=width, spacing=1, align=Align.BOTTOM)
        else:
            glyphs, max_width = to_dynamic(glyphs, options.get('width', 0))
            options.update(dynamic_width=True, width=max_width, spacing=0, align=Align.BOTTOM)

    if align is not None:
        glyphs = realign(glyphs, align)

    return FontImport(glyphs, options)
