"""
Glyph Data Model
================
Value objects shared by the rasterizer, importer and emitter.

GlyphRecord:
    One character's bitmap plus its packed column bytes. Records are
    immutable; edits produce new records.

RenderOptions:
    Everything the rasterization pipeline needs for one call.

ImportSpec:
    Raw text tables pasted from C or Python source for re-import.
"""

from typing import NamedTuple, Sequence, Tuple

from .buffer.bitmap import freeze
from .buffer.codec import Bitmap, bitmap_width, encode_bitmap


class RenderMode:
    """Glyph quality modes."""
    ALIASED = "aliased"            # Single pass, fixed threshold
    ANTI_ALIASED = "anti-aliased"  # 10x supersample, user threshold
    DITHERED = "dithered"          # 10x supersample, Floyd-Steinberg

    ALL = (ALIASED, ANTI_ALIASED, DITHERED)


class Align:
    """Vertical placement of a glyph in its grid."""
    TOP = "top"
    BOTTOM = "bottom"
    MANUAL = "manual"

    ALL = (TOP, BOTTOM, MANUAL)


class FontWeight:
    NORMAL = "normal"
    BOLD = "bold"

    ALL = (NORMAL, BOLD)


class GlyphRecord(NamedTuple):
    """
    A rendered or imported character.

    Attributes:
        character: The character (one code point)
        code_point: Unicode code point of the character
        bitmap: Rows x columns of booleans
        data: One packed byte per column, MSB = top row
    """
    character: str
    code_point: int
    bitmap: Bitmap
    data: Tuple[int, ...]

    @classmethod
    def from_bitmap(cls, character: str, bitmap: Sequence[Sequence[bool]]) -> "GlyphRecord":
        """Build a record, packing the bitmap into column bytes."""
        frozen = freeze(bitmap)
        return cls(character, ord(character), frozen, encode_bitmap(frozen))

    @property
    def width(self) -> int:
        return bitmap_width(self.bitmap)

    @property
    def height(self) -> int:
        return len(self.bitmap)

    def with_bitmap(self, bitmap: Sequence[Sequence[bool]]) -> "GlyphRecord":
        """Copy of this record with a new bitmap and re-encoded bytes."""
        return GlyphRecord.from_bitmap(self.character, bitmap)


class RenderOptions(NamedTuple):
    """Options for one rasterization call. Use _replace() to derive variants."""
    font_family: str = "VT323"
    font_weight: str = FontWeight.NORMAL
    width: int = 6
    height: int = 8
    spacing: int = 1
    character_set: str = "".join(chr(c) for c in range(0x20, 0x7F))
    font_size_adjustment: int = 0
    render_mode: str = RenderMode.ALIASED
    render_threshold: int = 128
    align: str = Align.BOTTOM
    x_offset: int = 0
    y_offset: int = 0
    dynamic_width: bool = False


class ImportSpec(NamedTuple):
    """
    Raw tables for rebuilding a font.

    Attributes:
        data: Data array text (C/Python literal)
        character_set: Characters in table order (duplicates ignored)
        height: Glyph height in rows (1-8)
        width: Glyph width for fixed-width fonts
        dynamic: True for width/offset indexed fonts
        widths: Widths array text (dynamic only)
        offsets: Offsets array text (dynamic only)
    """
    data: str
    character_set: str
    height: int
    width: int = 0
    dynamic: bool = False
    widths: str = ""
    offsets: str = ""
