"""
ByteCodec - Column Byte Packing
===============================
Converts glyph bitmaps to and from the packed column-byte layout used by
dot-matrix display drivers.

Layout:
    One byte per bitmap column. Row 0 (top) is the most significant of
    the `height` used bits, row height-1 (bottom) is bit 0:

        byte = sum(bit(r, c) << (height - 1 - r))

    Bits at positions >= height are always zero. A single byte cannot
    hold more than 8 rows, which makes 8 a hard format ceiling.
"""

from typing import List, Sequence, Tuple

from ..errors import ConfigurationError, UnsupportedHeightError

MAX_HEIGHT = 8

Bitmap = Tuple[Tuple[bool, ...], ...]


def check_height(height: int) -> None:
    """
    Validate a glyph height against the column-byte format.

    Raises:
        UnsupportedHeightError: If height > 8
        ConfigurationError: If height < 1
    """
    if height > MAX_HEIGHT:
        raise UnsupportedHeightError(
            f"Height {height} cannot be packed: one column byte holds at most "
            f"{MAX_HEIGHT} rows.")
    if height < 1:
        raise ConfigurationError(f"Invalid height: {height}. Must be between 1 and {MAX_HEIGHT}.")


def encode_column(bits: Sequence[bool]) -> int:
    """Pack one column (top row first) into a byte."""
    height = len(bits)
    value = 0
    for r, bit in enumerate(bits):
        if bit:
            value |= 1 << (height - 1 - r)
    return value


def decode_column(value: int, height: int) -> Tuple[bool, ...]:
    """Unpack one column byte into `height` booleans, top row first."""
    return tuple(bool((value >> (height - 1 - r)) & 1) for r in range(height))


def bitmap_width(bitmap: Sequence[Sequence[bool]]) -> int:
    """Number of columns in a bitmap (0 for zero-column glyphs)."""
    return len(bitmap[0]) if bitmap else 0


def encode_bitmap(bitmap: Sequence[Sequence[bool]], height: int = None) -> Tuple[int, ...]:
    """
    Encode a bitmap into column bytes.

    Args:
        bitmap: Rows of booleans (height rows x width columns)
        height: Row count to pack (defaults to len(bitmap))

    Returns:
        Tuple of one integer per column

    Raises:
        UnsupportedHeightError: If height > 8
    """
    if height is None:
        height = len(bitmap)
    check_height(height)

    out = []
    for c in range(bitmap_width(bitmap)):
        value = 0
        for r in range(height):
            if r < len(bitmap) and c < len(bitmap[r]) and bitmap[r][c]:
                value |= 1 << (height - 1 - r)
        out.append(value)
    return tuple(out)


def decode_columns(data: Sequence[int], width: int, height: int) -> Bitmap:
    """
    Decode column bytes into a bitmap.

    Missing bytes (data shorter than width) read as empty columns and
    bits above `height` are ignored.

    Args:
        data: Column bytes
        width: Number of columns to produce
        height: Number of rows to produce

    Returns:
        Tuple of `height` rows, each a tuple of `width` booleans
    """
    check_height(height)

    rows: List[List[bool]] = [[False] * width for _ in range(height)]
    for c in range(width):
        value = data[c] if c < len(data) else 0
        for r in range(height):
            if (value >> (height - 1 - r)) & 1:
                rows[r][c] = True
    return tuple(tuple(row) for row in rows)
