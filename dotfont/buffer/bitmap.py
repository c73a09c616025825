"""
Bitmap Primitives
=================
Pure operations on glyph bitmaps (tuples of rows of booleans).

Includes the dynamic-width trimmer, column padding/truncation used by
the fixed-width layout, vertical realignment and the single-step shifts
used when hand-editing a glyph.

A bitmap always keeps its row count. A glyph without columns is a
tuple of `height` empty rows, never an empty tuple.
"""

from typing import Optional, Sequence, Tuple

from .codec import Bitmap, bitmap_width

# Terminal preview characters
PIXEL_ON = "█"
PIXEL_OFF = "·"


def freeze(bitmap: Sequence[Sequence[bool]]) -> Bitmap:
    """Return an immutable copy of a bitmap."""
    return tuple(tuple(bool(p) for p in row) for row in bitmap)


def blank_bitmap(height: int, width: int) -> Bitmap:
    """All-false bitmap of the given size."""
    row = (False,) * max(width, 0)
    return tuple(row for _ in range(height))


# =============================================================================
# Dynamic Width
# =============================================================================

def ink_columns(bitmap: Sequence[Sequence[bool]]) -> Optional[Tuple[int, int]]:
    """
    Find the leftmost and rightmost columns holding a set pixel.

    Returns:
        (min_col, max_col) inclusive, or None when nothing is set
    """
    min_x = bitmap_width(bitmap)
    max_x = -1
    for row in bitmap:
        for x, pixel in enumerate(row):
            if pixel:
                if x < min_x:
                    min_x = x
                if x > max_x:
                    max_x = x
    if max_x == -1:
        return None
    return min_x, max_x


def trim_columns(bitmap: Sequence[Sequence[bool]]) -> Bitmap:
    """
    Trim a bitmap to the tightest column range containing ink.

    An empty bitmap comes back with zero columns (height empty rows).
    Trimming is idempotent.
    """
    span = ink_columns(bitmap)
    if span is None:
        return tuple(() for _ in bitmap)
    lo, hi = span
    return tuple(tuple(row[lo:hi + 1]) for row in bitmap)


def pad_columns(bitmap: Sequence[Sequence[bool]], count: int) -> Bitmap:
    """Append `count` empty columns to every row."""
    padding = (False,) * max(count, 0)
    return tuple(tuple(row) + padding for row in bitmap)


def truncate_columns(bitmap: Sequence[Sequence[bool]], width: int) -> Bitmap:
    """Keep only the first `width` columns."""
    return tuple(tuple(row[:width]) for row in bitmap)


def fit_columns(bitmap: Sequence[Sequence[bool]], width: int) -> Bitmap:
    """Truncate or pad trailing columns so the bitmap is exactly `width` wide."""
    current = bitmap_width(bitmap)
    if current > width:
        return truncate_columns(bitmap, width)
    if current < width:
        return pad_columns(bitmap, width - current)
    return freeze(bitmap)


# =============================================================================
# Vertical Alignment
# =============================================================================

def ink_rows(bitmap: Sequence[Sequence[bool]]) -> Optional[Tuple[int, int]]:
    """First and last row holding a set pixel, or None."""
    first = last = -1
    for r, row in enumerate(bitmap):
        if any(row):
            if first == -1:
                first = r
            last = r
    if first == -1:
        return None
    return first, last


def realign_rows(bitmap: Sequence[Sequence[bool]], direction: str) -> Bitmap:
    """
    Shift glyph content against the top or bottom edge.

    Args:
        bitmap: Source bitmap
        direction: "top" or "bottom"

    Returns:
        Realigned bitmap. Unchanged when empty or already aligned.
    """
    if direction not in ("top", "bottom"):
        raise ValueError(f"direction must be 'top' or 'bottom', not {direction!r}")

    frozen = freeze(bitmap)
    span = ink_rows(frozen)
    if span is None:
        return frozen

    height = len(frozen)
    empty = (False,) * bitmap_width(frozen)
    first, last = span

    if direction == "top":
        if first == 0:
            return frozen
        return frozen[first:] + (empty,) * first

    shift = (height - 1) - last
    if shift == 0:
        return frozen
    return (empty,) * shift + frozen[:last + 1]


# =============================================================================
# Editing
# =============================================================================

def shift_bitmap(bitmap: Sequence[Sequence[bool]], direction: str) -> Bitmap:
    """
    Shift content by one pixel. The line pushed past the edge is lost and
    the vacated line is cleared.

    Args:
        direction: "up", "down", "left" or "right"
    """
    frozen = freeze(bitmap)
    if not frozen:
        return frozen
    width = bitmap_width(frozen)
    empty = (False,) * width

    if direction == "up":
        return frozen[1:] + (empty,)
    if direction == "down":
        return (empty,) + frozen[:-1]
    if width == 0:
        return frozen
    if direction == "left":
        return tuple(row[1:] + (False,) for row in frozen)
    if direction == "right":
        return tuple((False,) + row[:-1] for row in frozen)
    raise ValueError(f"Unknown shift direction: {direction!r}")


def toggle_pixel(bitmap: Sequence[Sequence[bool]], x: int, y: int) -> Bitmap:
    """Flip one pixel. Out-of-range coordinates leave the bitmap unchanged."""
    rows = [list(row) for row in bitmap]
    if 0 <= y < len(rows) and 0 <= x < len(rows[y]):
        rows[y][x] = not rows[y][x]
    return freeze(rows)


def bitmap_to_text(bitmap: Sequence[Sequence[bool]]) -> str:
    """Render a bitmap as terminal art, one line per row."""
    return "\n".join(
        "".join(PIXEL_ON if p else PIXEL_OFF for p in row) for row in bitmap)
