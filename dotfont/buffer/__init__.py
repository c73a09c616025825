"""
Buffer subsystem - glyph bitmaps and column-byte packing.

Modules:
    codec: Bitmap <-> column byte conversion
    bitmap: Trimming, padding, realignment and editing primitives
"""
from .codec import MAX_HEIGHT, encode_bitmap, decode_columns, encode_column, decode_column
from .bitmap import (
    blank_bitmap,
    trim_columns,
    pad_columns,
    truncate_columns,
    fit_columns,
    realign_rows,
    shift_bitmap,
    toggle_pixel,
    bitmap_to_text,
)

__all__ = [
    "MAX_HEIGHT",
    "encode_bitmap",
    "decode_columns",
    "encode_column",
    "decode_column",
    "blank_bitmap",
    "trim_columns",
    "pad_columns",
    "truncate_columns",
    "fit_columns",
    "realign_rows",
    "shift_bitmap",
    "toggle_pixel",
    "bitmap_to_text",
]
