"""
dotfont - Dot-Matrix Font Generator
===================================
Turns typeface glyphs into packed column-byte arrays for dot-matrix
displays (up to 8 rows, one byte per column, MSB = top row) and imports
such arrays back into editable glyphs.

Architecture
------------
The library is organized into layers:

    FontSession         Editing state, undo/redo, preview stream
       │
       ├── RasterizationPipeline   Options + characters -> glyphs
       │      │
       │      ├── TextRasterizer   Alpha coverage (Pillow/FreeType)
       │      └── buffer           Trimming, padding, byte codec
       │
       └── io
              ├── parser           Array literal text -> integers
              ├── importer         Tables -> glyph records
              ├── convert          Fixed <-> dynamic width
              └── emitter          Glyphs -> C / Python / hex / binary

Quick Start
-----------
    from dotfont import RasterizationPipeline, RenderOptions, emit_code

    options = RenderOptions(font_family="DejaVu Sans Mono", width=5, height=7)
    glyphs = RasterizationPipeline().generate_font(options)
    print(emit_code(glyphs, options, "c"))

Import
------
    from dotfont import ImportSpec, assemble_font

    result = assemble_font(ImportSpec(
        data="{0x7C, 0x12, 0x11, 0x12, 0x7C}", character_set="A",
        height=7, width=5))

Module Structure
----------------
    dotfont/
    ├── glyph.py             GlyphRecord, RenderOptions, ImportSpec
    ├── config.py            Defaults, validation, JSON option files
    ├── errors.py            Exception taxonomy
    ├── buffer/
    │   ├── codec.py         Bitmap <-> column bytes
    │   └── bitmap.py        Trim, pad, realign, shift
    ├── text/
    │   ├── rasterizer.py    TextRasterizer interface
    │   ├── pillow.py        Pillow rasterizer
    │   ├── fontfind.py      Font file lookup (fontTools)
    │   ├── pipeline.py      Rasterization pipeline
    │   └── charsets.py      Character sets
    ├── io/
    │   ├── parser.py        Array text parser
    │   ├── importer.py      Font import
    │   ├── convert.py       Layout conversion
    │   └── emitter.py       Code and binary output
    ├── session/
    │   ├── history.py       Undo/redo
    │   ├── editor.py        FontSession
    │   └── preview.py       PreviewStream
    └── cli.py               Command line tool
"""

# Data model
from .glyph import GlyphRecord, RenderOptions, ImportSpec, RenderMode, Align, FontWeight

# Errors
from .errors import (
    FontError,
    ConfigurationError,
    UnsupportedHeightError,
    ArrayLengthMismatchError,
    ArraySizeMismatchError,
    OutOfBoundsError,
    RasterizerUnavailableError,
)

# Configuration
from .config import DEFAULT_OPTIONS, validate_options, load_options, save_options

# Bitmaps
from .buffer import encode_bitmap, decode_columns, trim_columns, realign_rows

# Rendering
from .text import RasterGlyph, TextRasterizer, FontLocator, RasterizationPipeline

# Import / export
from .io import (
    parse_array,
    FontImport,
    assemble_font,
    to_fixed,
    to_dynamic,
    realign,
    convert_import,
    PackedFont,
    pack_font,
    emit_code,
)

# Session
from .session import FontHistory, FontSession, PreviewStream

__all__ = [
    # Data model
    "GlyphRecord",
    "RenderOptions",
    "ImportSpec",
    "RenderMode",
    "Align",
    "FontWeight",
    # Errors
    "FontError",
    "ConfigurationError",
    "UnsupportedHeightError",
    "ArrayLengthMismatchError",
    "ArraySizeMismatchError",
    "OutOfBoundsError",
    "RasterizerUnavailableError",
    # Configuration
    "DEFAULT_OPTIONS",
    "validate_options",
    "load_options",
    "save_options",
    # Bitmaps
    "encode_bitmap",
    "decode_columns",
    "trim_columns",
    "realign_rows",
    # Rendering
    "RasterGlyph",
    "TextRasterizer",
    "FontLocator",
    "RasterizationPipeline",
    # Import / export
    "parse_array",
    "FontImport",
    "assemble_font",
    "to_fixed",
    "to_dynamic",
    "realign",
    "convert_import",
    "PackedFont",
    "pack_font",
    "emit_code",
    # Session
    "FontHistory",
    "FontSession",
    "PreviewStream",
]

__version__ = "1.0.0"
