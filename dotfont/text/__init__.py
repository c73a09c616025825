"""
Text rendering subsystem.

Modules:
    rasterizer: TextRasterizer interface
    pillow: Pillow/FreeType rasterizer
    fontfind: Family name to font file resolution (fontTools)
    pipeline: Characters + options -> glyph records
    charsets: Named character sets and ranges
"""
from .rasterizer import RasterGlyph, TextRasterizer
from .fontfind import FontLocator
from .pipeline import RasterizationPipeline
from .charsets import CHARSETS, unique_characters, merge_charset, code_point_range

__all__ = [
    "RasterGlyph",
    "TextRasterizer",
    "FontLocator",
    "RasterizationPipeline",
    "CHARSETS",
    "unique_characters",
    "merge_charset",
    "code_point_range",
]
