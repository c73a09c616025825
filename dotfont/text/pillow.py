"""
PillowRasterizer - FreeType Rendering through Pillow
====================================================
TextRasterizer backed by PIL.ImageFont / ImageDraw.

Glyphs are drawn with the "mm" anchor (middle of the advance, middle
of the em box), so the returned ascent/descent are measured from the
vertical centre of the em box and origin_x is the advance centre.

Requirements:
    pip install Pillow fonttools
"""

from collections import OrderedDict
from pathlib import Path
from typing import Tuple

from PIL import Image, ImageDraw, ImageFont

from ..errors import RasterizerUnavailableError
from .fontfind import FontLocator
from .rasterizer import RasterGlyph, TextRasterizer


class PillowRasterizer(TextRasterizer):
    """
    Rasterizer using Pillow's FreeType bindings.

    Loaded FreeType faces are kept in a small LRU cache keyed by
    (path, size) since supersampled rendering reloads the same sizes
    for every character.

    Args:
        locator: FontLocator used to resolve family names
        cache_size: Maximum number of loaded faces
    """

    def __init__(self, locator: FontLocator = None, cache_size: int = 16):
        self._locator = locator if locator is not None else FontLocator()
        self._fonts = OrderedDict()
        self._cache_max = cache_size

    def _load(self, font_family: str, font_weight: str, pixel_size: int):
        path = self._locator.find(font_family, font_weight)
        key: Tuple[Path, int] = (path, pixel_size)
        if key in self._fonts:
            self._fonts.move_to_end(key)
            return self._fonts[key]

        try:
            font = ImageFont.truetype(str(path), pixel_size)
        except (OSError, ImportError) as e:
            raise RasterizerUnavailableError(f"Cannot load font {path}: {e}") from e

        while len(self._fonts) >= self._cache_max and self._fonts:
            self._fonts.popitem(last=False)
        self._fonts[key] = font
        return font

    def rasterize(self, character: str, font_family: str, font_weight: str,
                  pixel_size: int, smoothing: bool) -> RasterGlyph:
        if pixel_size < 1:
            raise RasterizerUnavailableError(f"Cannot render at {pixel_size}px")

        font = self._load(font_family, font_weight, pixel_size)
        left, top, right, bottom = font.getbbox(character, anchor="mm")
        w = right - left
        h = bottom - top
        if w <= 0 or h <= 0:
            # Nothing to draw (space and other blank glyphs)
            return RasterGlyph(alpha=(), ascent=0.0, descent=0.0, origin_x=0.0)

        img = Image.new("L", (w, h), 0)
        draw = ImageDraw.Draw(img)
        draw.fontmode = "L" if smoothing else "1"
        draw.text((-left, -top), character, fill=255, font=font, anchor="mm")

        pixels = img.load()
        alpha = tuple(tuple(pixels[x, y] for x in range(w)) for y in range(h))
        return RasterGlyph(alpha=alpha, ascent=float(-top), descent=float(bottom),
                           origin_x=float(-left))

    def clear_cache(self):
        """Drop all loaded faces."""
        self._fonts.clear()
