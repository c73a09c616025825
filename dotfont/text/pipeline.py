"""
RasterizationPipeline - Characters to Glyph Records
===================================================
Turns RenderOptions plus a list of characters into GlyphRecords.

Render modes:
- aliased: one pass at target resolution, smoothing off, alpha > 128
- anti-aliased: 10x supersampling, each target pixel is the mean alpha
  of its 10x10 block, thresholded at render_threshold
- dithered: same grayscale map, binarized with Floyd-Steinberg error
  diffusion in raster order

Post-processing:
- dynamic width: trim to the ink columns (space keeps half the width)
- fixed width: append `spacing` empty columns

Usage:
    pipeline = RasterizationPipeline()          # Pillow rasterizer
    glyphs = pipeline.generate_font(options)    # one glyph per unique char
    line = pipeline.render_preview(options, "Hello\\nWorld!")
"""

import math
from typing import Iterable, List, Sequence

from ..buffer.bitmap import blank_bitmap, pad_columns, trim_columns
from ..config import validate_options
from ..errors import ConfigurationError, FontError, RasterizerUnavailableError
from ..glyph import Align, GlyphRecord, RenderMode, RenderOptions
from .charsets import unique_characters
from .rasterizer import RasterGlyph, TextRasterizer

SUPER_SAMPLE_RATE = 10
ALIASED_THRESHOLD = 128

# Floyd-Steinberg neighbours: (dx, dy, weight / 16)
_DIFFUSION = ((1, 0, 7), (-1, 1, 3), (0, 1, 5), (1, 1, 1))


def _round(value: float) -> int:
    """Round half up (pixel placement)."""
    return int(math.floor(value + 0.5))


# =============================================================================
# Grayscale Processing
# =============================================================================

def downsample(surface: Sequence[Sequence[int]], rate: int,
               width: int, height: int) -> List[List[float]]:
    """
    Average rate x rate blocks of a supersampled surface.

    Returns:
        height x width grid of mean alpha values in [0, 255]
    """
    area = rate * rate
    gray = []
    for y in range(height):
        block_rows = surface[y * rate:(y + 1) * rate]
        row = []
        for x in range(width):
            x0 = x * rate
            total = 0
            for src in block_rows:
                total += sum(src[x0:x0 + rate])
            row.append(total / area)
        gray.append(row)
    return gray


def threshold(gray: Sequence[Sequence[float]], level: float) -> tuple:
    """Pixels strictly above `level` are on."""
    return tuple(tuple(v > level for v in row) for row in gray)


def dither(gray: Sequence[Sequence[float]], level: float) -> tuple:
    """
    Floyd-Steinberg error diffusion.

    Pixels are visited top-to-bottom, left-to-right. Each is set when its
    accumulated value is >= level; the quantization error goes 7/16 right,
    3/16 below-left, 5/16 below and 1/16 below-right. Targets outside the
    grid are skipped.
    """
    work = [list(row) for row in gray]
    height = len(work)
    width = len(work[0]) if work else 0
    out = [[False] * width for _ in range(height)]

    for y in range(height):
        for x in range(width):
            old = work[y][x]
            new = 0 if old < level else 255
            out[y][x] = new == 255
            error = old - new
            for dx, dy, weight in _DIFFUSION:
                tx, ty = x + dx, y + dy
                if 0 <= tx < width and ty < height:
                    work[ty][tx] += error * weight / 16

    return tuple(tuple(row) for row in out)


# =============================================================================
# Pipeline
# =============================================================================

class RasterizationPipeline:
    """
    Renders characters through a TextRasterizer.

    Args:
        rasterizer: TextRasterizer to use (default: PillowRasterizer)
    """

    def __init__(self, rasterizer: TextRasterizer = None):
        if rasterizer is None:
            from .pillow import PillowRasterizer
            rasterizer = PillowRasterizer()
        self._rasterizer = rasterizer

    @property
    def rasterizer(self) -> TextRasterizer:
        return self._rasterizer

    def generate_font(self, options: RenderOptions) -> List[GlyphRecord]:
        """
        Render one glyph per unique character of options.character_set.

        Raises:
            ConfigurationError: If the options have no positive glyph area
                or an empty character set
        """
        validate_options(options, require_area=True)
        return self.render(options, unique_characters(options.character_set))

    def render_preview(self, options: RenderOptions, text: str) -> List[GlyphRecord]:
        """Render arbitrary text, one glyph per character including repeats."""
        return self.render(options, list(text))

    def render(self, options: RenderOptions, characters: Iterable[str]) -> List[GlyphRecord]:
        """
        Render characters in order.

        Args:
            options: Render options
            characters: Characters to render (duplicates allowed)

        Returns:
            One GlyphRecord per input character

        Raises:
            ConfigurationError: On invalid options
            UnsupportedHeightError: If height > 8
            RasterizerUnavailableError: If rasterizing a character fails
        """
        validate_options(options)
        characters = list(characters)
        height = options.height
        glyph_width = options.width

        if glyph_width <= 0:
            total = 0 if options.dynamic_width else options.spacing
            blank = blank_bitmap(height, total)
            return [GlyphRecord.from_bitmap(ch, blank) for ch in characters]

        if height + options.font_size_adjustment < 1:
            raise ConfigurationError(
                f"Font size adjustment {options.font_size_adjustment} leaves no "
                f"pixels to render at height {height}.")

        glyphs = []
        for ch in characters:
            if ch != " " and not ch.strip():
                total = 0 if options.dynamic_width else glyph_width + options.spacing
                glyphs.append(GlyphRecord.from_bitmap(ch, blank_bitmap(height, total)))
                continue

            if options.dynamic_width:
                if ch == " ":
                    final = blank_bitmap(height, max(1, glyph_width // 2))
                else:
                    final = trim_columns(self._render_glyph(ch, options))
            else:
                final = pad_columns(self._render_glyph(ch, options), options.spacing)

            glyphs.append(GlyphRecord.from_bitmap(ch, final))
        return glyphs

    # =========================================================================
    # Internal: Rendering
    # =========================================================================

    def _render_glyph(self, ch: str, options: RenderOptions) -> tuple:
        """Render one character to a width x height boolean bitmap."""
        if options.render_mode == RenderMode.ALIASED:
            surface = self._coverage(ch, options, 1, smoothing=False)
            return tuple(tuple(a > ALIASED_THRESHOLD for a in row) for row in surface)

        surface = self._coverage(ch, options, SUPER_SAMPLE_RATE, smoothing=True)
        gray = downsample(surface, SUPER_SAMPLE_RATE, options.width, options.height)
        if options.render_mode == RenderMode.ANTI_ALIASED:
            return threshold(gray, options.render_threshold)
        return dither(gray, options.render_threshold)

    def _rasterize(self, ch: str, options: RenderOptions, pixel_size: int,
                   smoothing: bool) -> RasterGlyph:
        try:
            return self._rasterizer.rasterize(ch, options.font_family, options.font_weight,
                                              pixel_size, smoothing)
        except FontError:
            raise
        except Exception as e:
            raise RasterizerUnavailableError(
                f"Rasterizer failed on character {ch!r} (U+{ord(ch):04X}): {e}") from e

    def _coverage(self, ch: str, options: RenderOptions, scale: int,
                  smoothing: bool) -> List[List[int]]:
        """
        Place the rasterized glyph on a (width*scale) x (height*scale)
        alpha surface according to the alignment options.
        """
        grid_w = options.width * scale
        grid_h = options.height * scale
        pixel_size = (options.height + options.font_size_adjustment) * scale
        glyph = self._rasterize(ch, options, pixel_size, smoothing)

        x = grid_w / 2
        if options.align == Align.BOTTOM:
            y = grid_h - glyph.descent
        elif options.align == Align.TOP:
            y = glyph.ascent
        else:
            x += options.x_offset * scale
            y = grid_h / 2 + options.y_offset * scale

        left = _round(x - glyph.anchor_x)
        top = _round(y - glyph.ascent)

        surface = [[0] * grid_w for _ in range(grid_h)]
        for gy, row in enumerate(glyph.alpha):
            ty = top + gy
            if not 0 <= ty < grid_h:
                continue
            target = surface[ty]
            for gx, a in enumerate(row):
                tx = left + gx
                if 0 <= tx < grid_w and a > target[tx]:
                    target[tx] = a
        return surface
