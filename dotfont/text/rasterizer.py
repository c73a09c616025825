"""
TextRasterizer - Glyph Coverage Interface
=========================================
Defines the capability the rasterization pipeline uses to turn a
character into alpha coverage.

The pipeline only needs one operation, so tests can plug in a
deterministic fake that returns fixed alpha grids.

Note: Using duck typing instead of ABC, like the other interfaces in
this package.
"""

from typing import NamedTuple, Optional, Sequence


class RasterGlyph(NamedTuple):
    """
    Alpha coverage of one character.

    Attributes:
        alpha: Rows of 0-255 coverage values covering the glyph's ink box
        ascent: Rows of the ink box above the vertical anchor
            (the middle of the em box)
        descent: Rows of the ink box below the vertical anchor
        origin_x: Horizontal anchor (middle of the advance) measured from
            the left edge of the ink box. None means the box centre.
    """
    alpha: Sequence[Sequence[int]]
    ascent: float
    descent: float
    origin_x: Optional[float] = None

    @property
    def width(self) -> int:
        return len(self.alpha[0]) if self.alpha else 0

    @property
    def height(self) -> int:
        return len(self.alpha)

    @property
    def anchor_x(self) -> float:
        return self.width / 2 if self.origin_x is None else self.origin_x


class TextRasterizer:
    """
    Abstract text rasterizer.

    Subclasses must implement rasterize(). Implementations must be
    deterministic: the same arguments always give the same coverage.
    """

    def rasterize(self, character: str, font_family: str, font_weight: str,
                  pixel_size: int, smoothing: bool) -> RasterGlyph:
        """
        Rasterize one character.

        Args:
            character: Character to draw
            font_family: Family name or font file path
            font_weight: "normal" or "bold"
            pixel_size: Font size in pixels
            smoothing: False for hard 1-bit edges, True for anti-aliasing

        Returns:
            RasterGlyph with coverage and vertical metrics

        Raises:
            RasterizerUnavailableError: If the font cannot be rendered
        """
        raise NotImplementedError
