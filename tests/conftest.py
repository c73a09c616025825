"""Shared fixtures: a deterministic rasterizer and a generated TrueType font."""

import pytest

from dotfont.glyph import RenderOptions
from dotfont.text.pipeline import RasterizationPipeline
from dotfont.text.rasterizer import RasterGlyph, TextRasterizer


class FakeRasterizer(TextRasterizer):
    """
    Draws every character as a solid vertical bar spanning the full
    pixel size, `bar_width` target pixels wide. Supersampled requests
    (smoothing on) get a bar 10x as wide.

    Specific characters can be given fixed RasterGlyphs, and characters
    in `fail_on` raise RuntimeError.
    """

    def __init__(self, bar_width=1, glyphs=None, fail_on=()):
        self.bar_width = bar_width
        self.glyphs = dict(glyphs or {})
        self.fail_on = set(fail_on)
        self.calls = []

    def rasterize(self, character, font_family, font_weight, pixel_size, smoothing):
        self.calls.append((character, pixel_size, smoothing))
        if character in self.fail_on:
            raise RuntimeError("glyph missing")
        if character in self.glyphs:
            return self.glyphs[character]
        scale = 10 if smoothing else 1
        width = self.bar_width * scale
        alpha = tuple((255,) * width for _ in range(pixel_size))
        return RasterGlyph(alpha=alpha, ascent=pixel_size / 2, descent=pixel_size / 2)


@pytest.fixture
def rasterizer():
    return FakeRasterizer()


@pytest.fixture
def pipeline(rasterizer):
    return RasterizationPipeline(rasterizer)


@pytest.fixture
def options():
    return RenderOptions(font_family="Fake", width=3, height=8, spacing=1,
                         character_set="AB", align="bottom")


def build_test_font(path, family="Dotfont Test", weight=400):
    """Write a TrueType font with a rectangular 'I', an empty space and .notdef."""
    from fontTools.fontBuilder import FontBuilder
    from fontTools.pens.ttGlyphPen import TTGlyphPen

    def rect(x0, y0, x1, y1):
        pen = TTGlyphPen(None)
        pen.moveTo((x0, y0))
        pen.lineTo((x0, y1))
        pen.lineTo((x1, y1))
        pen.lineTo((x1, y0))
        pen.closePath()
        return pen.glyph()

    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder([".notdef", "space", "I"])
    fb.setupCharacterMap({ord(" "): "space", ord("I"): "I"})
    fb.setupGlyf({".notdef": rect(100, 0, 500, 700), "space": TTGlyphPen(None).glyph(),
                 "I": rect(200, -200, 400, 800)})
    fb.setupHorizontalMetrics({".notdef": (600, 100), "space": (600, 0), "I": (600, 200)})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": family,
                       "styleName": "Bold" if weight >= 600 else "Regular"})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800,
                usWinDescent=200, usWeightClass=weight)
    fb.setupPost()
    fb.save(str(path))
    return path


@pytest.fixture
def font_dir(tmp_path):
    pytest.importorskip("fontTools")
    build_test_font(tmp_path / "DotfontTest-Regular.ttf")
    build_test_font(tmp_path / "DotfontTest-Bold.ttf", weight=700)
    return tmp_path
