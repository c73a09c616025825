import pytest

from dotfont.errors import ConfigurationError, RasterizerUnavailableError, UnsupportedHeightError
from dotfont.glyph import RenderOptions
from dotfont.text.pipeline import RasterizationPipeline, dither, downsample, threshold
from dotfont.text.rasterizer import RasterGlyph

from .conftest import FakeRasterizer


def test_single_stroke_trims_to_one_full_column(pipeline, options):
    opts = options._replace(dynamic_width=True, render_mode="aliased")
    [glyph] = pipeline.render(opts, ["I"])
    assert glyph.width == 1
    assert glyph.data == (0xFF,)
    assert [b for b in glyph.data if b] == [0xFF]


def test_fixed_width_appends_spacing(pipeline, options):
    [glyph] = pipeline.render(options._replace(spacing=2), ["I"])
    assert glyph.width == 5
    assert glyph.data == (0x00, 0xFF, 0x00, 0x00, 0x00)


@pytest.mark.parametrize("mode", ["anti-aliased", "dithered"])
def test_supersampled_modes_match_on_solid_strokes(pipeline, options, mode):
    [glyph] = pipeline.render(options._replace(render_mode=mode), ["I"])
    assert glyph.data == (0x00, 0xFF, 0x00, 0x00)


def test_supersampling_scales_pixel_size(rasterizer, pipeline, options):
    pipeline.render(options._replace(render_mode="anti-aliased", font_size_adjustment=-2), ["I"])
    assert rasterizer.calls == [("I", 60, True)]
    pipeline.render(options._replace(font_size_adjustment=1), ["I"])
    assert rasterizer.calls[-1] == ("I", 9, False)


def test_zero_width_short_circuits(rasterizer, pipeline, options):
    fixed = pipeline.render(options._replace(width=0, spacing=2), ["A", "B"])
    assert [g.width for g in fixed] == [2, 2]
    assert all(g.data == (0, 0) for g in fixed)

    dynamic = pipeline.render(options._replace(width=0, dynamic_width=True), ["A"])
    assert dynamic[0].bitmap == ((),) * 8
    assert rasterizer.calls == []


def test_line_feed_is_blank(rasterizer, pipeline, options):
    [fixed] = pipeline.render(options, ["\n"])
    assert fixed.width == options.width + options.spacing
    assert not any(fixed.data)

    [dynamic] = pipeline.render(options._replace(dynamic_width=True), ["\n"])
    assert dynamic.width == 0
    assert rasterizer.calls == []


def test_space_in_dynamic_mode_gets_half_width(pipeline, options):
    [space] = pipeline.render(options._replace(width=6, dynamic_width=True), [" "])
    assert space.width == 3
    [space] = pipeline.render(options._replace(width=1, dynamic_width=True), [" "])
    assert space.width == 1


def test_preview_keeps_order_and_duplicates(pipeline, options):
    glyphs = pipeline.render_preview(options, "AA\nB")
    assert [g.character for g in glyphs] == ["A", "A", "\n", "B"]


def test_generate_font_deduplicates(pipeline, options):
    glyphs = pipeline.generate_font(options._replace(character_set="ABAC"))
    assert [g.character for g in glyphs] == ["A", "B", "C"]
    assert glyphs[0].code_point == 65


def test_generate_font_requires_area(pipeline, options):
    with pytest.raises(ConfigurationError):
        pipeline.generate_font(options._replace(width=0))
    with pytest.raises(ConfigurationError):
        pipeline.generate_font(options._replace(character_set=""))


@pytest.mark.parametrize("height", [0, 9])
def test_height_out_of_range(pipeline, options, height):
    with pytest.raises(ConfigurationError):
        pipeline.render(options._replace(height=height), ["A"])


def test_height_nine_is_unsupported(pipeline, options):
    with pytest.raises(UnsupportedHeightError):
        pipeline.render(options._replace(height=9), ["A"])


def test_negative_spacing_rejected(pipeline, options):
    with pytest.raises(ConfigurationError):
        pipeline.render(options._replace(spacing=-1), ["A"])


def test_font_size_adjustment_too_small(pipeline, options):
    with pytest.raises(ConfigurationError):
        pipeline.render(options._replace(font_size_adjustment=-8), ["A"])


def test_rasterizer_failure_names_character(options):
    pipeline = RasterizationPipeline(FakeRasterizer(fail_on={"B"}))
    with pytest.raises(RasterizerUnavailableError, match="'B'"):
        pipeline.render(options, ["A", "B"])


def _dot_rasterizer():
    # Two-row dot, anchored in its middle
    dot = RasterGlyph(alpha=((255,), (255,)), ascent=1, descent=1, origin_x=0.5)
    return FakeRasterizer(glyphs={".": dot})


def test_vertical_alignment(options):
    pipeline = RasterizationPipeline(_dot_rasterizer())
    opts = options._replace(width=1, spacing=0)

    [bottom] = pipeline.render(opts._replace(align="bottom"), ["."])
    [top] = pipeline.render(opts._replace(align="top"), ["."])
    [middle] = pipeline.render(opts._replace(align="manual"), ["."])
    [moved] = pipeline.render(opts._replace(align="manual", y_offset=2), ["."])

    assert bottom.data == (0b00000011,)
    assert top.data == (0b11000000,)
    assert middle.data == (0b00011000,)
    assert moved.data == (0b00000110,)


def test_manual_x_offset_moves_and_clips(options):
    pipeline = RasterizationPipeline(_dot_rasterizer())
    opts = options._replace(align="manual", spacing=0)
    [right] = pipeline.render(opts._replace(x_offset=1), ["."])
    [gone] = pipeline.render(opts._replace(x_offset=5), ["."])
    assert right.data == (0, 0, 0b00011000)
    assert gone.data == (0, 0, 0)


def test_downsample_averages_blocks():
    surface = [[255] * 10 + [0] * 10 for _ in range(20)]
    assert downsample(surface, 10, 2, 2) == [[255.0, 0.0], [255.0, 0.0]]


def test_threshold_is_strict():
    assert threshold([[128, 129]], 128) == ((False, True),)


def test_dither_distributes_error():
    assert dither([[128, 128], [128, 128]], 128) == ((True, False), (False, True))


def test_dither_is_deterministic(options):
    half = RasterGlyph(alpha=tuple((128,) * 40 for _ in range(80)), ascent=40, descent=40)
    opts = options._replace(width=4, render_mode="dithered", spacing=0)

    first = RasterizationPipeline(FakeRasterizer(glyphs={"#": half})).render(opts, ["#"])
    second = RasterizationPipeline(FakeRasterizer(glyphs={"#": half})).render(opts, ["#"])
    assert first == second

    pixels = [p for row in first[0].bitmap for p in row]
    assert any(pixels) and not all(pixels)


def test_glyph_invariants(pipeline, options):
    for opts in (options, options._replace(dynamic_width=True), options._replace(height=5)):
        for glyph in pipeline.render_preview(opts, "AB \n"):
            assert len(glyph.bitmap) == opts.height
            assert len(glyph.data) == glyph.width
            assert all(b < (1 << opts.height) for b in glyph.data)
