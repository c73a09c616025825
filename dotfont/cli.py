#!/usr/bin/env python3
"""
Dot-Matrix Font Tool
====================
Generates packed column-byte fonts from TrueType/OpenType fonts and
re-imports existing C/Python font arrays.

Features:
- Input: font file path or installed family name
- Output: C array, Python list, plain hex, or raw binary
- Fixed-width or dynamic-width (per-glyph widths + offsets) layouts
- Aliased, anti-aliased (10x supersampled) and dithered rendering
- Import of existing arrays with optional layout conversion
- Preview rendered glyphs in terminal

Requirements:
    pip install Pillow fonttools

Usage:
    # 5x7 font from an installed family, C output on stdout
    dotfont generate "DejaVu Sans Mono" --width 5 --height 7

    # Dynamic-width Python output from a font file
    dotfont generate fonts/VT323-Regular.ttf --dynamic --format python -o font.py

    # Re-import a fixed-width array and convert it to dynamic width
    dotfont import font.c --chars "ABC" --height 8 --width 6 --convert

    # Preview specific characters
    dotfont generate VT323 --preview "Hello"
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from .buffer.bitmap import bitmap_to_text
from .config import DEFAULT_OPTIONS, load_options, options_from_dict
from .errors import FontError
from .glyph import Align, FontWeight, GlyphRecord, ImportSpec, RenderMode, RenderOptions
from .io.convert import convert_import
from .io.emitter import FORMATS, emit_code, write_binary
from .io.importer import assemble_font
from .text.charsets import CHARSETS, merge_charset
from .text.pipeline import RasterizationPipeline


# =============================================================================
# Preview
# =============================================================================

def preview_glyphs(glyphs: Sequence[GlyphRecord], text: str, file: TextIO = None) -> None:
    """Print ASCII art preview of glyphs (to stdout unless `file` is given)."""
    by_char = {g.character: g for g in glyphs}

    print("\nPreview:", file=file)
    print("-" * 40, file=file)

    for char in text:
        glyph = by_char.get(char)
        if glyph is None:
            print(f"'{char}' (U+{ord(char):04X}): NOT FOUND", file=file)
            continue

        print(f"'{char}' (U+{glyph.code_point:04X}) width={glyph.width}:", file=file)
        for line in bitmap_to_text(glyph.bitmap).splitlines():
            print(f"  {line}", file=file)
        print(file=file)


# =============================================================================
# Output
# =============================================================================

def write_output(glyphs: Sequence[GlyphRecord], options: RenderOptions,
                 fmt: str, output: Optional[Path]) -> None:
    """Write glyphs to a file, or stdout when no output path is given."""
    if fmt == 'bin':
        if output is None:
            raise FontError("--format bin requires an output file (-o)")
        output.parent.mkdir(parents=True, exist_ok=True)
        for path in write_binary(glyphs, output, options.dynamic_width):
            size_kb = path.stat().st_size / 1024
            print(f"Created: {path} ({size_kb:.1f} KB)")
        return

    code = emit_code(glyphs, options, fmt)
    if output is None:
        sys.stdout.write(code)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, 'w', encoding='utf-8') as f:
        f.write(code)
    size_kb = output.stat().st_size / 1024
    print(f"Created: {output} ({size_kb:.1f} KB)")


def _status(message: str, to_stdout: bool) -> None:
    # Status goes to stderr when the code itself is printed to stdout
    print(message, file=sys.stderr if to_stdout else sys.stdout)


def _preview_stream(code_on_stdout: bool) -> TextIO:
    return sys.stderr if code_on_stdout else sys.stdout


# =============================================================================
# Commands
# =============================================================================

def build_options(args: argparse.Namespace) -> RenderOptions:
    """Defaults <- --config file <- command line flags."""
    options = load_options(args.config) if args.config else DEFAULT_OPTIONS

    overrides = {'font_family': str(args.font)}
    for name in ('width', 'height', 'spacing', 'font_size_adjustment', 'render_mode',
                 'render_threshold', 'align', 'x_offset', 'y_offset', 'font_weight'):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value
    if args.dynamic:
        overrides['dynamic_width'] = True

    charset = args.chars
    if args.charsets:
        charset = charset or ""
        for name in args.charsets:
            charset = merge_charset(charset, CHARSETS[name])
    if charset:
        overrides['character_set'] = charset

    return options_from_dict(overrides, options)


def cmd_generate(args: argparse.Namespace) -> None:
    options = build_options(args)
    quiet = args.output is None and args.format != 'bin'

    mode = "dynamic" if options.dynamic_width else "fixed"
    _status(f"Rendering {len(set(options.character_set))} chars from {options.font_family} "
            f"at {options.width}x{options.height} ({options.render_mode}, {mode} width)", quiet)

    pipeline = RasterizationPipeline()
    glyphs = pipeline.generate_font(options)

    if args.preview:
        preview_glyphs(glyphs, args.preview, _preview_stream(quiet and not args.preview_only))
        if args.preview_only:
            return

    write_output(glyphs, options, args.format, args.output)


def _read(path: Optional[Path]) -> str:
    if path is None:
        return ""
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def cmd_import(args: argparse.Namespace) -> None:
    quiet = args.output is None and args.format != 'bin'
    spec = ImportSpec(
        data=_read(args.data),
        character_set=args.chars,
        height=args.height,
        width=args.width or 0,
        dynamic=args.dynamic,
        widths=_read(args.widths),
        offsets=_read(args.offsets),
    )

    result = assemble_font(spec)
    _status(f"Loaded {len(result.glyphs)} glyphs, {result.options['width']}x{spec.height} "
            f"({'dynamic' if spec.dynamic else 'fixed'} width)", quiet)

    if args.convert or args.align:
        result = convert_import(result, convert=args.convert,
                                fixed_width=args.fixed_width, align=args.align)
        if args.convert:
            _status(f"Converted to {'dynamic' if result.options['dynamic_width'] else 'fixed'} "
                    f"width, nominal width {result.options['width']}", quiet)

    options = DEFAULT_OPTIONS._replace(font_family=args.name, **result.options)

    if args.preview:
        preview_glyphs(result.glyphs, args.preview, _preview_stream(quiet))

    write_output(result.glyphs, options, args.format, args.output)


# =============================================================================
# Main
# =============================================================================

def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='dotfont',
        description='Generate and import column-byte fonts for dot-matrix displays',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dotfont generate "DejaVu Sans Mono" --width 5 --height 7
  dotfont generate VT323 --render-mode dithered --threshold 100 -o font.h
  dotfont import font.c --chars "0123456789" --height 8 --width 6
  dotfont import data.txt --widths w.txt --offsets o.txt --dynamic --chars "AB" --height 8

Available charsets: """ + ", ".join(CHARSETS)
    )
    sub = parser.add_subparsers(dest='command', required=True)

    formats = list(FORMATS) + ['bin']

    gen = sub.add_parser('generate', help='Render a font into packed arrays')
    gen.add_argument('font', help='Font file (TTF/OTF) or installed family name')
    gen.add_argument('-o', '--output', type=Path, help='Output file (default: stdout)')
    gen.add_argument('--format', '-f', choices=formats, default='c', help='Output format (default: c)')
    gen.add_argument('--config', type=Path, help='JSON file with render options')
    gen.add_argument('--width', '-W', type=int, help='Glyph width in pixels')
    gen.add_argument('--height', '-H', type=int, help='Glyph height in pixels (1-8)')
    gen.add_argument('--spacing', type=int, help='Empty columns after each fixed-width glyph')
    gen.add_argument('--weight', dest='font_weight', choices=FontWeight.ALL)
    gen.add_argument('--size-adjust', dest='font_size_adjustment', type=int,
                     help='Grow (+) or shrink (-) the font relative to the grid')
    gen.add_argument('--render-mode', '-m', dest='render_mode', choices=RenderMode.ALL)
    gen.add_argument('--threshold', dest='render_threshold', type=int,
                     help='Render threshold 0-255 (anti-aliased/dithered)')
    gen.add_argument('--align', choices=Align.ALL)
    gen.add_argument('--x-offset', dest='x_offset', type=int)
    gen.add_argument('--y-offset', dest='y_offset', type=int)
    gen.add_argument('--dynamic', action='store_true', help='Dynamic-width output')
    gen.add_argument('--chars', '-c', help='Characters to include')
    gen.add_argument('--charset', action='append', dest='charsets', choices=list(CHARSETS),
                     help='Predefined charset to include (can repeat)')
    gen.add_argument('--preview', type=str, help='Preview specific characters after rendering')
    gen.add_argument('--preview-only', action='store_true', help="Only preview, don't write output")
    gen.set_defaults(func=cmd_generate)

    imp = sub.add_parser('import', help='Rebuild a font from array text')
    imp.add_argument('data', type=Path, help='File holding the data array')
    imp.add_argument('--widths', type=Path, help='File holding the widths array (dynamic)')
    imp.add_argument('--offsets', type=Path, help='File holding the offsets array (dynamic)')
    imp.add_argument('--chars', '-c', required=True, help='Characters in table order')
    imp.add_argument('--height', '-H', type=int, required=True, help='Glyph height (1-8)')
    imp.add_argument('--width', '-W', type=int, help='Glyph width (fixed-width fonts)')
    imp.add_argument('--dynamic', action='store_true', help='Input is dynamic-width')
    imp.add_argument('--convert', action='store_true', help='Switch fixed <-> dynamic width')
    imp.add_argument('--fixed-width', type=int, help='Target width for dynamic -> fixed')
    imp.add_argument('--align', choices=(Align.TOP, Align.BOTTOM), help='Realign glyph rows')
    imp.add_argument('--name', default='imported', help='Font name used in emitted code')
    imp.add_argument('-o', '--output', type=Path, help='Output file (default: stdout)')
    imp.add_argument('--format', '-f', choices=formats, default='c', help='Output format (default: c)')
    imp.add_argument('--preview', type=str, help='Preview specific characters')
    imp.set_defaults(func=cmd_import)

    return parser


def main(argv: List[str] = None) -> int:
    parser = make_parser()
    args = parser.parse_args(argv)

    try:
        args.func(args)
    except FontError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
