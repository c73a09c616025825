"""
CodeEmitter - Packed Font Output
================================
Serializes glyph records into the packed column-byte formats and into
source code for firmware projects.

Packed layouts:
    Fixed width:    data = glyph columns concatenated in character order
    Dynamic width:  data as above, plus widths[i] and offsets[i], where
                    offsets[i] is the running sum of the previous widths

Source formats:
    c       const unsigned char arrays with per-character comments
    python  lists with the same layout
    hex     plain space-separated hex

Binary files (write_binary):
    <out>               data bytes
    <out>.widths.bin    one byte per glyph (dynamic only)
    <out>.offsets.bin   uint32 little-endian per glyph (dynamic only)
"""

import re
import struct
from pathlib import Path
from typing import List, NamedTuple, Sequence, Tuple

from ..errors import ConfigurationError
from ..glyph import GlyphRecord, RenderOptions

FORMATS = ('c', 'python', 'hex')

# Values per output line
CHUNK_SIZE = 16

_FONT_SUFFIXES = ('.ttf', '.otf', '.ttc')


class PackedFont(NamedTuple):
    """Column bytes plus the per-glyph index tables."""
    data: bytes
    widths: Tuple[int, ...]
    offsets: Tuple[int, ...]

    def to_bytes(self) -> bytes:
        return self.data


def pack_font(glyphs: Sequence[GlyphRecord]) -> PackedFont:
    """Concatenate glyph columns and build the width/offset tables."""
    data = bytearray()
    widths = []
    offsets = []
    for glyph in glyphs:
        widths.append(len(glyph.data))
        offsets.append(len(data))
        data.extend(glyph.data)
    return PackedFont(bytes(data), tuple(widths), tuple(offsets))


def font_symbol(options: RenderOptions) -> str:
    """Identifier used for the emitted arrays, e.g. font_VT323_6x8."""
    family = options.font_family
    path = Path(family)
    if path.suffix.lower() in _FONT_SUFFIXES:
        family = path.stem
    family = re.sub(r'\s+', '_', family)
    family = re.sub(r'[^a-zA-Z0-9_]', '', family)
    return f"font_{family}_{options.width}x{options.height}"


def _escape_char(ch: str) -> str:
    if ch == '\\':
        return '\\\\'
    if ch == "'":
        return "\\'"
    if ch == '\n':
        return '\\n'
    if not ch.isprintable():
        return f"\\x{ord(ch):02x}"
    return ch


def _charset_text(glyphs: Sequence[GlyphRecord]) -> str:
    return "".join(g.character for g in glyphs).replace('\\', '\\\\').replace('\n', '\\n')


def _code_point_ranges(glyphs: Sequence[GlyphRecord]) -> List[Tuple[int, int]]:
    """Index ranges (inclusive) of runs of consecutive code points."""
    ranges = []
    start = 0
    for i in range(1, len(glyphs)):
        if glyphs[i].code_point != glyphs[i - 1].code_point + 1:
            ranges.append((start, i - 1))
            start = i
    if glyphs:
        ranges.append((start, len(glyphs) - 1))
    return ranges


def _range_label(glyphs: Sequence[GlyphRecord], first: int, last: int) -> str:
    a, b = glyphs[first], glyphs[last]
    if first == last:
        return f"Char '{_escape_char(a.character)}' (Code: {a.code_point})"
    return (f"Characters '{_escape_char(a.character)}' (Code: {a.code_point}) to "
            f"'{_escape_char(b.character)}' (Code: {b.code_point})")


def _chunks(values: Sequence[str], indent: str) -> List[str]:
    return [indent + ', '.join(values[i:i + CHUNK_SIZE]) + ','
            for i in range(0, len(values), CHUNK_SIZE)]


def _close_list(lines: List[str]) -> None:
    """Drop the trailing comma of the last value line."""
    for i in range(len(lines) - 1, -1, -1):
        if lines[i].rstrip().endswith(','):
            lines[i] = lines[i].rstrip()[:-1]
            return


# =============================================================================
# Fixed Width
# =============================================================================

def _emit_fixed(glyphs: Sequence[GlyphRecord], options: RenderOptions, fmt: str) -> str:
    if fmt == 'hex':
        return "\n".join(" ".join(f"{b:02X}" for b in g.data) for g in glyphs)

    name = font_symbol(options)
    comment = '//' if fmt == 'c' else '#'
    lines = [
        f"{comment} Font: {options.font_family}, Size: {options.width}x{options.height} "
        f"(+{options.spacing}px spacing)",
        f'{comment} Characters: "{_charset_text(glyphs)}"',
        f"{comment} Each byte represents a column, with the MSB as the top row.",
    ]

    if fmt == 'c':
        lines.append(f"const unsigned char {name}[] = {{")
        for g in glyphs:
            lines.append(f"  /* Char '{_escape_char(g.character)}' (Code: {g.code_point}) */")
            if g.data:
                lines.append("  " + ", ".join(f"0x{b:02X}" for b in g.data) + ",")
        lines.append("};")
    else:
        lines.append(f"{name} = [")
        for g in glyphs:
            lines.append(f"  # Char '{_escape_char(g.character)}' (Code: {g.code_point})")
            if g.data:
                lines.append("  " + ", ".join(f"0x{b:02x}" for b in g.data) + ",")
        lines.append("]")
    return "\n".join(lines) + "\n"


# =============================================================================
# Dynamic Width
# =============================================================================

def _emit_dynamic(glyphs: Sequence[GlyphRecord], options: RenderOptions, fmt: str) -> str:
    packed = pack_font(glyphs)

    if fmt == 'hex':
        return ("--- WIDTHS ---\n" + " ".join(f"{w:02X}" for w in packed.widths) +
                "\n\n--- OFFSETS ---\n" + " ".join(f"{o:04X}" for o in packed.offsets) +
                "\n\n--- DATA ---\n" + " ".join(f"{b:02X}" for b in packed.data))

    name = font_symbol(options)
    c = fmt == 'c'
    comment = '//' if c else '#'
    indent = '  ' if c else '    '
    ranges = _code_point_ranges(glyphs)

    lines = [
        f"{comment} Font: {options.font_family}, Size: Up to {options.width}x{options.height} "
        f"(Dynamic Width)",
        f'{comment} Characters: "{_charset_text(glyphs)}"',
        f"{comment} To render a character, get its width from {name}_widths[],",
        f"{comment} its offset from {name}_offsets[], and then read the bytes",
        f"{comment} from {name}_data[] starting at that offset.",
        "",
    ]

    def table(title, decl, values):
        lines.append(f"{comment} {title}")
        lines.append(decl)
        body = []
        for first, last in ranges:
            body.append(f"{indent}{comment} {_range_label(glyphs, first, last)}")
            body.extend(_chunks([str(v) for v in values[first:last + 1]], indent))
        _close_list(body)
        lines.extend(body)
        lines.append("};" if c else "]")
        lines.append("")

    if c:
        table("Width of each character in pixels (columns)",
              f"const unsigned char {name}_widths[] = {{", packed.widths)
        table("Start address of each character in the font data array",
              f"const unsigned int {name}_offsets[] = {{", packed.offsets)
        data_decl = f"const unsigned char {name}_data[] = {{"
        data_values = [f"0x{b:02X}" for b in packed.data]
    else:
        table("Width of each character in pixels (columns)", f"{name}_widths = [", packed.widths)
        table("Start address of each character in the font data array",
              f"{name}_offsets = [", packed.offsets)
        data_decl = f"{name}_data = ["
        data_values = [f"0x{b:02x}" for b in packed.data]

    lines.append(f"{comment} Font data, column by column, for all characters concatenated")
    lines.append(data_decl)
    body = _chunks(data_values, indent)
    _close_list(body)
    lines.extend(body)
    lines.append("};" if c else "]")
    return "\n".join(lines) + "\n"


def emit_code(glyphs: Sequence[GlyphRecord], options: RenderOptions, fmt: str = 'c') -> str:
    """
    Render glyphs as source code or plain hex.

    Args:
        glyphs: Glyphs in character-set order
        options: Options the glyphs were made with (names, sizes, layout)
        fmt: "c", "python" or "hex"

    Returns:
        Source text
    """
    if fmt not in FORMATS:
        raise ConfigurationError(f"Unknown output format: {fmt!r} (expected one of {', '.join(FORMATS)})")
    if options.dynamic_width:
        return _emit_dynamic(glyphs, options, fmt)
    return _emit_fixed(glyphs, options, fmt)


def write_binary(glyphs: Sequence[GlyphRecord], path: Path, dynamic: bool) -> List[Path]:
    """
    Write the packed data (and index tables for dynamic fonts).

    Returns:
        Paths written
    """
    packed = pack_font(glyphs)
    if dynamic and any(w > 0xFF for w in packed.widths):
        raise ConfigurationError("Glyph widths above 255 do not fit the one-byte widths table.")

    path = Path(path)
    written = [path]
    with open(path, 'wb') as f:
        f.write(packed.to_bytes())

    if dynamic:
        widths_path = path.with_name(path.name + '.widths.bin')
        offsets_path = path.with_name(path.name + '.offsets.bin')
        with open(widths_path, 'wb') as f:
            f.write(bytes(packed.widths))
        with open(offsets_path, 'wb') as f:
            for offset in packed.offsets:
                f.write(struct.pack('<I', offset))
        written += [widths_path, offsets_path]
    return written
