"""
Import/export subsystem.

Modules:
    parser: Integers from C/Python array literals
    importer: Glyph records from fixed or dynamic tables
    convert: Fixed <-> dynamic width conversion, realignment
    emitter: Packed tables, source code and binary output
"""
from .parser import parse_array
from .importer import FontImport, assemble_font
from .convert import to_fixed, to_dynamic, realign, convert_import
from .emitter import FORMATS, PackedFont, pack_font, emit_code, write_binary

__all__ = [
    "parse_array",
    "FontImport",
    "assemble_font",
    "to_fixed",
    "to_dynamic",
    "realign",
    "convert_import",
    "FORMATS",
    "PackedFont",
    "pack_font",
    "emit_code",
    "write_binary",
]
