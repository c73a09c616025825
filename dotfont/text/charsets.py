"""
Character Sets
==============
Named character sets and helpers for building the ordered character
string a font is generated from.

Order matters: a font's character set defines the order of its glyphs
in the packed output, so every helper here keeps first-occurrence order
instead of using sets.
"""

from typing import Dict, Iterable, List

from ..errors import ConfigurationError

# Basic ASCII printable characters (space through tilde)
ASCII_PRINTABLE = "".join(chr(i) for i in range(0x0020, 0x007F))

# Latin-1 Supplement
LATIN_1_SUPPLEMENT = "".join(chr(i) for i in range(0x00A0, 0x0100))

# Russian alphabet: А-Я, а-я, Ё, ё
CYRILLIC = ("".join(chr(i) for i in range(0x0410, 0x0450)) + "Ёё")

# Digits and the symbols clocks and meters usually need
NUMERIC = "0123456789 .,:-+%°"

CHARSETS: Dict[str, str] = {
    'ascii': ASCII_PRINTABLE,
    'latin1': LATIN_1_SUPPLEMENT,
    'cyrillic': CYRILLIC,
    'numeric': NUMERIC,
}

# Largest custom range accepted in one go
MAX_RANGE = 1000
MAX_CODE_POINT = 0xFFFF


def unique_characters(text: Iterable[str]) -> List[str]:
    """Characters of `text` with later duplicates dropped."""
    return list(dict.fromkeys(text))


def merge_charset(charset: str, extra: Iterable[str]) -> str:
    """Append `extra` to `charset`, keeping only first occurrences."""
    return "".join(unique_characters(charset + "".join(extra)))


def code_point_range(start_hex: str, end_hex: str) -> str:
    """
    Build the characters of an inclusive hex code point range.

    Args:
        start_hex: First code point as hex ("41", "0x41")
        end_hex: Last code point as hex

    Returns:
        String of all characters in the range

    Raises:
        ConfigurationError: On bad hex, reversed or oversized ranges
    """
    try:
        start = int(start_hex.strip(), 16)
        end = int(end_hex.strip(), 16)
    except ValueError:
        raise ConfigurationError(
            "Please enter valid hexadecimal codes for the start and end of the range.") from None

    if start > end:
        raise ConfigurationError('The "Start" code cannot be greater than the "End" code.')
    if end - start > MAX_RANGE:
        raise ConfigurationError(
            f"Range is too large. Please keep it under {MAX_RANGE} characters.")
    if start < 0 or end > MAX_CODE_POINT:
        raise ConfigurationError(f"Hex codes must be within 0-{MAX_CODE_POINT:X}.")

    return "".join(chr(i) for i in range(start, end + 1))
