"""
Error Taxonomy
==============
Exceptions raised by the rasterizer, codec and import layers.

All errors derive from FontError (a ValueError) so callers can catch
the whole family at once. Messages name the offending character or
index where one applies.
"""


class FontError(ValueError):
    """Base class for all dotfont errors."""


class ConfigurationError(FontError):
    """Invalid height, width, spacing or other caller-fixable option."""


class UnsupportedHeightError(ConfigurationError):
    """Glyph height exceeds the 8 rows one column byte can hold."""


class ArrayLengthMismatchError(FontError):
    """Character set, widths and offsets arrays disagree in length."""


class ArraySizeMismatchError(FontError):
    """Fixed-width data array does not hold characters * width bytes."""


class OutOfBoundsError(FontError):
    """A glyph's offset + width reaches past the end of the data array."""


class RasterizerUnavailableError(FontError):
    """The text rasterizer (or the font it needs) cannot be used."""
