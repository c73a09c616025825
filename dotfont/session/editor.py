"""
FontSession - Font Editing State
================================
Holds the current render options and a history of font snapshots.

Every change to the glyph list pushes a new immutable snapshot (a tuple
of GlyphRecords), so undo/redo simply move the history cursor. The
character set in the options follows whatever snapshot is current.

Usage:
    session = FontSession(RasterizationPipeline(), options)
    session.generate()
    session.update_glyph(0, new_bitmap)
    session.undo()
"""

from typing import Optional, Sequence, Tuple

from ..config import validate_options
from ..errors import ConfigurationError
from ..glyph import GlyphRecord, RenderOptions
from ..io.importer import FontImport
from ..text.charsets import unique_characters
from ..text.pipeline import RasterizationPipeline
from .history import FontHistory

Font = Tuple[GlyphRecord, ...]


class FontSession:
    """
    Editing session for one font.

    Args:
        pipeline: Pipeline used for (re)rendering glyphs
        options: Initial render options
    """

    def __init__(self, pipeline: RasterizationPipeline, options: RenderOptions = None):
        self._pipeline = pipeline
        self.options = options if options is not None else RenderOptions()
        self.history: FontHistory[Optional[Font]] = FontHistory(None)

    @property
    def glyphs(self) -> Font:
        """Current glyphs (empty before the first generate/import)."""
        return self.history.current or ()

    def _push(self, glyphs: Sequence[GlyphRecord]) -> Font:
        font = tuple(glyphs)
        self.history.push(font)
        self._follow_snapshot()
        return font

    def _follow_snapshot(self) -> None:
        font = self.history.current
        if font is not None:
            charset = "".join(g.character for g in font)
            if charset != self.options.character_set:
                self.options = self.options._replace(character_set=charset)

    # =========================================================================
    # Generation
    # =========================================================================

    def generate(self) -> Font:
        """Render the whole character set from scratch."""
        return self._push(self._pipeline.generate_font(self.options))

    def sync(self) -> Font:
        """
        Bring the font in line with the character set without touching
        glyphs that are already present (and possibly hand-edited).

        Glyphs no longer in the set are removed, new characters are
        rendered, and the result is sorted by code point.
        """
        validate_options(self.options, require_area=True)
        wanted = unique_characters(self.options.character_set)
        wanted_set = set(wanted)
        existing = {g.character for g in self.glyphs}

        kept = [g for g in self.glyphs if g.character in wanted_set]
        to_add = [ch for ch in wanted if ch not in existing]
        added = self._pipeline.render(self.options, to_add) if to_add else []

        return self._push(sorted(kept + added, key=lambda g: g.code_point))

    def add_character(self, code_point: int) -> GlyphRecord:
        """
        Render and insert one character, keeping code point order.

        Raises:
            ConfigurationError: If the character is already in the font
        """
        ch = chr(code_point)
        if ch in self.options.character_set:
            raise ConfigurationError(
                f"Character {ch!r} (Code: {code_point}) already exists in the font set.")

        [glyph] = self._pipeline.render(self.options, [ch])
        self._push(sorted(self.glyphs + (glyph,), key=lambda g: g.code_point))
        return glyph

    # =========================================================================
    # Editing
    # =========================================================================

    def delete_character(self, index: int) -> Font:
        """Remove the glyph at `index`."""
        glyphs = self.glyphs
        if not 0 <= index < len(glyphs):
            raise IndexError(f"No glyph at index {index}")
        return self._push(glyphs[:index] + glyphs[index + 1:])

    def update_glyph(self, index: int, bitmap: Sequence[Sequence[bool]]) -> GlyphRecord:
        """
        Replace a glyph's bitmap and re-encode its bytes.

        Raises:
            ConfigurationError: If the bitmap height differs from the font
        """
        glyphs = self.glyphs
        if not 0 <= index < len(glyphs):
            raise IndexError(f"No glyph at index {index}")
        if len(bitmap) != self.options.height:
            raise ConfigurationError(
                f"Bitmap for {glyphs[index].character!r} has {len(bitmap)} rows, "
                f"font height is {self.options.height}.")

        glyph = glyphs[index].with_bitmap(bitmap)
        self._push(glyphs[:index] + (glyph,) + glyphs[index + 1:])
        return glyph

    def apply_import(self, result: FontImport) -> Font:
        """Adopt an imported font and its recovered options."""
        self.options = self.options._replace(**result.options)
        return self._push(result.glyphs)

    # =========================================================================
    # History
    # =========================================================================

    def undo(self) -> Font:
        self.history.undo()
        self._follow_snapshot()
        return self.glyphs

    def redo(self) -> Font:
        self.history.redo()
        self._follow_snapshot()
        return self.glyphs
