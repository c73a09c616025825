"""
FontLocator - Family Name to Font File Resolution
=================================================
Finds a TrueType/OpenType file for a family name and weight by reading
the `name` and `OS/2` tables of the fonts in a set of directories.

Usage:
    locator = FontLocator()
    path = locator.find("DejaVu Sans Mono", "bold")

A family argument that is an existing file path is returned as is.
"""

import os
import struct
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from ..errors import RasterizerUnavailableError

FONT_EXTENSIONS = ('.ttf', '.otf', '.ttc')

# usWeightClass at or above this counts as bold
BOLD_WEIGHT = 600


def default_font_dirs() -> List[Path]:
    """Platform font directories, most specific first."""
    home = Path.home()
    if sys.platform == 'darwin':
        dirs = [home / 'Library' / 'Fonts', Path('/Library/Fonts'),
                Path('/System/Library/Fonts')]
    elif sys.platform.startswith('win'):
        windir = Path(os.environ.get('WINDIR', 'C:\\Windows'))
        dirs = [windir / 'Fonts']
    else:
        dirs = [home / '.local' / 'share' / 'fonts', home / '.fonts',
                Path('/usr/local/share/fonts'), Path('/usr/share/fonts')]

    extra = os.environ.get('DOTFONT_FONT_PATH')
    if extra:
        dirs = [Path(p) for p in extra.split(os.pathsep) if p] + dirs
    return dirs


def read_font_names(path: Path) -> Optional[Tuple[str, int]]:
    """
    Read (family name, weight class) from a font file.

    Returns:
        Tuple of family name and usWeightClass, or None if the file
        or its name/OS/2 tables cannot be parsed
    """
    from fontTools.ttLib import TTFont, TTLibError

    try:
        font = TTFont(str(path), lazy=True, fontNumber=0)
    except (TTLibError, OSError, AssertionError):
        return None

    try:
        family = font['name'].getBestFamilyName()
        weight = font['OS/2'].usWeightClass if 'OS/2' in font else 400
    except (KeyError, TTLibError, struct.error, AssertionError, ValueError, IndexError):
        return None
    finally:
        font.close()

    if not family:
        return None
    return family, weight


class FontLocator:
    """
    Resolves (family, weight) pairs to font files.

    The directory scan runs once, on the first lookup.

    Args:
        font_dirs: Directories to scan (default: platform font dirs)
    """

    def __init__(self, font_dirs: Iterable[Path] = None):
        self._dirs = [Path(d) for d in font_dirs] if font_dirs is not None else None
        self._index: Optional[Dict[str, List[Tuple[int, Path]]]] = None

    def _scan(self) -> Dict[str, List[Tuple[int, Path]]]:
        index: Dict[str, List[Tuple[int, Path]]] = {}
        dirs = self._dirs if self._dirs is not None else default_font_dirs()
        for directory in dirs:
            if not directory.is_dir():
                continue
            for path in sorted(directory.rglob('*')):
                if path.suffix.lower() not in FONT_EXTENSIONS:
                    continue
                names = read_font_names(path)
                if names is None:
                    continue
                family, weight = names
                index.setdefault(family.casefold(), []).append((weight, path))
        return index

    def families(self) -> List[str]:
        """Case-folded names of all families found."""
        if self._index is None:
            self._index = self._scan()
        return sorted(self._index)

    def find(self, family: str, weight: str = "normal") -> Path:
        """
        Find the font file for a family.

        Args:
            family: Family name (case-insensitive) or path to a font file
            weight: "normal" or "bold"

        Returns:
            Path to the best matching font file

        Raises:
            RasterizerUnavailableError: If no font matches
        """
        candidate = Path(family)
        if candidate.suffix.lower() in FONT_EXTENSIONS and candidate.is_file():
            return candidate

        if self._index is None:
            self._index = self._scan()

        entries = self._index.get(family.casefold())
        if not entries:
            raise RasterizerUnavailableError(f"Font family not found: {family!r}")

        target = 700 if weight == "bold" else 400
        bold = weight == "bold"
        # Prefer the right side of the bold/regular split, then the closest weight
        best = min(entries, key=lambda e: ((e[0] >= BOLD_WEIGHT) != bold, abs(e[0] - target), str(e[1])))
        return best[1]
