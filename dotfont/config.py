"""
Render Option Configuration
===========================
Default options, validation and JSON option files.

Option files hold a JSON object whose keys are RenderOptions field
names. Missing keys fall back to DEFAULT_OPTIONS:

    {
        "font_family": "VT323",
        "width": 5,
        "height": 7,
        "render_mode": "dithered",
        "render_threshold": 110
    }
"""

import json
from pathlib import Path
from typing import Any, Dict

from .buffer.codec import MAX_HEIGHT, check_height
from .errors import ConfigurationError
from .glyph import Align, FontWeight, RenderMode, RenderOptions

DEFAULT_OPTIONS = RenderOptions()

_INT_FIELDS = ("width", "height", "spacing", "font_size_adjustment",
               "render_threshold", "x_offset", "y_offset")


def validate_options(options: RenderOptions, require_area: bool = False) -> None:
    """
    Check options before rasterizing.

    Args:
        options: Options to check
        require_area: If True, also require width > 0 and a non-empty
            character set (full font generation). Previews may use width 0.

    Raises:
        ConfigurationError: On any invalid option
        UnsupportedHeightError: If height > 8
    """
    check_height(options.height)
    if options.width < 0:
        raise ConfigurationError(f"Glyph width cannot be negative (got {options.width}).")
    if options.spacing < 0:
        raise ConfigurationError(f"Spacing cannot be negative (got {options.spacing}).")
    if options.render_mode not in RenderMode.ALL:
        raise ConfigurationError(f"Unknown render mode: {options.render_mode!r}")
    if options.align not in Align.ALL:
        raise ConfigurationError(f"Unknown alignment: {options.align!r}")
    if options.font_weight not in FontWeight.ALL:
        raise ConfigurationError(f"Unknown font weight: {options.font_weight!r}")
    if not 0 <= options.render_threshold <= 255:
        raise ConfigurationError(
            f"Render threshold must be between 0 and 255 (got {options.render_threshold}).")

    if require_area:
        if options.width <= 0 or options.height <= 0:
            raise ConfigurationError("Width and height must be positive numbers.")
        if not options.character_set:
            raise ConfigurationError("Character set cannot be empty.")


def options_from_dict(values: Dict[str, Any], base: RenderOptions = DEFAULT_OPTIONS) -> RenderOptions:
    """
    Overlay a dict of option fields onto `base`.

    Raises:
        ConfigurationError: On unknown keys or non-integer numeric fields
    """
    unknown = sorted(set(values) - set(RenderOptions._fields))
    if unknown:
        raise ConfigurationError(f"Unknown option(s): {', '.join(unknown)}")

    cleaned = dict(values)
    for name in _INT_FIELDS:
        if name in cleaned:
            try:
                cleaned[name] = int(cleaned[name])
            except (TypeError, ValueError):
                raise ConfigurationError(
                    f"Option '{name}' must be an integer, not {cleaned[name]!r}") from None
    if "dynamic_width" in cleaned:
        cleaned["dynamic_width"] = bool(cleaned["dynamic_width"])
    return base._replace(**cleaned)


def load_options(path: Path, base: RenderOptions = DEFAULT_OPTIONS) -> RenderOptions:
    """Read a JSON option file over `base`."""
    with open(path, 'r', encoding='utf-8') as f:
        try:
            values = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid option file {path}: {e}") from e
    if not isinstance(values, dict):
        raise ConfigurationError(f"Option file {path} must hold a JSON object.")
    return options_from_dict(values, base)


def save_options(options: RenderOptions, path: Path) -> None:
    """Write options as a JSON object."""
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(options._asdict(), f, indent=2, ensure_ascii=False)
        f.write("\n")


__all__ = ["DEFAULT_OPTIONS", "MAX_HEIGHT", "validate_options", "options_from_dict",
           "load_options", "save_options"]
