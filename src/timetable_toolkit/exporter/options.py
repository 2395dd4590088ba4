"""
Module: exporter.options

Purpose:
    Visual options of an export call. Caller overrides are merged over a
    fixed default record so that every option is resolved before any
    table is composed.

Key Functions:
    - resolve_options(): Merge overrides over defaults
    - load_options(): Read overrides from a JSON file

Key Classes:
    - RenderOptions: Complete, resolved option record

Dependencies:
    - PIL.ImageColor: Colour string parsing

Used By:
    - exporter.controller: Once per export call
    - cli: --options file
"""

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from PIL import ImageColor

from .layout.models import RGB

logger = logging.getLogger(__name__)

DEFAULT_FONT = "Amiri"
TITLE_FONT = "Uthmanic"

_COLOR_FIELDS = ("theme_color", "content_text_color", "day_text_color")
_SIZE_FIELDS = ("header_font_size", "content_font_size", "day_font_size")
_FONT_FIELDS = ("header_font", "content_font", "day_font", "title_font")
_CUSTOM_FONT_FIELDS = (
    "custom_header_font",
    "custom_content_font",
    "custom_day_font",
    "custom_title_font",
)


@dataclass(frozen=True)
class RenderOptions:
    """
    Resolved visual options (immutable).

    Attributes:
        header_font: Built-in font identifier for header cells and titles
        content_font: Built-in font identifier for body cells
        day_font: Built-in font identifier for the day column
        title_font: Built-in font identifier for class document titles
        custom_header_font: Custom font (TTF path or registered name)
            replacing header_font when set
        custom_content_font: Custom replacement for content_font
        custom_day_font: Custom replacement for day_font
        custom_title_font: Custom replacement for title_font
        header_font_size: Header cell size in points
        content_font_size: Body cell size in points
        day_font_size: Day column size in points
        theme_color: Header background colour
        content_text_color: Body text colour
        day_text_color: Day column text colour

    Example:
        >>> resolve_options({"headerFontSize": 16}).header_font_size
        16
    """

    header_font: str = DEFAULT_FONT
    content_font: str = DEFAULT_FONT
    day_font: str = DEFAULT_FONT
    title_font: str = TITLE_FONT
    custom_header_font: Optional[str] = None
    custom_content_font: Optional[str] = None
    custom_day_font: Optional[str] = None
    custom_title_font: Optional[str] = None
    header_font_size: float = 14
    content_font_size: float = 12
    day_font_size: float = 12
    theme_color: RGB = (41, 128, 185)
    content_text_color: RGB = (0, 0, 0)
    day_text_color: RGB = (0, 0, 0)

    def font_selection(self, role: str) -> str:
        """
        Effective font selection for a role.

        Args:
            role: "header", "content", "day" or "title"

        Returns:
            The custom override when set, else the built-in identifier
        """
        custom = getattr(self, f"custom_{role}_font")
        return custom or getattr(self, f"{role}_font")


DEFAULT_OPTIONS = RenderOptions()

_FIELD_NAMES = {f.name for f in fields(RenderOptions)}


def _snake_case(key: str) -> str:
    """headerFontSize -> header_font_size"""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def parse_color(value: Any) -> RGB:
    """
    Parse a colour into an RGB triple.

    Accepts RGB sequences and any string PIL's ImageColor understands.

    Raises:
        ValueError: If the value is not a colour
    """
    if isinstance(value, str):
        rgb = ImageColor.getrgb(value)
        return (rgb[0], rgb[1], rgb[2])
    components = tuple(value)
    if len(components) != 3:
        raise ValueError(f"Colour needs 3 components: {value!r}")
    rgb = tuple(int(c) for c in components)
    if any(not 0 <= c <= 255 for c in rgb):
        raise ValueError(f"Colour components must be 0..255: {value!r}")
    return rgb  # type: ignore[return-value]


def _coerce(name: str, value: Any) -> Any:
    if name in _COLOR_FIELDS:
        return parse_color(value)
    if name in _SIZE_FIELDS:
        size = float(value)
        if not math.isfinite(size) or size <= 0:
            raise ValueError(f"{name} must be a positive number: {value!r}")
        return int(size) if size.is_integer() else size
    if name in _FONT_FIELDS:
        text = str(value).strip()
        if not text:
            raise ValueError(f"{name} must not be empty")
        return text
    if name in _CUSTOM_FONT_FIELDS:
        return str(value).strip() or None
    return value


def resolve_options(
    overrides: Union[RenderOptions, Mapping[str, Any], None] = None,
) -> RenderOptions:
    """
    Merge caller overrides over the default options.

    Keys may be snake_case or camelCase. Unknown keys are ignored; a value
    that cannot be used for its option keeps the default and is logged.

    Args:
        overrides: Partial options, or an already resolved record

    Returns:
        Complete RenderOptions
    """
    if overrides is None:
        return DEFAULT_OPTIONS
    if isinstance(overrides, RenderOptions):
        return overrides

    changes: dict[str, Any] = {}
    for key, value in overrides.items():
        name = _snake_case(str(key))
        if name not in _FIELD_NAMES:
            logger.debug(f"Ignoring unknown option {key!r}")
            continue
        if value is None:
            continue
        try:
            changes[name] = _coerce(name, value)
        except (TypeError, ValueError) as e:
            logger.warning(f"Invalid value for option {key!r}, keeping default: {e}")

    return replace(DEFAULT_OPTIONS, **changes)


def load_options(path: Path) -> dict[str, Any]:
    """
    Read option overrides from a JSON object file.

    Raises:
        ValueError: If the file is not a JSON object
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Options file must contain a JSON object: {path}")
    logger.debug(f"Loaded {len(data)} option overrides from {path}")
    return data
