"""
Module: exporter.output.fonts

Purpose:
    Resolve the role-based font selections of RenderOptions (header,
    content, day) to fonts registered with ReportLab. Every styled cell
    embeds a font name, so this runs before any table is composed.

Key Functions:
    - load_fonts(): Resolve all three roles to a FontSet
    - resolve_font(): Resolve and register one selection
    - default_search_dirs(): Where TTF files are looked up

Key Classes:
    - FontLoadError: A selection cannot be resolved

Selections:
    - ReportLab standard fonts ("Helvetica", "Times-Roman", ...) need no file
    - Named Arabic families ("Amiri", "Cairo", ...) are looked up as TTF
      files in the search directories
    - A path to a .ttf file is registered under its file stem
    - A name already registered with ReportLab is used as is

Dependencies:
    - reportlab.pdfbase: Font registration
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont

from ..layout.config import FontSet
from ..options import RenderOptions

logger = logging.getLogger(__name__)

FONT_DIR_ENV = "TIMETABLE_FONT_DIR"

BUILTIN_TTF: Dict[str, str] = {
    "Amiri": "Amiri-Regular.ttf",
    "Cairo": "Cairo-Regular.ttf",
    "Tajawal": "Tajawal-Regular.ttf",
    "Noto Naskh Arabic": "NotoNaskhArabic-Regular.ttf",
    "Uthmanic": "UthmanicHafs.ttf",
}

ROLES = ("header", "content", "day")


class FontLoadError(Exception):
    """Raised when a font selection cannot be resolved or registered."""

    def __init__(self, selection: str, reason: str):
        super().__init__(f"Cannot load font {selection!r}: {reason}")
        self.selection = selection
        self.reason = reason


def default_search_dirs() -> List[Path]:
    """
    Directories searched for built-in TTF files, in priority order.

    $TIMETABLE_FONT_DIR (os.pathsep separated) comes first, then the
    user and system font directories that exist.
    """
    dirs: List[Path] = []
    env = os.environ.get(FONT_DIR_ENV)
    if env:
        dirs.extend(Path(p) for p in env.split(os.pathsep) if p)
    dirs.extend([
        Path.home() / ".fonts",
        Path.home() / ".local" / "share" / "fonts",
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        Path("/Library/Fonts"),
        Path("C:/Windows/Fonts"),
    ])
    return [d for d in dirs if d.is_dir()]


def _find_file(file_name: str, search_dirs: Iterable[Path]) -> Optional[Path]:
    for directory in search_dirs:
        direct = directory / file_name
        if direct.is_file():
            return direct
        for candidate in directory.rglob(file_name):
            if candidate.is_file():
                return candidate
    return None


def _register(name: str, path: Path, selection: str) -> str:
    try:
        pdfmetrics.registerFont(TTFont(name, str(path)))
    except (TTFError, OSError) as e:
        raise FontLoadError(selection, f"invalid font file {path}: {e}") from e
    logger.debug(f"Registered font {name!r} from {path}")
    return name


def resolve_font(selection: str, search_dirs: Sequence[Path]) -> str:
    """
    Resolve one font selection to a registered font name.

    Args:
        selection: Built-in identifier, registered name or TTF path
        search_dirs: Directories searched for built-in TTF files

    Returns:
        Font name usable in ReportLab styles

    Raises:
        FontLoadError: If the font cannot be found or registered
    """
    if selection in pdfmetrics.standardFonts:
        return selection
    if selection in pdfmetrics.getRegisteredFontNames():
        return selection

    if selection.lower().endswith(".ttf"):
        path = Path(selection).expanduser()
        if not path.is_file():
            raise FontLoadError(selection, "file not found")
        return _register(path.stem, path, selection)

    file_name = BUILTIN_TTF.get(selection)
    if file_name is None:
        raise FontLoadError(selection, "unknown font identifier")

    path = _find_file(file_name, search_dirs)
    if path is None:
        raise FontLoadError(
            selection,
            f"{file_name} not found in {[str(d) for d in search_dirs]}; "
            f"set {FONT_DIR_ENV} to the directory holding it",
        )
    return _register(selection, path, selection)


def load_fonts(
    options: RenderOptions,
    search_dirs: Optional[Sequence[Path]] = None,
    *,
    with_title: bool = False,
) -> FontSet:
    """
    Resolve the header, content and day fonts of an export call, plus
    the class title font when requested.

    Custom selections replace the built-in identifier of their role.
    No fallback font is substituted on failure.

    Args:
        options: Resolved render options
        search_dirs: Font directories, default_search_dirs() when None
        with_title: Also resolve the title role (class documents)

    Returns:
        FontSet with registered font names

    Raises:
        FontLoadError: If any role's font cannot be loaded

    Example:
        >>> load_fonts(resolve_options({"header_font": "Helvetica",
        ...     "content_font": "Helvetica", "day_font": "Helvetica"}))
        FontSet(header='Helvetica', content='Helvetica', day='Helvetica', title=None)
    """
    dirs = list(search_dirs) if search_dirs is not None else default_search_dirs()
    resolved: Dict[str, str] = {}
    roles = ROLES + ("title",) if with_title else ROLES
    for role in roles:
        selection = options.font_selection(role)
        if selection not in resolved:
            resolved[selection] = resolve_font(selection, dirs)

    fonts = FontSet(
        header=resolved[options.font_selection("header")],
        content=resolved[options.font_selection("content")],
        day=resolved[options.font_selection("day")],
        title=resolved[options.font_selection("title")] if with_title else None,
    )
    logger.info(
        f"Loaded fonts: header={fonts.header}, content={fonts.content}, "
        f"day={fonts.day}, title={fonts.title}"
    )
    return fonts
