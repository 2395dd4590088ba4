"""
Module: exporter.config

Purpose:
    Configuration dataclass for export calls. Immutable configuration
    with validation on construction.

Key Classes:
    - ExportConfig: Where documents go and which axes/classes they cover

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - exporter.controller: Export entry points
    - cli: Command-line flags
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from timetable_toolkit.core.models import DAYS, PERIODS, Day

from .layout.axis import AxisSequencer
from .layout.composer import DEFAULT_GRADES, DEFAULT_SECTIONS


@dataclass(frozen=True)
class ExportConfig:
    """
    Configuration for exporting timetables (immutable).

    Attributes:
        output_dir: Directory receiving the PDF files
        font_dirs: Directories searched for TTF fonts; None uses the
            default search path
        days: Working days in canonical order
        periods: Period numbers in canonical order
        grades: Grades printed by the all-classes document
        default_sections: Sections of a grade without explicit entry
        merge_headers: Merge spanned header cells in the master grid

    Example:
        >>> config = ExportConfig(output_dir=Path("out"))
        >>> config.axes.display_periods[0]
        7
    """

    output_dir: Path = Path("output")
    font_dirs: Optional[Tuple[Path, ...]] = None

    days: Tuple[Day, ...] = DAYS
    periods: Tuple[int, ...] = PERIODS
    grades: Tuple[int, ...] = DEFAULT_GRADES
    default_sections: Tuple[int, ...] = DEFAULT_SECTIONS

    merge_headers: bool = True

    _axes: AxisSequencer = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        object.__setattr__(self, "output_dir", Path(self.output_dir))
        if self.font_dirs is not None:
            object.__setattr__(self, "font_dirs", tuple(Path(d) for d in self.font_dirs))
        if any(p <= 0 for p in self.periods):
            raise ValueError(f"periods must be positive: {self.periods}")
        if any(g <= 0 for g in self.grades):
            raise ValueError(f"grades must be positive: {self.grades}")
        if any(s <= 0 for s in self.default_sections):
            raise ValueError(f"sections must be positive: {self.default_sections}")
        # AxisSequencer rejects empty axes
        object.__setattr__(self, "_axes", AxisSequencer(days=self.days, periods=self.periods))

    @property
    def axes(self) -> AxisSequencer:
        """Display order of the configured days and periods."""
        return self._axes

    def output_path(self, file_name: str) -> Path:
        return self.output_dir / file_name
