"""
Module: exporter.layout.config

Purpose:
    Fixed geometry of each document type: paper, margins, table start
    offset, paddings, minimum row heights and title sizes.

Key Classes:
    - FontSet: Concrete font names per role, produced by the font loader
    - TableLayout: Geometry of one document type
    - MasterWidths: Column widths of the master grid

Key Constants:
    - TEACHER_LAYOUT, CLASS_LAYOUT, ALL_TEACHERS_LAYOUT,
      ALL_CLASSES_LAYOUT: Single-entity and paginated documents

Used By:
    - exporter.layout.composer
    - exporter.layout.master
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

from .models import CellPadding, PageSetup


@dataclass(frozen=True)
class FontSet:
    """
    Registered font names for each role (immutable).

    The title font is loaded only for class documents; when it is None
    their titles use the header font.

    Example:
        >>> FontSet.uniform("Helvetica").day
        'Helvetica'
    """
    header: str
    content: str
    day: str
    title: Optional[str] = None

    @classmethod
    def uniform(cls, name: str) -> FontSet:
        return cls(header=name, content=name, day=name, title=name)

    @property
    def class_title(self) -> str:
        return self.title or self.header


@dataclass(frozen=True)
class TableLayout:
    """
    Geometry of one document type (immutable).

    Attributes:
        page: Paper and margins
        start_y: Table top offset from the page top (mm)
        body_padding: Body cell padding
        header_padding: Header cell padding
        body_min_height: Minimum body row height (mm)
        header_min_height: Minimum header row height (mm)
        day_halign: Alignment of the day column
        day_width: Fixed day column width (mm), None for shared width
        title_size: Title font size (pt)
        subtitle_size: Subtitle font size (pt), None for no subtitle
        footer_size: Lesson-count footer size (pt), None for no footer
        title_align: Title anchor
        line_width: Grid line width (mm)
    """
    page: PageSetup
    start_y: float
    body_padding: CellPadding
    header_padding: CellPadding
    body_min_height: float
    header_min_height: float
    day_halign: Literal["left", "center", "right"] = "right"
    day_width: Optional[float] = None
    title_size: float = 16
    subtitle_size: Optional[float] = None
    footer_size: Optional[float] = None
    title_align: Literal["center", "right"] = "center"
    line_width: float = 0.2

    def __post_init__(self) -> None:
        if self.start_y < self.page.margin_top:
            raise ValueError(
                f"start_y ({self.start_y}) must not be above the top margin ({self.page.margin_top})"
            )
        if self.page.frame_width <= 0:
            raise ValueError("Margins exceed page width")


TEACHER_LAYOUT = TableLayout(
    page=PageSetup("A4", margin_left=15, margin_right=15),
    start_y=35,
    body_padding=CellPadding.symmetric(5, 6),
    header_padding=CellPadding.symmetric(6, 6),
    body_min_height=10,
    header_min_height=12,
    title_size=22,
    subtitle_size=16,
    footer_size=9,
)

CLASS_LAYOUT = TableLayout(
    page=PageSetup("A4", margin_left=10, margin_right=10),
    start_y=22,
    body_padding=CellPadding.symmetric(4, 5),
    header_padding=CellPadding.symmetric(5, 5),
    body_min_height=9,
    header_min_height=11,
    day_halign="center",
    day_width=30,
    title_size=30,
)

ALL_TEACHERS_LAYOUT = TableLayout(
    page=PageSetup("A4", margin_left=12, margin_right=12),
    start_y=30,
    body_padding=CellPadding.symmetric(4, 5),
    header_padding=CellPadding.symmetric(5, 5),
    body_min_height=9,
    header_min_height=11,
    title_size=16,
    subtitle_size=11,
    footer_size=8,
    title_align="right",
)

ALL_CLASSES_LAYOUT = TableLayout(
    page=PageSetup("A4", margin_left=12, margin_right=12),
    start_y=22,
    body_padding=CellPadding.symmetric(4, 5),
    header_padding=CellPadding.symmetric(5, 5),
    body_min_height=9,
    header_min_height=11,
    title_size=30,
)

# Titles sit on fixed baselines measured from the page top (mm)
TITLE_Y = 15.0
SUBTITLE_Y = 25.0
PAGE_SUBTITLE_Y = 23.0
CLASS_TITLE_Y = 20.0
# Footer baseline measured from the page bottom (mm)
FOOTER_Y = -10.0
# Horizontal inset of right-aligned titles and footers (mm)
TEXT_INSET = 15.0


@dataclass(frozen=True)
class MasterWidths:
    """
    Fixed column widths of the master grid (mm).

    Example:
        >>> MasterWidths().table_width(slot_columns=35)
        321.0
    """
    notes: float = 20.0
    slot: float = 7.0
    count: float = 8.0
    subject: float = 14.0
    name: float = 28.0
    sequence: float = 6.0

    def table_width(self, slot_columns: int) -> float:
        return (
            self.notes
            + self.slot * slot_columns
            + self.count
            + self.subject
            + self.name
            + self.sequence
        )


@dataclass(frozen=True)
class MasterLayout:
    """Geometry of the master grid document."""
    page: PageSetup = field(default_factory=lambda: PageSetup("A3", margin_top=8, margin_bottom=8))
    widths: MasterWidths = field(default_factory=MasterWidths)
    start_y: float = 18.0
    title_y: float = 12.0
    title_size: float = 18
    font_size: float = 6
    notes_font_size: float = 5
    body_padding: CellPadding = CellPadding(top=0.8, right=0.3, bottom=0.8, left=0.3)
    header_padding: CellPadding = CellPadding(top=1, right=0.3, bottom=1, left=0.3)
    body_min_height: float = 4.5
    header_min_height: float = 5.0
    line_width: float = 0.1


MASTER_LAYOUT = MasterLayout()
