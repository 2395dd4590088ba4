"""
Module: exporter.layout.models

Purpose:
    Renderer-agnostic description of a timetable document.
    Immutable dataclasses for header cells, styles, table blocks and the
    document plan handed to the renderer.

Key Classes:
    - HeaderCell: Header text spanning one or more columns
    - CellStyle / ColumnStyle / CellPadding: Visual overrides
    - TextLine: Title, subtitle or footer text placed on the page
    - TableBlock: One table with its decorations and page-break flag
    - PageSetup: Paper size, orientation and margins
    - DocumentPlan: Complete document

Key Functions:
    - expand_header_row(): Per-column header texts for a spanned row

Units:
    Lengths are millimetres, font sizes are points, colours are RGB
    triples in 0..255.

Used By:
    - exporter.layout.composer / master: Build plans
    - exporter.output.renderer: Paint plans
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Sequence, Tuple

HAlign = Literal["left", "center", "right"]
VAlign = Literal["top", "middle", "bottom"]
RGB = Tuple[int, int, int]

WHITE: RGB = (255, 255, 255)


@dataclass(frozen=True)
class CellPadding:
    """Cell padding in mm."""
    top: float
    right: float
    bottom: float
    left: float

    @classmethod
    def symmetric(cls, vertical: float, horizontal: float) -> CellPadding:
        return cls(top=vertical, right=horizontal, bottom=vertical, left=horizontal)


@dataclass(frozen=True)
class CellStyle:
    """
    Style shared by every cell of a table section (header or body).

    Attributes:
        font: Registered font name
        font_size: Size in points
        text_color: RGB text colour
        fill_color: RGB background, None for transparent
        halign: Horizontal alignment
        valign: Vertical alignment
        padding: Cell padding
        min_height: Minimum row height in mm
    """
    font: str
    font_size: float
    text_color: RGB
    padding: CellPadding
    min_height: float
    fill_color: Optional[RGB] = None
    halign: HAlign = "center"
    valign: VAlign = "middle"


@dataclass(frozen=True)
class ColumnStyle:
    """
    Per-column override applied to body cells.

    Unset fields (None) inherit from the body CellStyle. A None width
    means the column shares the remaining table width.
    """
    width: Optional[float] = None
    halign: Optional[HAlign] = None
    font: Optional[str] = None
    font_size: Optional[float] = None
    text_color: Optional[RGB] = None


@dataclass(frozen=True)
class HeaderCell:
    """
    One header label covering `span` consecutive columns.

    Example:
        >>> HeaderCell("الأحد", span=7).span
        7
    """
    text: str
    span: int = 1

    def __post_init__(self) -> None:
        if self.span < 1:
            raise ValueError(f"span must be at least 1: {self.span}")


HeaderRow = Tuple[HeaderCell, ...]


def header_row(texts: Sequence[str]) -> HeaderRow:
    """Header row of single-column cells."""
    return tuple(HeaderCell(t) for t in texts)


def expand_header_row(row: Sequence[HeaderCell], *, merge: bool = True) -> Tuple[str, ...]:
    """
    Flatten a header row to one text per column.

    Args:
        row: Header cells with spans
        merge: True when the renderer merges spanned columns: the label
            sits on the first sub-column and the rest are empty. False
            repeats the label on every sub-column.

    Returns:
        Tuple with one entry per display column

    Example:
        >>> expand_header_row([HeaderCell("A", 2), HeaderCell("B")])
        ('A', '', 'B')
        >>> expand_header_row([HeaderCell("A", 2)], merge=False)
        ('A', 'A')
    """
    texts = []
    for cell in row:
        texts.append(cell.text)
        texts.extend(("" if merge else cell.text) for _ in range(cell.span - 1))
    return tuple(texts)


@dataclass(frozen=True)
class TextLine:
    """
    Free text drawn on the page around a table.

    Attributes:
        text: Text to draw
        font: Registered font name
        font_size: Size in points
        y: Baseline distance from the page top in mm; negative values
            measure from the page bottom
        align: Anchor: centred on the page, or against the left/right edge
        inset: Distance from the anchoring edge in mm (ignored for centre)
    """
    text: str
    font: str
    font_size: float
    y: float
    align: HAlign = "center"
    inset: float = 0.0


@dataclass(frozen=True)
class TableBlock:
    """
    One table with its decorations (immutable).

    Attributes:
        key: Entity identity, e.g. teacher id or "10/2"
        header_rows: Header rows, top to bottom
        body: Body rows; each row holds one string per column
        header_style: Style of header cells
        body_style: Style of body cells
        column_styles: Overrides keyed by column index
        start_y: Distance of the table top from the page top in mm
        titles: Text drawn above the table
        footers: Text drawn at the page bottom
        page_break_before: Start this block on a new page
        table_width: Fixed table width in mm, None to fill the frame
        line_width: Grid line width in mm, 0 for no grid
        striped: Alternate body row backgrounds

    Invariants:
        - Every header row spans exactly column_count columns
        - Every body row has exactly column_count cells
    """
    key: str
    header_rows: Tuple[HeaderRow, ...]
    body: Tuple[Tuple[str, ...], ...]
    header_style: CellStyle
    body_style: CellStyle
    column_styles: Dict[int, ColumnStyle] = field(default_factory=dict)
    start_y: float = 20.0
    titles: Tuple[TextLine, ...] = ()
    footers: Tuple[TextLine, ...] = ()
    page_break_before: bool = False
    table_width: Optional[float] = None
    line_width: float = 0.0
    striped: bool = True

    def __post_init__(self) -> None:
        """Validate column counts on construction."""
        if not self.header_rows:
            raise ValueError(f"Table {self.key!r} needs at least one header row")
        columns = self.column_count
        for i, row in enumerate(self.header_rows):
            spanned = sum(c.span for c in row)
            if spanned != columns:
                raise ValueError(
                    f"Header row {i} of {self.key!r} spans {spanned} columns, expected {columns}"
                )
        for i, row in enumerate(self.body):
            if len(row) != columns:
                raise ValueError(
                    f"Body row {i} of {self.key!r} has {len(row)} cells, expected {columns}"
                )
        for index in self.column_styles:
            if not 0 <= index < columns:
                raise ValueError(f"Column style index out of range: {index}")

    @property
    def column_count(self) -> int:
        return sum(c.span for c in self.header_rows[-1])

    @property
    def header_texts(self) -> Tuple[Tuple[str, ...], ...]:
        """Header rows flattened with merged spans."""
        return tuple(expand_header_row(row) for row in self.header_rows)


@dataclass(frozen=True)
class PageSetup:
    """
    Paper and margins (mm).

    Example:
        >>> PageSetup("A3").width
        420.0
    """
    size: Literal["A4", "A3"] = "A4"
    landscape: bool = True
    margin_top: float = 8.0
    margin_bottom: float = 8.0
    margin_left: float = 15.0
    margin_right: float = 15.0

    @property
    def width(self) -> float:
        short, long = _PAPER_MM[self.size]
        return long if self.landscape else short

    @property
    def height(self) -> float:
        short, long = _PAPER_MM[self.size]
        return short if self.landscape else long

    @property
    def frame_width(self) -> float:
        """Width available between left and right margins."""
        return self.width - self.margin_left - self.margin_right


_PAPER_MM = {
    "A4": (210.0, 297.0),
    "A3": (297.0, 420.0),
}


@dataclass(frozen=True)
class DocumentPlan:
    """
    Complete document handed to the renderer.

    Attributes:
        file_name: Output file name
        page: Paper and margins
        blocks: Table blocks in print order
        single_page: The document must fit one page; overflow is reported
    """
    file_name: str
    page: PageSetup
    blocks: Tuple[TableBlock, ...]
    single_page: bool = False

    @property
    def block_count(self) -> int:
        return len(self.blocks)

    @property
    def is_empty(self) -> bool:
        return not self.blocks
