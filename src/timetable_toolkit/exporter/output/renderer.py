"""
Module: exporter.output.renderer

Purpose:
    Render a DocumentPlan to PDF using ReportLab platypus.
    Each TableBlock becomes one Table flowable positioned at its start
    offset, preceded by a page break when flagged. Body cells are wrapped
    to their column width as Paragraphs and rows grow to fit them. Titles
    and footers are drawn at fixed page coordinates once the block's page
    is known.

Key Functions:
    - render_to_pdf(): Main rendering function

Key Classes:
    - RenderReport: Page count of the written document

Dependencies:
    - reportlab: PDF generation
    - exporter.output.text: Right-to-left shaping
    - exporter.layout.models: DocumentPlan, TableBlock

Used By:
    - exporter.controller: Export entry points
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple, Union
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    BaseDocTemplate,
    Flowable,
    Frame,
    PageBreak,
    PageTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
)

from ..layout.models import (
    RGB,
    CellStyle,
    ColumnStyle,
    DocumentPlan,
    PageSetup,
    TableBlock,
    TextLine,
    expand_header_row,
)
from .text import shape_text, wrap_text

logger = logging.getLogger(__name__)

LEADING_RATIO = 1.2
# points kept free on each wrapped line so Paragraph never re-breaks it
WRAP_SLACK = 0.5
STRIPE_COLOR: RGB = (245, 245, 245)
LINE_COLOR: RGB = (0, 0, 0)
TITLE_COLOR: RGB = (0, 0, 0)

_ALIGN = {"left": "LEFT", "center": "CENTER", "right": "RIGHT"}
_VALIGN = {"top": "TOP", "middle": "MIDDLE", "bottom": "BOTTOM"}
_PARAGRAPH_ALIGN = {"left": TA_LEFT, "center": TA_CENTER, "right": TA_RIGHT}


@dataclass(frozen=True)
class RenderReport:
    """Outcome of one render call."""
    output_path: Path
    page_count: int


def _color(rgb: RGB) -> colors.Color:
    r, g, b = rgb
    return colors.Color(r / 255.0, g / 255.0, b / 255.0)


class _BlockMarker(Flowable):
    """Zero-size flowable marking the page a block starts on."""

    def __init__(self, block: TableBlock):
        super().__init__()
        self.block = block

    def wrap(self, availWidth, availHeight):
        return (0, 0)

    def draw(self) -> None:
        pass


class _TimetableDocTemplate(BaseDocTemplate):
    """Single-frame document that paints block titles and footers."""

    def __init__(self, filename: str, page: PageSetup):
        page_size = (page.width * mm, page.height * mm)
        super().__init__(
            filename,
            pagesize=page_size,
            leftMargin=page.margin_left * mm,
            rightMargin=page.margin_right * mm,
            topMargin=page.margin_top * mm,
            bottomMargin=page.margin_bottom * mm,
        )
        frame = Frame(
            self.leftMargin,
            self.bottomMargin,
            self.width,
            self.height,
            leftPadding=0,
            rightPadding=0,
            topPadding=0,
            bottomPadding=0,
            id="body",
        )
        self.addPageTemplates([PageTemplate(id="page", frames=[frame])])

    def afterFlowable(self, flowable) -> None:
        if isinstance(flowable, _BlockMarker):
            for line in flowable.block.titles + flowable.block.footers:
                _draw_text_line(self.canv, line, self.pagesize)


def _draw_text_line(c, line: TextLine, page_size: Tuple[float, float]) -> None:
    """
    Draw a title or footer at its fixed position.

    Positive y is measured from the page top, negative y from the bottom.
    """
    page_width, page_height = page_size
    y = page_height - line.y * mm if line.y >= 0 else -line.y * mm
    text = shape_text(line.text)

    c.saveState()
    c.setFont(line.font, line.font_size)
    c.setFillColor(_color(TITLE_COLOR))
    if line.align == "right":
        c.drawRightString(page_width - line.inset * mm, y, text)
    elif line.align == "left":
        c.drawString(line.inset * mm, y, text)
    else:
        c.drawCentredString(page_width / 2, y, text)
    c.restoreState()


def _column_widths(block: TableBlock, frame_width_mm: float) -> List[float]:
    """
    Column widths in points.

    Fixed widths come from the column styles; the remaining width of the
    table is shared equally by the other columns.
    """
    total = block.table_width if block.table_width is not None else frame_width_mm
    fixed = {
        i: style.width
        for i, style in block.column_styles.items()
        if style.width is not None
    }
    flexible = block.column_count - len(fixed)
    remaining = total - sum(fixed.values())
    if flexible and remaining <= 0:
        logger.warning(f"Table {block.key!r}: fixed columns leave no room for the others")
        remaining = 0.0
    share = remaining / flexible if flexible else 0.0
    return [fixed.get(i, share) * mm for i in range(block.column_count)]


def _row_height(text_heights: Sequence[float], style: CellStyle) -> float:
    """Row height in points: tallest cell text plus padding, at least the minimum."""
    content = max(text_heights, default=0.0) + (style.padding.top + style.padding.bottom) * mm
    return max(style.min_height * mm, content)


def _section_commands(style: CellStyle, start: Tuple[int, int], end: Tuple[int, int]) -> list:
    commands = [
        ("FONTNAME", start, end, style.font),
        ("FONTSIZE", start, end, style.font_size),
        ("LEADING", start, end, style.font_size * LEADING_RATIO),
        ("TEXTCOLOR", start, end, _color(style.text_color)),
        ("ALIGN", start, end, _ALIGN[style.halign]),
        ("VALIGN", start, end, _VALIGN[style.valign]),
        ("TOPPADDING", start, end, style.padding.top * mm),
        ("RIGHTPADDING", start, end, style.padding.right * mm),
        ("BOTTOMPADDING", start, end, style.padding.bottom * mm),
        ("LEFTPADDING", start, end, style.padding.left * mm),
    ]
    if style.fill_color is not None:
        commands.append(("BACKGROUND", start, end, _color(style.fill_color)))
    return commands


def _table_style(block: TableBlock, merge_headers: bool) -> TableStyle:
    header_count = len(block.header_rows)
    last_header = header_count - 1
    commands = _section_commands(block.header_style, (0, 0), (-1, last_header))

    if merge_headers:
        for row, cells in enumerate(block.header_rows):
            column = 0
            for cell in cells:
                if cell.span > 1:
                    commands.append(("SPAN", (column, row), (column + cell.span - 1, row)))
                column += cell.span

    if block.body:
        body_start = (0, header_count)
        commands.extend(_section_commands(block.body_style, body_start, (-1, -1)))
        if block.striped:
            commands.append(
                ("ROWBACKGROUNDS", body_start, (-1, -1), [colors.white, _color(STRIPE_COLOR)])
            )
        for index, override in sorted(block.column_styles.items()):
            start, end = (index, header_count), (index, -1)
            if override.font is not None:
                commands.append(("FONTNAME", start, end, override.font))
            if override.font_size is not None:
                commands.append(("FONTSIZE", start, end, override.font_size))
                commands.append(("LEADING", start, end, override.font_size * LEADING_RATIO))
            if override.text_color is not None:
                commands.append(("TEXTCOLOR", start, end, _color(override.text_color)))
            if override.halign is not None:
                commands.append(("ALIGN", start, end, _ALIGN[override.halign]))

    if block.line_width > 0:
        commands.append(("GRID", (0, 0), (-1, -1), block.line_width * mm, _color(LINE_COLOR)))
    return TableStyle(commands)


def _body_paragraph_styles(block: TableBlock) -> List[ParagraphStyle]:
    """One paragraph style per column: body style with column overrides applied."""
    base = block.body_style
    styles = []
    for i in range(block.column_count):
        override = block.column_styles.get(i, ColumnStyle())
        size = override.font_size if override.font_size is not None else base.font_size
        styles.append(ParagraphStyle(
            name=f"{block.key}-body-{i}",
            fontName=override.font or base.font,
            fontSize=size,
            leading=size * LEADING_RATIO,
            textColor=_color(override.text_color or base.text_color),
            alignment=_PARAGRAPH_ALIGN[override.halign or base.halign],
        ))
    return styles


def _body_cell(text: str, style: ParagraphStyle, width: float) -> Tuple[Union[str, Paragraph], int]:
    """Wrap one body cell to `width` points; returns the cell and its line count."""
    if not text:
        return "", 1
    lines = wrap_text(text, style.fontName, style.fontSize, width - WRAP_SLACK)
    markup = "<br/>".join(escape(shape_text(line)) for line in lines)
    return Paragraph(markup, style), len(lines)


def _build_table(block: TableBlock, frame_width_mm: float, merge_headers: bool) -> Table:
    """Convert one TableBlock to a styled platypus Table."""
    widths = _column_widths(block, frame_width_mm)
    header = [
        [shape_text(text) for text in expand_header_row(row, merge=merge_headers)]
        for row in block.header_rows
    ]
    header_leading = block.header_style.font_size * LEADING_RATIO
    heights = [
        _row_height([(text.count("\n") + 1) * header_leading for text in row], block.header_style)
        for row in header
    ]

    styles = _body_paragraph_styles(block)
    padding = block.body_style.padding
    text_widths = [w - (padding.left + padding.right) * mm for w in widths]
    body = []
    for row in block.body:
        cells, text_heights = [], []
        for text, style, width in zip(row, styles, text_widths):
            cell, line_count = _body_cell(text, style, width)
            cells.append(cell)
            text_heights.append(line_count * style.leading)
        body.append(cells)
        heights.append(_row_height(text_heights, block.body_style))

    table = Table(
        header + body,
        colWidths=widths,
        rowHeights=heights,
        repeatRows=len(header),
        hAlign="CENTER",
    )
    table.setStyle(_table_style(block, merge_headers))
    return table


def _story(plan: DocumentPlan, merge_headers: bool) -> list:
    story: list = []
    for block in plan.blocks:
        if block.page_break_before:
            story.append(PageBreak())
        story.append(_BlockMarker(block))
        offset = block.start_y - plan.page.margin_top
        if offset > 0:
            story.append(Spacer(1, offset * mm))
        story.append(_build_table(block, plan.page.frame_width, merge_headers))
    return story


def render_to_pdf(
    plan: DocumentPlan,
    output_path: Path,
    *,
    merge_headers: bool = True,
) -> RenderReport:
    """
    Render a document plan to a PDF file.

    The file is written next to its destination and moved into place
    only once complete, so a failed render never leaves a partial file.

    Args:
        plan: Document plan from the composer
        output_path: Path to write PDF
        merge_headers: Merge spanned header cells; when False the span
            label is repeated on every sub-column

    Returns:
        RenderReport with the number of pages written

    Raises:
        OSError: If the PDF cannot be written

    Example:
        >>> render_to_pdf(plan, Path("output/master.pdf")).page_count
        1
    """
    output_path = Path(output_path)
    if plan.is_empty:
        logger.warning("Empty plan, creating blank PDF")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    partial = output_path.with_name(output_path.name + ".part")

    doc = _TimetableDocTemplate(str(partial), plan.page)
    story = _story(plan, merge_headers) or [Spacer(1, 1)]
    try:
        doc.build(story)
        partial.replace(output_path)
    except Exception:
        partial.unlink(missing_ok=True)
        raise

    report = RenderReport(output_path=output_path, page_count=doc.page)
    logger.info(f"Rendered {plan.block_count} blocks on {report.page_count} pages to {output_path}")
    return report
