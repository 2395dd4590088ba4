"""
Module: exporter.layout.master

Purpose:
    Compose the master grid: every teacher is one row and the columns are
    the flattened day × period cross-product, bracketed by a notes column
    on the left and the aggregate columns (lesson count, subject, name,
    sequence number) on the right.

Key Functions:
    - compose_master_schedule(): Build the single-page master document
    - master_columns(): Column count for D days and P periods

Layout (left to right):
    notes | Thu p7..p1 | ... | Sun p7..p1 | count | subject | name | #

    Two header rows: the upper row carries one day label spanning that
    day's period columns, the lower row carries the period numbers.

Used By:
    - exporter.controller.export_master_schedule
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Mapping, Optional, Sequence

from timetable_toolkit.common import labels
from timetable_toolkit.core.models import Assignment, Teacher

from ..options import RenderOptions
from .axis import AxisSequencer
from .config import MASTER_LAYOUT, FontSet, MasterLayout
from .lookup import SlotIndex
from .models import (
    WHITE,
    CellStyle,
    ColumnStyle,
    DocumentPlan,
    HeaderCell,
    TableBlock,
    TextLine,
    header_row,
)

logger = logging.getLogger(__name__)

# notes on the left; count, subject, name, sequence on the right
LEADING_COLUMNS = 1
TRAILING_COLUMNS = 4


def master_columns(day_count: int, period_count: int) -> int:
    """
    Total column count of the master grid.

    Example:
        >>> master_columns(5, 7)
        40
    """
    return LEADING_COLUMNS + day_count * period_count + TRAILING_COLUMNS


def _header_rows(axes: AxisSequencer):
    period_count = len(axes.periods)
    day_row = (
        (HeaderCell(""),)
        + tuple(HeaderCell(day.label, span=period_count) for day in axes.display_days)
        + tuple(HeaderCell("") for _ in range(TRAILING_COLUMNS))
    )
    period_row = header_row(
        (labels.NOTES_COLUMN,)
        + tuple(str(period) for _, period in axes.slot_columns)
        + (
            labels.LESSON_COUNT_COLUMN,
            labels.SUBJECT_COLUMN,
            labels.TEACHER_NAME_COLUMN,
            labels.SEQUENCE_COLUMN,
        )
    )
    return (day_row, period_row)


def _teacher_row(
    sequence: int,
    teacher: Teacher,
    assignments: Sequence[Assignment],
    axes: AxisSequencer,
    note: str,
) -> tuple[str, ...]:
    index = SlotIndex.for_teacher(assignments, teacher.id)
    cells = []
    for day, period in axes.slot_columns:
        slot = index.get(day, period)
        cells.append(slot.class_ref.label if slot is not None else "")
    return (
        (note,)
        + tuple(cells)
        + (str(len(index)), teacher.subject.label, teacher.name, str(sequence))
    )


def _column_styles(
    axes: AxisSequencer,
    fonts: FontSet,
    layout: MasterLayout,
) -> dict[int, ColumnStyle]:
    widths = layout.widths
    slot_count = len(axes.slot_columns)
    styles = {
        0: ColumnStyle(
            width=widths.notes,
            halign="right",
            font=fonts.content,
            font_size=layout.notes_font_size,
        ),
    }
    for i in range(1, slot_count + 1):
        styles[i] = ColumnStyle(width=widths.slot, halign="center", font_size=layout.font_size)

    first = slot_count + 1
    styles[first] = ColumnStyle(width=widths.count, halign="center")
    styles[first + 1] = ColumnStyle(width=widths.subject, halign="center", font=fonts.content)
    styles[first + 2] = ColumnStyle(width=widths.name, halign="right", font=fonts.content)
    styles[first + 3] = ColumnStyle(width=widths.sequence, halign="center")
    return styles


def compose_master_schedule(
    teachers: Sequence[Teacher],
    assignments: Iterable[Assignment],
    options: RenderOptions,
    fonts: FontSet,
    *,
    notes: Optional[Mapping[str, str]] = None,
    axes: Optional[AxisSequencer] = None,
    layout: MasterLayout = MASTER_LAYOUT,
) -> DocumentPlan:
    """
    Compose the master grid of all teachers.

    The table width is the sum of the fixed column widths and the page
    margins are derived to centre it. The plan is flagged single_page;
    the renderer reports if it spills onto a second page.

    Args:
        teachers: Teachers in print order (row number = position + 1)
        assignments: All assignments
        options: Resolved render options
        fonts: Loaded fonts
        notes: Free-text note per teacher id
        axes: Axis order, default week
        layout: Document geometry

    Returns:
        Single-block DocumentPlan with two header rows

    Example:
        >>> plan = compose_master_schedule(teachers, assignments, options, fonts)
        >>> plan.blocks[0].column_count
        40
    """
    axes = axes or AxisSequencer()
    assignments = tuple(assignments)
    notes = notes or {}

    body = tuple(
        _teacher_row(i + 1, teacher, assignments, axes, notes.get(teacher.id, ""))
        for i, teacher in enumerate(teachers)
    )

    table_width = layout.widths.table_width(len(axes.slot_columns))
    margin = (layout.page.width - table_width) / 2
    if margin < 0:
        logger.warning(
            f"Master table ({table_width:.0f}mm) is wider than the page ({layout.page.width:.0f}mm)"
        )
        margin = 0.0
    page = replace(layout.page, margin_left=margin, margin_right=margin)

    block = TableBlock(
        key="master",
        header_rows=_header_rows(axes),
        body=body,
        header_style=CellStyle(
            font=fonts.header,
            font_size=layout.font_size,
            text_color=WHITE,
            fill_color=options.theme_color,
            padding=layout.header_padding,
            min_height=layout.header_min_height,
        ),
        body_style=CellStyle(
            font=fonts.content,
            font_size=layout.font_size,
            text_color=options.content_text_color,
            padding=layout.body_padding,
            min_height=layout.body_min_height,
        ),
        column_styles=_column_styles(axes, fonts, layout),
        start_y=layout.start_y,
        titles=(TextLine(labels.MASTER_TITLE, fonts.header, layout.title_size, layout.title_y),),
        table_width=table_width,
        line_width=layout.line_width,
        striped=False,
    )

    logger.info(
        f"Composed master grid: {len(body)} teachers x {block.column_count} columns, "
        f"{table_width:.0f}mm wide"
    )
    return DocumentPlan(
        file_name=labels.MASTER_FILE_NAME,
        page=page,
        blocks=(block,),
        single_page=True,
    )
