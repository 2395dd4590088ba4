"""
Module: exporter.layout.composer

Purpose:
    Compose the single-entity and paginated timetable documents.
    Each entity becomes one TableBlock; multi-entity documents start every
    block after the first on a new page.

Key Functions:
    - compose_teacher_schedule(): One teacher
    - compose_class_schedule(): One class
    - compose_all_teachers(): One page per teacher
    - compose_all_classes(): One page per grade/section
    - class_refs(): Grades × sections enumeration

Dependencies:
    - exporter.layout.grid: DisplayGrid construction
    - exporter.layout.config: Document geometry
    - exporter.options.RenderOptions

Used By:
    - exporter.controller: Export entry points
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from timetable_toolkit.common import labels
from timetable_toolkit.core.models import Assignment, ClassRef, Teacher

from ..options import RenderOptions
from .axis import AxisSequencer
from .config import (
    ALL_CLASSES_LAYOUT,
    ALL_TEACHERS_LAYOUT,
    CLASS_LAYOUT,
    CLASS_TITLE_Y,
    FOOTER_Y,
    PAGE_SUBTITLE_Y,
    SUBTITLE_Y,
    TEACHER_LAYOUT,
    TEXT_INSET,
    TITLE_Y,
    FontSet,
    TableLayout,
)
from .grid import DisplayGrid, build_class_grid, build_teacher_grid
from .models import (
    WHITE,
    CellStyle,
    ColumnStyle,
    DocumentPlan,
    HeaderRow,
    TableBlock,
    TextLine,
    header_row,
)

logger = logging.getLogger(__name__)

DEFAULT_GRADES: Tuple[int, ...] = (10, 11, 12)
DEFAULT_SECTIONS: Tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7)

GradeSections = Mapping[Union[str, int], Sequence[int]]


def class_refs(
    grade_sections: Optional[GradeSections] = None,
    *,
    grades: Sequence[int] = DEFAULT_GRADES,
    default_sections: Sequence[int] = DEFAULT_SECTIONS,
) -> List[ClassRef]:
    """
    Enumerate the classes of the all-classes document.

    Args:
        grade_sections: Section list per grade; keys may be "10" or 10.
            A grade without an entry gets default_sections.
        grades: Grades in print order
        default_sections: Sections used when a grade has no entry

    Returns:
        ClassRefs in print order (grade-major)

    Example:
        >>> len(class_refs({"10": [1]}))
        15
    """
    grade_sections = grade_sections or {}
    refs = []
    for grade in grades:
        sections = grade_sections.get(str(grade))
        if sections is None:
            sections = grade_sections.get(grade)
        if sections is None:
            sections = default_sections
        refs.extend(ClassRef(grade, section) for section in sections)
    return refs


# ─────────────────────────────────────────────────────────────────────────────
# Shared table pieces
# ─────────────────────────────────────────────────────────────────────────────

def schedule_header(axes: AxisSequencer) -> HeaderRow:
    """Period labels in display order followed by the day column label."""
    return header_row(axes.period_labels(labels.period_label) + (labels.DAY_COLUMN,))


def _header_style(options: RenderOptions, fonts: FontSet, layout: TableLayout) -> CellStyle:
    return CellStyle(
        font=fonts.header,
        font_size=options.header_font_size,
        text_color=WHITE,
        fill_color=options.theme_color,
        padding=layout.header_padding,
        min_height=layout.header_min_height,
    )


def _body_style(options: RenderOptions, fonts: FontSet, layout: TableLayout) -> CellStyle:
    return CellStyle(
        font=fonts.content,
        font_size=options.content_font_size,
        text_color=options.content_text_color,
        padding=layout.body_padding,
        min_height=layout.body_min_height,
    )


def _day_column(options: RenderOptions, fonts: FontSet, layout: TableLayout) -> ColumnStyle:
    return ColumnStyle(
        width=layout.day_width,
        halign=layout.day_halign,
        font=fonts.day,
        font_size=options.day_font_size,
        text_color=options.day_text_color,
    )


def _grid_block(
    key: str,
    grid: DisplayGrid,
    axes: AxisSequencer,
    options: RenderOptions,
    fonts: FontSet,
    layout: TableLayout,
    *,
    titles: Tuple[TextLine, ...],
    footers: Tuple[TextLine, ...] = (),
    page_break_before: bool = False,
) -> TableBlock:
    day_index = len(grid.periods)
    return TableBlock(
        key=key,
        header_rows=(schedule_header(axes),),
        body=grid.to_rows(day_column=True),
        header_style=_header_style(options, fonts, layout),
        body_style=_body_style(options, fonts, layout),
        column_styles={day_index: _day_column(options, fonts, layout)},
        start_y=layout.start_y,
        titles=titles,
        footers=footers,
        page_break_before=page_break_before,
        line_width=layout.line_width,
    )


def _title(text: str, font: str, size: float, y: float, layout: TableLayout) -> TextLine:
    if layout.title_align == "right":
        return TextLine(text, font, size, y, align="right", inset=TEXT_INSET)
    return TextLine(text, font, size, y)


# ─────────────────────────────────────────────────────────────────────────────
# Teacher documents
# ─────────────────────────────────────────────────────────────────────────────

def _teacher_block(
    teacher: Teacher,
    assignments: Sequence[Assignment],
    axes: AxisSequencer,
    options: RenderOptions,
    fonts: FontSet,
    layout: TableLayout,
    *,
    page_title: str,
    page_break_before: bool,
) -> TableBlock:
    grid = build_teacher_grid(assignments, teacher.id, axes)
    lesson_count = sum(1 for a in assignments if a.teacher_id == teacher.id)

    titles = [_title(page_title, fonts.header, layout.title_size, TITLE_Y, layout)]
    if layout.subtitle_size is not None:
        y = SUBTITLE_Y if layout.title_align == "center" else PAGE_SUBTITLE_Y
        titles.append(
            _title(labels.subject_line(teacher.subject.label), fonts.header, layout.subtitle_size, y, layout)
        )

    footers: Tuple[TextLine, ...] = ()
    if layout.footer_size is not None:
        footers = (
            TextLine(
                labels.lesson_count_line(lesson_count),
                fonts.content,
                layout.footer_size,
                FOOTER_Y,
                align="right",
                inset=TEXT_INSET,
            ),
        )

    return _grid_block(
        teacher.id,
        grid,
        axes,
        options,
        fonts,
        layout,
        titles=tuple(titles),
        footers=footers,
        page_break_before=page_break_before,
    )


def compose_teacher_schedule(
    teacher: Teacher,
    assignments: Iterable[Assignment],
    options: RenderOptions,
    fonts: FontSet,
    *,
    axes: Optional[AxisSequencer] = None,
    layout: TableLayout = TEACHER_LAYOUT,
) -> DocumentPlan:
    """
    Compose one teacher's weekly schedule.

    Args:
        teacher: Teacher to print
        assignments: Assignments (all teachers or just this one)
        options: Resolved render options
        fonts: Loaded fonts
        axes: Axis order, default week
        layout: Document geometry

    Returns:
        Single-block DocumentPlan

    Example:
        >>> plan = compose_teacher_schedule(teacher, assignments, options, fonts)
        >>> plan.blocks[0].header_texts[0][0]
        'الحصة 7'
    """
    axes = axes or AxisSequencer()
    block = _teacher_block(
        teacher,
        tuple(assignments),
        axes,
        options,
        fonts,
        layout,
        page_title=labels.teacher_title(teacher.name),
        page_break_before=False,
    )
    return DocumentPlan(
        file_name=labels.teacher_file_name(teacher.name),
        page=layout.page,
        blocks=(block,),
    )


def compose_all_teachers(
    teachers: Sequence[Teacher],
    assignments: Iterable[Assignment],
    options: RenderOptions,
    fonts: FontSet,
    *,
    axes: Optional[AxisSequencer] = None,
    layout: TableLayout = ALL_TEACHERS_LAYOUT,
) -> DocumentPlan:
    """
    Compose every teacher's schedule, one page per teacher.

    Teachers are printed in caller order. A teacher without assignments
    still gets a fully dashed page.
    """
    axes = axes or AxisSequencer()
    assignments = tuple(assignments)
    blocks = tuple(
        _teacher_block(
            teacher,
            assignments,
            axes,
            options,
            fonts,
            layout,
            page_title=labels.teacher_page_title(teacher.name),
            page_break_before=i > 0,
        )
        for i, teacher in enumerate(teachers)
    )
    logger.info(f"Composed {len(blocks)} teacher pages")
    return DocumentPlan(
        file_name=labels.ALL_TEACHERS_FILE_NAME,
        page=layout.page,
        blocks=blocks,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Class documents
# ─────────────────────────────────────────────────────────────────────────────

def _class_block(
    class_ref: ClassRef,
    assignments: Sequence[Assignment],
    teachers: Mapping[str, Teacher],
    axes: AxisSequencer,
    options: RenderOptions,
    fonts: FontSet,
    layout: TableLayout,
    *,
    show_teacher_names: bool,
    page_break_before: bool,
) -> TableBlock:
    grid = build_class_grid(
        assignments,
        class_ref,
        teachers,
        axes,
        show_teacher_names=show_teacher_names,
    )
    title = TextLine(class_ref.label, fonts.class_title, layout.title_size, CLASS_TITLE_Y)
    return _grid_block(
        class_ref.label,
        grid,
        axes,
        options,
        fonts,
        layout,
        titles=(title,),
        page_break_before=page_break_before,
    )


def _teacher_map(teachers: Iterable[Teacher]) -> dict[str, Teacher]:
    return {t.id: t for t in teachers}


def compose_class_schedule(
    class_ref: ClassRef,
    assignments: Iterable[Assignment],
    teachers: Iterable[Teacher],
    options: RenderOptions,
    fonts: FontSet,
    *,
    show_teacher_names: bool = False,
    axes: Optional[AxisSequencer] = None,
    layout: TableLayout = CLASS_LAYOUT,
) -> DocumentPlan:
    """
    Compose one class's weekly schedule.

    Args:
        class_ref: Class to print
        assignments: Assignments of all classes or just this one
        teachers: Teachers referenced by the assignments
        options: Resolved render options
        fonts: Loaded fonts
        show_teacher_names: Add "(teacher)" under each subject

    Returns:
        Single-block DocumentPlan
    """
    axes = axes or AxisSequencer()
    block = _class_block(
        class_ref,
        tuple(assignments),
        _teacher_map(teachers),
        axes,
        options,
        fonts,
        layout,
        show_teacher_names=show_teacher_names,
        page_break_before=False,
    )
    return DocumentPlan(
        file_name=labels.class_file_name(class_ref.grade, class_ref.section),
        page=layout.page,
        blocks=(block,),
    )


def compose_all_classes(
    assignments: Iterable[Assignment],
    teachers: Iterable[Teacher],
    options: RenderOptions,
    fonts: FontSet,
    *,
    show_teacher_names: bool = False,
    grade_sections: Optional[GradeSections] = None,
    grades: Sequence[int] = DEFAULT_GRADES,
    default_sections: Sequence[int] = DEFAULT_SECTIONS,
    axes: Optional[AxisSequencer] = None,
    layout: TableLayout = ALL_CLASSES_LAYOUT,
) -> DocumentPlan:
    """
    Compose every class's schedule, one page per grade/section.

    Without grade_sections this prints grades 10-12 × sections 1-7,
    i.e. 21 pages.
    """
    axes = axes or AxisSequencer()
    assignments = tuple(assignments)
    teacher_map = _teacher_map(teachers)
    refs = class_refs(grade_sections, grades=grades, default_sections=default_sections)

    blocks = tuple(
        _class_block(
            ref,
            assignments,
            teacher_map,
            axes,
            options,
            fonts,
            layout,
            show_teacher_names=show_teacher_names,
            page_break_before=i > 0,
        )
        for i, ref in enumerate(refs)
    )
    logger.info(f"Composed {len(blocks)} class pages")
    return DocumentPlan(
        file_name=labels.ALL_CLASSES_FILE_NAME,
        page=layout.page,
        blocks=blocks,
    )
