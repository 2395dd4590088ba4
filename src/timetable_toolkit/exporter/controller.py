"""
Module: exporter.controller

Purpose:
    Orchestrate the export pipeline for each document type.
    Resolve options → Load fonts → Compose → Render

Key Functions:
    - export_teacher_schedule(): One teacher
    - export_class_schedule(): One class
    - export_all_teachers(): Every teacher, one page each
    - export_all_classes(): Every grade/section, one page each
    - export_master_schedule(): All teachers on one A3 grid

Key Classes:
    - ExportResult: Complete export result
    - ExportError: Exception for export failures

Dependencies:
    - exporter.options: Option resolution
    - exporter.layout: Composition
    - exporter.output: Fonts and PDF rendering

Used By:
    - cli: Command-line entry point
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from reportlab.platypus.doctemplate import LayoutError

from timetable_toolkit.core.models import Assignment, ClassRef, Teacher
from timetable_toolkit.core.schemas import ValidationError

from .config import ExportConfig
from .layout import (
    DocumentPlan,
    FontSet,
    compose_all_classes,
    compose_all_teachers,
    compose_class_schedule,
    compose_master_schedule,
    compose_teacher_schedule,
)
from .layout.composer import GradeSections
from .options import RenderOptions, resolve_options
from .output import FontLoadError, load_fonts, render_to_pdf

logger = logging.getLogger(__name__)

OptionsLike = Union[RenderOptions, Mapping[str, Any], None]
OverflowCallback = Callable[[int], None]


class ExportError(Exception):
    """Error during an export call."""
    pass


@dataclass(frozen=True)
class ExportResult:
    """
    Complete export result (immutable).

    Attributes:
        pdf_path: Path to the written PDF
        page_count: Number of pages written
        plan: Document plan that was rendered
        warnings: Recoverable conditions met during the export

    Example:
        >>> result = export_master_schedule(teachers, assignments)
        >>> if result.warnings:
        ...     print(result.warnings[0])
    """
    pdf_path: Path
    page_count: int
    plan: DocumentPlan
    warnings: Tuple[str, ...] = ()


def _prepare(
    options: OptionsLike,
    config: ExportConfig,
    *,
    with_title: bool = False,
) -> Tuple[RenderOptions, FontSet]:
    """Resolve options and load fonts before anything is composed."""
    resolved = resolve_options(options)
    try:
        fonts = load_fonts(resolved, config.font_dirs, with_title=with_title)
    except FontLoadError as e:
        raise ExportError(f"Failed to load fonts: {e}") from e
    return resolved, fonts


def _compose(build: Callable[[], DocumentPlan]) -> DocumentPlan:
    try:
        return build()
    except ValidationError as e:
        raise ExportError(f"Invalid schedule: {e}") from e


def _render(
    plan: DocumentPlan,
    config: ExportConfig,
    start_time: float,
    *,
    on_overflow: Optional[OverflowCallback] = None,
) -> ExportResult:
    """Render the plan and report overflow of single-page documents."""
    pdf_path = config.output_path(plan.file_name)
    try:
        report = render_to_pdf(plan, pdf_path, merge_headers=config.merge_headers)
    except (OSError, LayoutError) as e:
        raise ExportError(f"Failed to render {pdf_path}: {e}") from e

    warnings: List[str] = []
    if plan.single_page and report.page_count > 1:
        message = f"{plan.file_name} overflowed onto {report.page_count} pages"
        logger.warning(message)
        warnings.append(message)
        if on_overflow is not None:
            on_overflow(report.page_count)

    elapsed = time.perf_counter() - start_time
    logger.info(f"Exported {pdf_path} ({report.page_count} pages) in {elapsed:.2f}s")
    return ExportResult(
        pdf_path=pdf_path,
        page_count=report.page_count,
        plan=plan,
        warnings=tuple(warnings),
    )


def export_teacher_schedule(
    teacher: Teacher,
    assignments: Iterable[Assignment],
    options: OptionsLike = None,
    *,
    config: Optional[ExportConfig] = None,
) -> ExportResult:
    """
    Export one teacher's weekly schedule.

    Args:
        teacher: Teacher to print
        assignments: Assignments; other teachers' entries are ignored
        options: Option overrides or resolved options
        config: Output and axis configuration

    Returns:
        ExportResult with the written path

    Raises:
        ExportError: If fonts cannot be loaded, the input holds two
            assignments for one slot, or the PDF cannot be written

    Example:
        >>> result = export_teacher_schedule(teacher, assignments,
        ...     config=ExportConfig(output_dir=Path("out")))
        >>> result.pdf_path.name
        'جدول_أحمد.pdf'
    """
    config = config or ExportConfig()
    start_time = time.perf_counter()
    logger.info(f"Exporting schedule of teacher {teacher.id} ({teacher.name})")

    resolved, fonts = _prepare(options, config)
    plan = _compose(lambda: compose_teacher_schedule(
        teacher, assignments, resolved, fonts, axes=config.axes
    ))
    return _render(plan, config, start_time)


def export_class_schedule(
    grade: int,
    section: int,
    assignments: Iterable[Assignment],
    teachers: Iterable[Teacher],
    options: OptionsLike = None,
    *,
    show_teacher_names: bool = False,
    config: Optional[ExportConfig] = None,
) -> ExportResult:
    """
    Export one class's weekly schedule.

    Args:
        grade: Grade number
        section: Section number
        assignments: Assignments; other classes' entries are ignored
        teachers: Teachers referenced by the assignments
        options: Option overrides or resolved options
        show_teacher_names: Add the teacher name under each subject
        config: Output and axis configuration

    Returns:
        ExportResult with the written path

    Raises:
        ExportError: If any pipeline step fails
    """
    config = config or ExportConfig()
    start_time = time.perf_counter()
    class_ref = ClassRef(grade, section)
    logger.info(f"Exporting schedule of class {class_ref.label}")

    resolved, fonts = _prepare(options, config, with_title=True)
    plan = _compose(lambda: compose_class_schedule(
        class_ref,
        assignments,
        teachers,
        resolved,
        fonts,
        show_teacher_names=show_teacher_names,
        axes=config.axes,
    ))
    return _render(plan, config, start_time)


def export_all_teachers(
    teachers: Sequence[Teacher],
    assignments: Iterable[Assignment],
    options: OptionsLike = None,
    *,
    config: Optional[ExportConfig] = None,
) -> ExportResult:
    """
    Export every teacher's schedule into one document, a page each.

    Teachers are printed in the given order. An empty teacher list
    produces a blank document, not an error.
    """
    config = config or ExportConfig()
    start_time = time.perf_counter()
    logger.info(f"Exporting schedules of {len(teachers)} teachers")

    resolved, fonts = _prepare(options, config)
    plan = _compose(lambda: compose_all_teachers(
        teachers, assignments, resolved, fonts, axes=config.axes
    ))
    return _render(plan, config, start_time)


def export_all_classes(
    assignments: Iterable[Assignment],
    teachers: Iterable[Teacher],
    options: OptionsLike = None,
    *,
    show_teacher_names: bool = False,
    grade_sections: Optional[GradeSections] = None,
    config: Optional[ExportConfig] = None,
) -> ExportResult:
    """
    Export every class's schedule into one document, a page each.

    Args:
        assignments: All assignments
        teachers: Teachers referenced by the assignments
        options: Option overrides or resolved options
        show_teacher_names: Add the teacher name under each subject
        grade_sections: Sections per grade; grades without an entry use
            config.default_sections
        config: Output, axis and grade configuration

    Returns:
        ExportResult with the written path
    """
    config = config or ExportConfig()
    start_time = time.perf_counter()
    logger.info(f"Exporting class schedules for grades {list(config.grades)}")

    resolved, fonts = _prepare(options, config, with_title=True)
    plan = _compose(lambda: compose_all_classes(
        assignments,
        teachers,
        resolved,
        fonts,
        show_teacher_names=show_teacher_names,
        grade_sections=grade_sections,
        grades=config.grades,
        default_sections=config.default_sections,
        axes=config.axes,
    ))
    return _render(plan, config, start_time)


def export_master_schedule(
    teachers: Sequence[Teacher],
    assignments: Iterable[Assignment],
    options: OptionsLike = None,
    *,
    notes: Optional[Mapping[str, str]] = None,
    on_overflow: Optional[OverflowCallback] = None,
    config: Optional[ExportConfig] = None,
) -> ExportResult:
    """
    Export the master grid of all teachers on one A3 page.

    A grid that spills onto more pages is still written; the overflow is
    logged, listed in ExportResult.warnings and passed to on_overflow.

    Args:
        teachers: Teachers in row order
        assignments: All assignments
        options: Option overrides or resolved options
        notes: Free-text note per teacher id
        on_overflow: Called with the page count when it exceeds one
        config: Output and axis configuration

    Returns:
        ExportResult with the written path and any overflow warning
    """
    config = config or ExportConfig()
    start_time = time.perf_counter()
    logger.info(f"Exporting master schedule of {len(teachers)} teachers")

    resolved, fonts = _prepare(options, config)
    plan = _compose(lambda: compose_master_schedule(
        teachers, assignments, resolved, fonts, notes=notes, axes=config.axes
    ))
    return _render(plan, config, start_time, on_overflow=on_overflow)
