"""
Module: exporter.layout.grid

Purpose:
    Turn the sparse assignment list into a dense day × period matrix of
    display strings for one teacher or one class.

Key Functions:
    - build_teacher_grid(): Cells read "grade/section"
    - build_class_grid(): Cells read "subject" or "subject\\n(teacher)"

Key Classes:
    - DisplayGrid: Dense matrix with its axis order

Algorithm:
    1. Index the entity's assignments by (day, period)
    2. For each day in row order, for each period in display order,
       format the assignment or emit the empty marker

Used By:
    - exporter.layout.composer: One grid per table block
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Optional, Tuple

from timetable_toolkit.common import labels
from timetable_toolkit.core.models import Assignment, ClassRef, Day, Subject, Teacher

from .axis import AxisSequencer
from .lookup import SlotIndex

logger = logging.getLogger(__name__)

CellFormatter = Callable[[Assignment], str]


@dataclass(frozen=True)
class DisplayGrid:
    """
    Dense display matrix for one entity (immutable).

    Attributes:
        days: Row order (one row per day)
        periods: Column order (one column per period, display order)
        cells: cells[row][column], formatted text or the empty marker
        empty: The empty marker used for free slots

    Example:
        >>> grid.cell(Day.SUNDAY, 3)
        '10/2'
        >>> grid.to_rows()[0][-1]
        'الأحد'
    """

    days: Tuple[Day, ...]
    periods: Tuple[int, ...]
    cells: Tuple[Tuple[str, ...], ...]
    empty: str = labels.EMPTY_CELL

    def cell(self, day: Day, period: int) -> str:
        return self.cells[self.days.index(day)][self.periods.index(period)]

    def is_filled(self, day: Day, period: int) -> bool:
        return self.cell(day, period) != self.empty

    @property
    def filled_count(self) -> int:
        """Number of cells holding an assignment."""
        return sum(1 for row in self.cells for value in row if value != self.empty)

    @property
    def empty_count(self) -> int:
        return len(self.days) * len(self.periods) - self.filled_count

    def to_rows(self, *, day_column: bool = True) -> Tuple[Tuple[str, ...], ...]:
        """
        Body rows for a table.

        Args:
            day_column: Append the day label as the last (rightmost) cell

        Returns:
            One tuple of cell strings per day
        """
        if not day_column:
            return self.cells
        return tuple(
            row + (day.label,)
            for day, row in zip(self.days, self.cells)
        )


def build_grid(
    index: SlotIndex,
    axes: AxisSequencer,
    formatter: CellFormatter,
    *,
    empty: str = labels.EMPTY_CELL,
) -> DisplayGrid:
    """
    Materialize a DisplayGrid from an entity's slot index.

    Args:
        index: Slots of one entity
        axes: Axis order to follow
        formatter: Turns an assignment into cell text
        empty: Marker for free slots

    Returns:
        DisplayGrid with len(axes.row_days) rows and len(axes.periods) columns
    """
    periods = axes.display_periods
    cells = []
    for day in axes.row_days:
        row = []
        for period in periods:
            slot = index.get(day, period)
            row.append(formatter(slot) if slot is not None else empty)
        cells.append(tuple(row))

    return DisplayGrid(
        days=axes.row_days,
        periods=periods,
        cells=tuple(cells),
        empty=empty,
    )


def format_teacher_cell(assignment: Assignment) -> str:
    """Teacher schedules show which class is taught."""
    return assignment.class_ref.label


def class_cell_formatter(
    teachers: Mapping[str, Teacher],
    show_teacher_names: bool,
) -> CellFormatter:
    """
    Build the cell formatter for class schedules.

    Unknown teacher ids fall back to the default subject and an
    "Unknown" name rather than failing the whole document.
    """
    fallback = Teacher(id="?", name=labels.UNKNOWN_TEACHER, subject=Subject.ARABIC)

    def _format(assignment: Assignment) -> str:
        teacher = teachers.get(assignment.teacher_id)
        if teacher is None:
            logger.warning(
                f"Assignment references unknown teacher {assignment.teacher_id!r}, "
                f"using fallback subject"
            )
            teacher = fallback
        if show_teacher_names:
            return f"{teacher.subject.label}\n({teacher.name})"
        return teacher.subject.label

    return _format


def build_teacher_grid(
    assignments: Iterable[Assignment],
    teacher_id: str,
    axes: Optional[AxisSequencer] = None,
    *,
    empty: str = labels.EMPTY_CELL,
) -> DisplayGrid:
    """
    Build the grid of one teacher's week.

    Example:
        >>> grid = build_teacher_grid([Assignment(Day.SUNDAY, 3, "t1", 10, 2)], "t1")
        >>> grid.cell(Day.SUNDAY, 3), grid.cell(Day.MONDAY, 1)
        ('10/2', '-')
    """
    index = SlotIndex.for_teacher(assignments, teacher_id)
    return build_grid(index, axes or AxisSequencer(), format_teacher_cell, empty=empty)


def build_class_grid(
    assignments: Iterable[Assignment],
    class_ref: ClassRef,
    teachers: Mapping[str, Teacher],
    axes: Optional[AxisSequencer] = None,
    *,
    show_teacher_names: bool = False,
    empty: str = labels.EMPTY_CELL,
) -> DisplayGrid:
    """Build the grid of one class's week."""
    index = SlotIndex.for_class(assignments, class_ref)
    formatter = class_cell_formatter(teachers, show_teacher_names)
    return build_grid(index, axes or AxisSequencer(), formatter, empty=empty)
