"""
Module: exporter.layout.lookup

Purpose:
    Find the assignment occupying a (day, period) slot, optionally for one
    teacher or one class. Absence is a normal result, never an error.

Key Functions:
    - find_slot(): Linear first-match lookup

Key Classes:
    - SlotIndex: (day, period) → Assignment map for one entity
    - DuplicateAssignmentError: Two assignments claim one entity slot

Used By:
    - exporter.layout.grid: Cell lookup during grid construction
    - exporter.layout.master: Teacher rows of the master grid
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from timetable_toolkit.core.models import Assignment, ClassRef, Day
from timetable_toolkit.core.schemas import ValidationError

logger = logging.getLogger(__name__)

SlotKey = Tuple[Day, int]


class DuplicateAssignmentError(ValidationError):
    """Raised when one teacher or class holds two assignments in one slot."""

    def __init__(self, entity: str, day: Day, period: int):
        super().__init__(
            f"Duplicate assignment for {entity} on {day.name} period {period}",
            path=f"{entity}/{day.name}/{period}",
        )
        self.entity = entity
        self.day = day
        self.period = period


def _entity_filter(
    teacher_id: Optional[str],
    class_ref: Optional[ClassRef],
) -> Tuple[Callable[[Assignment], bool], Optional[str]]:
    if teacher_id is not None and class_ref is not None:
        raise ValueError("Filter by teacher_id or class_ref, not both")
    if teacher_id is not None:
        return (lambda a: a.teacher_id == teacher_id), f"teacher {teacher_id}"
    if class_ref is not None:
        return (
            lambda a: a.grade == class_ref.grade and a.section == class_ref.section
        ), f"class {class_ref.label}"
    return (lambda a: True), None


def find_slot(
    assignments: Iterable[Assignment],
    day: Day,
    period: int,
    *,
    teacher_id: Optional[str] = None,
    class_ref: Optional[ClassRef] = None,
) -> Optional[Assignment]:
    """
    Find the assignment at (day, period), optionally for one entity.

    Without an entity filter the first match in input order wins (several
    teachers legitimately share a slot). With a filter, a second match is
    an input error.

    Args:
        assignments: Assignments in input order
        day: Target day
        period: Target period
        teacher_id: Only match this teacher
        class_ref: Only match this class

    Returns:
        Matching Assignment, or None if the slot is free

    Raises:
        DuplicateAssignmentError: If the filtered entity has two assignments
            in the slot
    """
    matches, entity = _entity_filter(teacher_id, class_ref)
    found: Optional[Assignment] = None
    for a in assignments:
        if a.day != day or a.period != period or not matches(a):
            continue
        if entity is None:
            return a
        if found is not None:
            raise DuplicateAssignmentError(entity, day, period)
        found = a
    return found


@dataclass(frozen=True)
class SlotIndex:
    """
    Occupied slots of one teacher or class, keyed by (day, period).

    Built once per entity so grid construction does not rescan the whole
    assignment list for every cell.

    Example:
        >>> index = SlotIndex.for_teacher(assignments, "t1")
        >>> index.get(Day.SUNDAY, 3)
        Assignment(day=<Day.SUNDAY: 'الأحد'>, period=3, ...)
    """

    entity: str
    slots: Dict[SlotKey, Assignment]

    @classmethod
    def build(
        cls,
        assignments: Iterable[Assignment],
        *,
        teacher_id: Optional[str] = None,
        class_ref: Optional[ClassRef] = None,
    ) -> SlotIndex:
        """
        Index the assignments of one entity.

        Raises:
            DuplicateAssignmentError: If the entity holds two assignments
                in one slot
            ValueError: If no entity filter (or both) is given
        """
        matches, entity = _entity_filter(teacher_id, class_ref)
        if entity is None:
            raise ValueError("SlotIndex needs a teacher_id or a class_ref")

        slots: Dict[SlotKey, Assignment] = {}
        for a in assignments:
            if not matches(a):
                continue
            key = (a.day, a.period)
            if key in slots:
                raise DuplicateAssignmentError(entity, a.day, a.period)
            slots[key] = a

        logger.debug(f"Indexed {len(slots)} slots for {entity}")
        return cls(entity=entity, slots=slots)

    @classmethod
    def for_teacher(cls, assignments: Iterable[Assignment], teacher_id: str) -> SlotIndex:
        return cls.build(assignments, teacher_id=teacher_id)

    @classmethod
    def for_class(cls, assignments: Iterable[Assignment], class_ref: ClassRef) -> SlotIndex:
        return cls.build(assignments, class_ref=class_ref)

    def get(self, day: Day, period: int) -> Optional[Assignment]:
        return self.slots.get((day, period))

    def __len__(self) -> int:
        return len(self.slots)
