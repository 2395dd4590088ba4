"""
Module: schedule

Purpose:
    Immutable schedule records supplied by the caller for one export call:
    the teachers and the occupied (day, period) slots binding a teacher to
    a class.

Key Classes:
    - Assignment: One occupied slot
    - Teacher: Teacher identity and display attributes
    - ClassRef: One class, identified by grade and section

Dependencies:
    - dataclasses (std)
    - .calendar.Day
    - .subjects.Subject

Used By:
    - exporter.layout: Grid construction and composition
    - core.utils.serialization: JSON input parsing

Invariants (assumed, not enforced here):
    - At most one Assignment per (teacher_id, day, period)
    - At most one Assignment per (grade, section, day, period)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .calendar import Day
from .subjects import Subject


@dataclass(frozen=True, slots=True)
class ClassRef:
    """
    A class of students (immutable).

    Example:
        >>> ClassRef(10, 2).label
        '10/2'
    """

    grade: int
    section: int

    def __post_init__(self) -> None:
        if self.grade <= 0:
            raise ValueError(f"grade must be positive: {self.grade}")
        if self.section <= 0:
            raise ValueError(f"section must be positive: {self.section}")

    @property
    def label(self) -> str:
        """Display label in grade/section form."""
        return f"{self.grade}/{self.section}"


@dataclass(frozen=True, slots=True)
class Teacher:
    """
    Teacher record (immutable).

    Attributes:
        id: Stable identifier, the only identity used for matching
        name: Display name
        subject: Subject taught
    """

    id: str
    name: str
    subject: Subject

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Teacher id must not be empty")
        if not isinstance(self.subject, Subject):
            raise ValueError(f"Teacher subject must be a Subject: {self.subject!r}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Teacher:
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            subject=Subject.parse(data["subject"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "subject": self.subject.value}


@dataclass(frozen=True, slots=True)
class Assignment:
    """
    One occupied timetable slot (immutable).

    Attributes:
        day: Working day
        period: Period number (1-based)
        teacher_id: Teacher occupying the slot
        grade: Grade of the class taught
        section: Section of the class taught

    Example:
        >>> a = Assignment(Day.SUNDAY, 3, "t1", 10, 2)
        >>> a.class_ref.label
        '10/2'
    """

    day: Day
    period: int
    teacher_id: str
    grade: int
    section: int

    def __post_init__(self) -> None:
        if not isinstance(self.day, Day):
            raise ValueError(f"Assignment day must be a Day: {self.day!r}")
        if self.period <= 0:
            raise ValueError(f"period must be positive: {self.period}")
        if not self.teacher_id:
            raise ValueError("Assignment teacher_id must not be empty")

    @property
    def class_ref(self) -> ClassRef:
        return ClassRef(self.grade, self.section)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Assignment:
        return cls(
            day=Day.parse(data["day"]),
            period=int(data["period"]),
            teacher_id=str(data["teacher_id"]),
            grade=int(data["grade"]),
            section=int(data["section"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day.value,
            "period": self.period,
            "teacher_id": self.teacher_id,
            "grade": self.grade,
            "section": self.section,
        }
