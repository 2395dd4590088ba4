"""
Core Models Package

Immutable, validated records describing one school week: the calendar
axes, the subjects, the teachers and the occupied slots.

All models are frozen dataclasses or enums. An export call reads them and
never mutates them.
"""

from .calendar import Day, DAYS, PERIODS
from .subjects import Subject
from .schedule import Assignment, ClassRef, Teacher

__all__ = [
    "Day",
    "DAYS",
    "PERIODS",
    "Subject",
    "Assignment",
    "ClassRef",
    "Teacher",
]
