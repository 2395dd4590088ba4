"""
Timetable Toolkit Core Package

Shared data models and utilities. These models are the single source of
truth for every export flow.

1. **Immutable Data Models**
   - Frozen dataclasses and enums, never mutated by the exporter

2. **Closed Vocabularies**
   - Days, periods and subjects are enumerations validated on input

3. **Validated Input**
   - Schedule documents pass JSON Schema validation before models are built
"""

from .models import Assignment, ClassRef, Day, DAYS, PERIODS, Subject, Teacher

__all__ = [
    "Assignment",
    "ClassRef",
    "Day",
    "DAYS",
    "PERIODS",
    "Subject",
    "Teacher",
]
