"""
Serialization Utilities

to/from JSON utilities for schedule documents.

- `deserialize_schedule()` validates first, then builds models
- `serialize_schedule()` writes the same shape back
- Unknown subjects and day labels become ValidationError, never raw
  ValueError, so callers handle one error type for bad input
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..models.schedule import Assignment, Teacher
from ..schemas.validator import SCHEDULE_SCHEMA_VERSION, ValidationError, validate_schedule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduleData:
    """
    Everything one export call may need, as read from a schedule document.

    Attributes:
        teachers: Teachers in document order
        assignments: Occupied slots in document order
        notes: Free-text note per teacher id (master document)
        grade_sections: Section list per grade, keyed by grade string
    """
    teachers: tuple[Teacher, ...]
    assignments: tuple[Assignment, ...]
    notes: dict[str, str] = field(default_factory=dict)
    grade_sections: dict[str, list[int]] = field(default_factory=dict)

    def teacher(self, teacher_id: str) -> Teacher:
        """Look up a teacher by id."""
        for teacher in self.teachers:
            if teacher.id == teacher_id:
                return teacher
        raise KeyError(teacher_id)


def deserialize_schedule(
    data: dict[str, Any],
    *,
    check_references: bool = True,
) -> ScheduleData:
    """
    Build ScheduleData from a parsed JSON document.

    Args:
        data: Dictionary from JSON
        check_references: Reject assignments naming unknown teachers

    Returns:
        ScheduleData instance

    Raises:
        ValidationError: If data is invalid
    """
    validate_schedule(data, check_references=check_references)

    teachers = []
    for i, raw in enumerate(data["teachers"]):
        try:
            teachers.append(Teacher.from_dict(raw))
        except ValueError as e:
            raise ValidationError(str(e), path=f"teachers[{i}]") from e

    assignments = []
    for i, raw in enumerate(data["assignments"]):
        try:
            assignments.append(Assignment.from_dict(raw))
        except ValueError as e:
            raise ValidationError(str(e), path=f"assignments[{i}]") from e

    return ScheduleData(
        teachers=tuple(teachers),
        assignments=tuple(assignments),
        notes=dict(data.get("notes", {})),
        grade_sections={str(k): list(v) for k, v in data.get("grade_sections", {}).items()},
    )


def serialize_schedule(schedule: ScheduleData) -> dict[str, Any]:
    """Serialize ScheduleData to a dictionary that passes validation."""
    return {
        "schema_version": SCHEDULE_SCHEMA_VERSION,
        "teachers": [t.to_dict() for t in schedule.teachers],
        "assignments": [a.to_dict() for a in schedule.assignments],
        "notes": dict(schedule.notes),
        "grade_sections": {k: list(v) for k, v in schedule.grade_sections.items()},
    }


def load_schedule(path: Path, *, check_references: bool = True) -> ScheduleData:
    """
    Load a schedule document from a JSON file.

    Raises:
        ValidationError: If the file is not valid JSON or fails validation
        FileNotFoundError: If the file does not exist
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValidationError(f"Schedule file is not valid JSON: {e}", path=str(path)) from e

    schedule = deserialize_schedule(data, check_references=check_references)
    logger.info(
        f"Loaded {len(schedule.teachers)} teachers and "
        f"{len(schedule.assignments)} assignments from {path}"
    )
    return schedule


def save_schedule(schedule: ScheduleData, path: Path) -> None:
    """Write a schedule document as UTF-8 JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(serialize_schedule(schedule), ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
