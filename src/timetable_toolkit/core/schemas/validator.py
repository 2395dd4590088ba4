"""
Schema Validation Utilities

Validates schedule JSON documents before they are turned into models.

- JSON Schema definition in `schedule.schema.json`
- `validate_schedule()` fails fast on the first violation
- Referential checks (assignment → teacher) that JSON Schema cannot express
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema


SCHEDULE_SCHEMA_VERSION = 1


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when schedule data fails validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_schedule(data: dict[str, Any], *, check_references: bool = True) -> None:
    """
    Validate a schedule document against the schema.

    Args:
        data: Parsed JSON document
        check_references: Also require every assignment's teacher_id
            to name a listed teacher

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Schedule document must be a JSON object")

    version = data.get("schema_version")
    if version != SCHEDULE_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported schedule schema version: {version} (expected {SCHEDULE_SCHEMA_VERSION})",
            path="schema_version",
        )

    schema = _load_schema("schedule")
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise ValidationError(
            f"Schema validation failed: {e.message}",
            path=".".join(str(p) for p in e.absolute_path),
            errors=[e.message],
        ) from e

    ids = [t["id"] for t in data["teachers"]]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise ValidationError(
            f"Duplicate teacher ids: {duplicates}",
            path="teachers",
            errors=[f"Duplicate id: {i}" for i in duplicates],
        )

    if check_references:
        known = set(ids)
        unknown = [
            f"assignments[{i}].teacher_id"
            for i, a in enumerate(data["assignments"])
            if a["teacher_id"] not in known
        ]
        if unknown:
            raise ValidationError(
                f"Assignments reference unknown teachers: {len(unknown)}",
                path=unknown[0],
                errors=unknown,
            )
