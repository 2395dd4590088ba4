"""
Schemas Package

JSON schema definitions and validation utilities.
"""

from .validator import (
    validate_schedule,
    ValidationError,
    SCHEDULE_SCHEMA_VERSION,
)

__all__ = [
    "validate_schedule",
    "ValidationError",
    "SCHEDULE_SCHEMA_VERSION",
]
