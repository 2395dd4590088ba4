"""
Utils Package

Serialization and utility functions.
"""

from .serialization import (
    ScheduleData,
    serialize_schedule,
    deserialize_schedule,
    load_schedule,
    save_schedule,
)

__all__ = [
    "ScheduleData",
    "serialize_schedule",
    "deserialize_schedule",
    "load_schedule",
    "save_schedule",
]
