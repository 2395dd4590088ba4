"""
Module: calendar

Purpose:
    Fixed weekly calendar of the school: the five working days and the
    seven lesson periods, in canonical storage order.

Key Classes:
    - Day: Working day enum (value is the Arabic display label)

Key Constants:
    - DAYS: Days in canonical order (Sunday first)
    - PERIODS: Period numbers in canonical order (1..7)

Used By:
    - core.models.schedule.Assignment
    - exporter.config.ExportConfig: Default axis enumerations
    - exporter.layout.axis.AxisSequencer
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class Day(str, Enum):
    """Working day of the school week."""
    SUNDAY = "الأحد"
    MONDAY = "الاثنين"
    TUESDAY = "الثلاثاء"
    WEDNESDAY = "الأربعاء"
    THURSDAY = "الخميس"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Display label used in table headers and day columns."""
        return self.value

    @classmethod
    def parse(cls, value: str) -> Day:
        """
        Parse a day from its Arabic label or English member name.

        Args:
            value: "الأحد", "SUNDAY" or "sunday"

        Returns:
            Matching Day

        Raises:
            ValueError: If the value names no working day
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for day in cls:
            if text == day.value or text.upper() == day.name:
                return day
        raise ValueError(f"Unknown day: {value!r}")


DAYS: Tuple[Day, ...] = tuple(Day)

PERIODS: Tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7)
