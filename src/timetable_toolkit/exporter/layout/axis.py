"""
Module: exporter.layout.axis

Purpose:
    Display order of the timetable axes. Documents read right-to-left, so
    every horizontal axis is printed in reverse of canonical storage order.
    Header generation and body generation must both iterate the sequences
    produced here; iterating anything else misaligns labels and cells.

Key Classes:
    - AxisSequencer: Display order for days and periods

Used By:
    - exporter.layout.grid: Row/column order of a DisplayGrid
    - exporter.layout.composer: Header labels
    - exporter.layout.master: Flattened day × period columns
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence, Tuple, TypeVar

from timetable_toolkit.core.models import Day, DAYS, PERIODS

T = TypeVar("T")


def display_order(canonical: Sequence[T]) -> Tuple[T, ...]:
    """Reverse a canonical-order axis for right-to-left display."""
    return tuple(reversed(tuple(canonical)))


@dataclass(frozen=True)
class AxisSequencer:
    """
    Display order of the day and period axes (immutable).

    The canonical enumerations are injected; nothing here reads module
    state, so a caller can print a four-day week or eight periods.

    Attributes:
        days: Days in canonical order
        periods: Periods in canonical order

    Example:
        >>> axes = AxisSequencer()
        >>> axes.display_periods
        (7, 6, 5, 4, 3, 2, 1)
    """

    days: Tuple[Day, ...] = DAYS
    periods: Tuple[int, ...] = PERIODS

    def __post_init__(self) -> None:
        if not self.days:
            raise ValueError("At least one day is required")
        if not self.periods:
            raise ValueError("At least one period is required")
        # Accept lists from callers, store tuples
        object.__setattr__(self, "days", tuple(self.days))
        object.__setattr__(self, "periods", tuple(self.periods))

    @property
    def display_periods(self) -> Tuple[int, ...]:
        """Periods as printed left-to-right (last period leftmost)."""
        return display_order(self.periods)

    @property
    def display_days(self) -> Tuple[Day, ...]:
        """Days as printed left-to-right when days run horizontally."""
        return display_order(self.days)

    @property
    def row_days(self) -> Tuple[Day, ...]:
        """Days as printed top-to-bottom when days run vertically."""
        return self.days

    @property
    def slot_columns(self) -> Tuple[Tuple[Day, int], ...]:
        """Flattened (day, period) columns of the master grid, left-to-right."""
        return tuple(
            (day, period)
            for day in self.display_days
            for period in self.display_periods
        )

    def period_labels(self, fmt: Callable[[int], str] = str) -> Tuple[str, ...]:
        """Header labels for the display-order periods."""
        return tuple(fmt(p) for p in self.display_periods)
