"""Calendar policies mapping sequence positions to dates.

A dense series stores its values in an array; the policy says which
calendar date each array slot stands for.
"""

from __future__ import annotations

from datetime import date, timedelta
from enum import StrEnum

import numpy as np


def _day(value: date) -> np.datetime64:
    return np.datetime64(value, "D")


def is_weekend(value: date) -> bool:
    """True for Saturdays and Sundays."""
    return value.weekday() >= 5


class DateCalculation(StrEnum):
    """Position arithmetic used by dense series."""

    INCLUDE_WEEKENDS = "include_weekends"
    """Position i is ``start + i`` days; every calendar day has a slot."""

    SKIP_WEEKENDS = "skip_weekends"
    """Position i is ``start`` plus i weekdays; weekends have no slot."""

    def is_valid_date(self, value: date) -> bool:
        """Whether ``value`` can occupy a position under this policy."""
        if self is DateCalculation.SKIP_WEEKENDS:
            return not is_weekend(value)
        return True

    def get_date_from_start(self, start: date, position: int) -> date:
        """Date held by ``position`` in a run beginning at ``start``.

        ``start`` must be a valid date for the policy.
        """
        if self is DateCalculation.SKIP_WEEKENDS:
            return np.busday_offset(_day(start), position, roll="forward").item()
        return start + timedelta(days=position)

    def calculate_position(self, start: date, value: date) -> int:
        """Number of positions in ``[start, value)``.

        Negative when ``value`` precedes ``start``. For a weekend date under
        ``SKIP_WEEKENDS`` this is the position of the following Monday.
        """
        if self is DateCalculation.SKIP_WEEKENDS:
            return int(np.busday_count(_day(start), _day(value)))
        return (value - start).days

    def calculate_positions(self, start: date, values: list[date]) -> np.ndarray:
        """Vectorised ``calculate_position`` over many dates."""
        days = np.array(values, dtype="datetime64[D]")
        if self is DateCalculation.SKIP_WEEKENDS:
            return np.busday_count(_day(start), days).astype(np.int64)
        return (days - _day(start)).astype(np.int64)

    def positions_between(self, start: date, end: date) -> int:
        """Inclusive count of positions from ``start`` to a valid ``end``."""
        return self.calculate_position(start, end) + 1

    def date_range(self, start: date, count: int) -> list[date]:
        """The first ``count`` dates of a run beginning at ``start``."""
        if count <= 0:
            return []
        if self is DateCalculation.SKIP_WEEKENDS:
            days = np.busday_offset(_day(start), np.arange(count), roll="forward")
        else:
            days = _day(start) + np.arange(count)
        return days.tolist()

    @classmethod
    def for_dates(cls, dates: list[date]) -> DateCalculation:
        """Tightest policy able to hold every date in ``dates``."""
        if any(is_weekend(d) for d in dates):
            return cls.INCLUDE_WEEKENDS
        return cls.SKIP_WEEKENDS


__all__ = [
    "DateCalculation",
    "is_weekend",
]
