"""Immutable (date, value) pair stored in a time series."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import date
from typing import Any

from calseries.core.types import coerce_date, coerce_value


@dataclass(frozen=True, eq=False)
class Point:
    """A single observation.

    Points order by date alone. Equality compares both fields, treating
    two NaN values as equal.

    Attributes:
        date: Calendar date of the observation
        value: Observed value

    Examples:
        >>> from datetime import date
        >>> Point(date(2015, 1, 5), 12.0).with_value(1.5)
        Point(date=datetime.date(2015, 1, 5), value=1.5)
    """

    date: date
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", coerce_date(self.date))
        object.__setattr__(self, "value", coerce_value(self.value))

    @classmethod
    def of(cls, point_date: Any, value: Any) -> Point:
        return cls(point_date, value)

    def with_date(self, point_date: Any) -> Point:
        """Return a copy holding ``point_date``."""
        return replace(self, date=point_date)

    def with_value(self, value: Any) -> Point:
        """Return a copy holding ``value``."""
        return replace(self, value=value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        if self.date != other.date:
            return False
        if math.isnan(self.value):
            return math.isnan(other.value)
        return self.value == other.value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.date < other.date

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.date <= other.date

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.date > other.date

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.date >= other.date

    def __hash__(self) -> int:
        # hash(nan) is identity-based, so give every NaN the same key
        key = "nan" if math.isnan(self.value) else self.value
        return hash((self.date, key))
