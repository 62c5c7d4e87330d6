"""Common contract for calendar-indexed time series.

Every operation is written once here against a handful of primitives
(length, lookup, ordered iteration, positional slicing). The dense and
sparse representations supply those primitives; callers cannot tell
them apart except by speed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from datetime import date
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd

from calseries.core.errors import EInvalidArgument, ENotFound
from calseries.core.point import Point
from calseries.core.types import coerce_date, is_date_like

if TYPE_CHECKING:
    from calseries.core.config import SeriesConfig
    from calseries.series.builder import TimeSeriesBuilder


class TimeSeries(ABC):
    """Immutable mapping from dates to float values, in date order.

    Dates are strictly increasing and each present date has exactly one
    non-NaN value. All transformations return new series.

    Examples:
        >>> from datetime import date
        >>> series = TimeSeries.of(date(2015, 1, 5), 12.0)
        >>> series.get(date(2015, 1, 5))
        12.0
        >>> series.get(date(2015, 1, 6)) is None
        True
    """

    # ------------------------------------------------------------------
    # Representation primitives
    # ------------------------------------------------------------------

    @abstractmethod
    def __len__(self) -> int: ...

    @abstractmethod
    def _lookup(self, value: date) -> float | None:
        """Stored value for a coerced date, or None."""

    @abstractmethod
    def stream(self) -> Iterator[Point]:
        """Stored points in increasing date order.

        Each call returns a fresh iterator.
        """

    @abstractmethod
    def _bisect(self, value: date) -> int:
        """Number of stored points dated strictly before ``value``."""

    @abstractmethod
    def _slice(self, lo: int, hi: int) -> TimeSeries:
        """Series holding stored points ``lo`` (inclusive) to ``hi`` (exclusive)."""

    @abstractmethod
    def _point_at(self, index: int) -> Point: ...

    @abstractmethod
    def _stored_values(self) -> np.ndarray:
        """Stored values in date order, as a new array."""

    @abstractmethod
    def to_numpy(self) -> np.ndarray:
        """Copy of the backing value array.

        Mutating the result never affects the series.
        """

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @staticmethod
    def empty() -> TimeSeries:
        """The shared empty series."""
        from calseries.series.sparse import EMPTY_SERIES

        return EMPTY_SERIES

    @staticmethod
    def of(point_date: Any, value: Any) -> TimeSeries:
        """Series holding a single point."""
        from calseries.series.builder import TimeSeriesBuilder

        return TimeSeriesBuilder().put(point_date, value).build()

    @staticmethod
    def builder(config: SeriesConfig | None = None) -> TimeSeriesBuilder:
        from calseries.series.builder import TimeSeriesBuilder

        return TimeSeriesBuilder(config)

    @staticmethod
    def from_pandas(series: pd.Series, config: SeriesConfig | None = None) -> TimeSeries:
        """Build from a pandas Series indexed by dates.

        NaN entries are treated as missing observations.

        Raises:
            EInvalidArgument: If ``series`` is not a pandas Series or holds
                non-date index labels
        """
        if not isinstance(series, pd.Series):
            raise EInvalidArgument(
                "from_pandas expects a pandas Series",
                context={"type": type(series).__name__},
            )
        from calseries.series.builder import TimeSeriesBuilder

        return TimeSeriesBuilder(config).put_all(series).build()

    def to_builder(self, config: SeriesConfig | None = None) -> TimeSeriesBuilder:
        """Builder pre-filled with this series' points."""
        from calseries.series.builder import TimeSeriesBuilder

        return TimeSeriesBuilder(config).put_all(self.stream())

    # ------------------------------------------------------------------
    # Lookup and membership
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        """Number of stored points."""
        return len(self)

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    def get(self, value: Any) -> float | None:
        """Value stored for ``value``, or None when the date is absent."""
        if not is_date_like(value):
            return None
        return self._lookup(coerce_date(value))

    def contains_date(self, value: Any) -> bool:
        return self.get(value) is not None

    def __contains__(self, value: object) -> bool:
        return self.contains_date(value)

    # ------------------------------------------------------------------
    # Earliest / latest
    # ------------------------------------------------------------------

    def _edge(self, index: int, which: str) -> Point:
        if self.is_empty:
            raise ENotFound(f"Unable to return {which} point, time series is empty")
        return self._point_at(index)

    @property
    def earliest_date(self) -> date:
        return self._edge(0, "earliest").date

    @property
    def earliest_value(self) -> float:
        return self._edge(0, "earliest").value

    @property
    def latest_date(self) -> date:
        return self._edge(-1, "latest").date

    @property
    def latest_value(self) -> float:
        return self._edge(-1, "latest").value

    # ------------------------------------------------------------------
    # Slicing
    # ------------------------------------------------------------------

    def sub_series(self, start: Any, end: Any) -> TimeSeries:
        """Points dated in ``[start, end)``.

        Bounds need not be stored dates.

        Raises:
            EInvalidArgument: If a bound is missing or ``start`` is after ``end``
        """
        start_date = coerce_date(start, "start")
        end_date = coerce_date(end, "end")
        if start_date > end_date:
            raise EInvalidArgument(
                "Invalid sub-series, start date must not be after end date",
                context={"start": start_date.isoformat(), "end": end_date.isoformat()},
            )
        return self._slice(self._bisect(start_date), self._bisect(end_date))

    def head_series(self, count: int) -> TimeSeries:
        """The first ``count`` points; the whole series when ``count`` exceeds it."""
        count = self._check_count(count)
        return self._slice(0, min(count, len(self)))

    def tail_series(self, count: int) -> TimeSeries:
        """The last ``count`` points; the whole series when ``count`` exceeds it."""
        count = self._check_count(count)
        size = len(self)
        return self._slice(size - min(count, size), size)

    @staticmethod
    def _check_count(count: Any) -> int:
        if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
            raise EInvalidArgument(
                "Point count must be an integer",
                context={"type": type(count).__name__},
            )
        if count < 0:
            raise EInvalidArgument(
                "Point count must not be negative",
                context={"count": int(count)},
            )
        return int(count)

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[Point]:
        return self.stream()

    def dates(self) -> Iterator[date]:
        return (point.date for point in self.stream())

    def values(self) -> Iterator[float]:
        return (float(v) for v in self._stored_values())

    def for_each(self, action: Callable[[date, float], Any]) -> None:
        """Call ``action(date, value)`` for each point in date order."""
        for point in self.stream():
            action(point.date, point.value)

    def to_pandas(self, name: str | None = None) -> pd.Series:
        """Float64 pandas Series on a DatetimeIndex."""
        index = pd.DatetimeIndex(pd.to_datetime(list(self.dates())))
        return pd.Series(self._stored_values(), index=index, name=name, dtype=np.float64)

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    def combine_with(
        self,
        other: TimeSeries,
        combiner: Callable[[float, float], float],
    ) -> TimeSeries:
        """Inner join on dates, combining the two values of each shared date.

        A single merge pass over both sorted point streams.
        """
        if not isinstance(other, TimeSeries):
            raise EInvalidArgument(
                "combine_with expects another time series",
                context={"type": type(other).__name__},
            )
        from calseries.series.builder import TimeSeriesBuilder

        builder = TimeSeriesBuilder()
        left = self.stream()
        right = other.stream()
        a = next(left, None)
        b = next(right, None)
        while a is not None and b is not None:
            if a.date == b.date:
                builder.put(a.date, combiner(a.value, b.value))
                a = next(left, None)
                b = next(right, None)
            elif a.date < b.date:
                a = next(left, None)
            else:
                b = next(right, None)
        return builder.build()

    def map_values(self, mapper: Callable[[float], float]) -> TimeSeries:
        """Apply ``mapper`` to every value, keeping the dates.

        A NaN result marks that date as missing.
        """
        from calseries.series.builder import TimeSeriesBuilder

        builder = TimeSeriesBuilder()
        for point in self.stream():
            builder.put(point.date, mapper(point.value))
        return builder.build()

    def filter(self, predicate: Callable[[date, float], bool]) -> TimeSeries:
        """Keep the points for which ``predicate(date, value)`` holds."""
        from calseries.series.builder import TimeSeriesBuilder

        builder = TimeSeriesBuilder()
        for point in self.stream():
            if predicate(point.date, point.value):
                builder.put_point(point)
        return builder.build()

    # ------------------------------------------------------------------
    # Equality
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, TimeSeries):
            return NotImplemented
        if len(self) != len(other):
            return False
        return list(self.dates()) == list(other.dates()) and np.array_equal(
            self._stored_values(), other._stored_values()
        )

    def __hash__(self) -> int:
        return hash((tuple(self.dates()), tuple(self._stored_values().tolist())))

    def __repr__(self) -> str:
        name = type(self).__name__
        if self.is_empty:
            return f"{name}(size=0)"
        return (
            f"{name}(size={len(self)}, "
            f"{self.earliest_date.isoformat()}..{self.latest_date.isoformat()})"
        )
