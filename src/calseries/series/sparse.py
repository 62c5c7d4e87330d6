"""Series with an explicit sorted date sequence.

Used for irregular dates and for the empty series.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Iterator
from datetime import date
from typing import Any

import numpy as np

from calseries.core.errors import EInvalidArgument
from calseries.core.point import Point
from calseries.core.types import coerce_date, coerce_value
from calseries.series.base import TimeSeries


class SparseTimeSeries(TimeSeries):
    """Sparse series of parallel date and value sequences.

    Args:
        dates: Strictly increasing dates
        values: One non-NaN value per date

    Raises:
        EInvalidArgument: If the sequences are missing, differ in length,
            contain None or NaN, or the dates are not strictly increasing
    """

    def __init__(self, dates: Iterable[Any], values: Iterable[Any]) -> None:
        if dates is None or values is None:
            raise EInvalidArgument("dates and values must not be None")
        date_seq = tuple(coerce_date(d) for d in dates)
        array = np.array([coerce_value(v) for v in values], dtype=np.float64)
        if len(date_seq) != array.size:
            raise EInvalidArgument(
                "dates and values must have the same length",
                context={"dates": len(date_seq), "values": int(array.size)},
            )
        for previous, current in zip(date_seq, date_seq[1:]):
            if current <= previous:
                raise EInvalidArgument(
                    "dates must be strictly increasing",
                    context={"previous": previous.isoformat(), "current": current.isoformat()},
                )
        if np.isnan(array).any():
            raise EInvalidArgument("Sparse series cannot store NaN values")
        array.setflags(write=False)
        self._dates = date_seq
        self._values = array

    @classmethod
    def _from_sorted(cls, dates: tuple[date, ...], values: np.ndarray) -> SparseTimeSeries:
        """Wrap already validated data, copying the values."""
        series = cls.__new__(cls)
        array = np.array(values, dtype=np.float64, copy=True)
        array.setflags(write=False)
        series._dates = tuple(dates)
        series._values = array
        return series

    def __len__(self) -> int:
        return len(self._dates)

    def _lookup(self, value: date) -> float | None:
        index = bisect_left(self._dates, value)
        if index < len(self._dates) and self._dates[index] == value:
            return float(self._values[index])
        return None

    def stream(self) -> Iterator[Point]:
        for point_date, value in zip(self._dates, self._values):
            yield Point(point_date, float(value))

    def dates(self) -> Iterator[date]:
        return iter(self._dates)

    def _bisect(self, value: date) -> int:
        return bisect_left(self._dates, value)

    def _slice(self, lo: int, hi: int) -> TimeSeries:
        if lo >= hi:
            return EMPTY_SERIES
        if lo == 0 and hi == len(self._dates):
            return self
        return SparseTimeSeries._from_sorted(self._dates[lo:hi], self._values[lo:hi])

    def _point_at(self, index: int) -> Point:
        return Point(self._dates[index], float(self._values[index]))

    def _stored_values(self) -> np.ndarray:
        return self._values.copy()

    def to_numpy(self) -> np.ndarray:
        return self._values.copy()


EMPTY_SERIES: SparseTimeSeries = SparseTimeSeries._from_sorted((), np.empty(0))
"""Canonical empty series."""
