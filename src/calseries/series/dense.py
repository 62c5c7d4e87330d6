"""Array-backed series for calendar-regular data.

Values sit in a float64 array whose slot ``i`` stands for the date
``calculation.get_date_from_start(start_date, i)``. NaN slots are gaps
(holidays, missing fixings) and report as absent.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from datetime import date
from typing import Any

import numpy as np

from calseries.core.errors import EInvalidArgument
from calseries.core.point import Point
from calseries.core.types import coerce_date, coerce_value
from calseries.series.base import TimeSeries
from calseries.time import DateCalculation


def _coerce_calculation(calculation: Any) -> DateCalculation:
    try:
        return DateCalculation(calculation)
    except ValueError as exc:
        raise EInvalidArgument(
            "Unknown date calculation",
            context={"calculation": repr(calculation)},
            fix_hint="Use DateCalculation.INCLUDE_WEEKENDS or DateCalculation.SKIP_WEEKENDS",
        ) from exc


def _copy_values(values: Any) -> np.ndarray:
    """New float64 array holding ``values``; never a view of the input."""
    if values is None:
        raise EInvalidArgument("values must not be None")
    if isinstance(values, np.ndarray):
        if not (np.issubdtype(values.dtype, np.floating) or np.issubdtype(values.dtype, np.integer)):
            raise EInvalidArgument(
                "values must be a numeric array",
                context={"dtype": str(values.dtype)},
            )
        return np.array(values, dtype=np.float64, copy=True)
    try:
        items = list(values)
    except TypeError as exc:
        raise EInvalidArgument(
            "values must be iterable",
            context={"type": type(values).__name__},
        ) from exc
    return np.array([coerce_value(item) for item in items], dtype=np.float64)


class DenseTimeSeries(TimeSeries):
    """Dense series keyed by a start date and a calendar policy.

    The supplied values are copied and the copy is made read-only, so
    nothing the caller does to its own buffer is visible here.

    Args:
        start_date: Date of slot 0; must be valid for ``calculation``
        values: One value per slot, NaN for a gap
        calculation: Position/date mapping policy

    Raises:
        EInvalidArgument: If the start date is missing or invalid for the
            policy, or values are missing, non-numeric or empty
    """

    def __init__(
        self,
        start_date: Any,
        values: Iterable[float],
        calculation: DateCalculation = DateCalculation.SKIP_WEEKENDS,
    ) -> None:
        start = coerce_date(start_date, "start_date")
        calculation = _coerce_calculation(calculation)
        if not calculation.is_valid_date(start):
            raise EInvalidArgument(
                "Start date is not a valid position for the date calculation",
                context={"start_date": start.isoformat(), "calculation": calculation.value},
            )
        array = _copy_values(values)
        if array.ndim != 1 or array.size == 0:
            raise EInvalidArgument(
                "Dense values must be a non-empty one-dimensional sequence",
                context={"shape": array.shape},
            )
        array.setflags(write=False)

        self._start = start
        self._values = array
        self._calculation = calculation
        self._end = calculation.get_date_from_start(start, array.size - 1)
        self._present = np.flatnonzero(~np.isnan(array))

    @classmethod
    def of(
        cls,
        start_date: Any,
        end_date: Any,
        values: Iterable[Any],
        calculation: DateCalculation = DateCalculation.SKIP_WEEKENDS,
    ) -> DenseTimeSeries:
        """Dense series spanning ``start_date`` to ``end_date`` inclusive.

        ``values`` is either one number per slot, or an iterable of
        ``Point`` placed into their slots (unfilled slots become gaps).

        Raises:
            EInvalidArgument: If the bounds are reversed or invalid for the
                policy, the value count does not match the slot count, or a
                point falls outside the run
        """
        start = coerce_date(start_date, "start_date")
        end = coerce_date(end_date, "end_date")
        calculation = _coerce_calculation(calculation)
        if start > end:
            raise EInvalidArgument(
                "Start date must not be after end date",
                context={"start_date": start.isoformat(), "end_date": end.isoformat()},
            )
        if not calculation.is_valid_date(end):
            raise EInvalidArgument(
                "End date is not a valid position for the date calculation",
                context={"end_date": end.isoformat(), "calculation": calculation.value},
            )
        if values is None:
            raise EInvalidArgument("values must not be None")

        slots = calculation.positions_between(start, end)
        items = list(values)
        if items and all(isinstance(item, Point) for item in items):
            array = np.full(slots, np.nan)
            for point in items:
                if point.date < start or point.date > end or not calculation.is_valid_date(point.date):
                    raise EInvalidArgument(
                        "Point lies outside the dense run",
                        context={"date": point.date.isoformat(), "calculation": calculation.value},
                    )
                array[calculation.calculate_position(start, point.date)] = point.value
            return cls(start, array, calculation)

        if len(items) != slots:
            raise EInvalidArgument(
                "Value count does not match the number of positions",
                context={"values": len(items), "positions": slots},
            )
        return cls(start, items, calculation)

    @property
    def start_date(self) -> date:
        return self._start

    @property
    def end_date(self) -> date:
        return self._end

    @property
    def calculation(self) -> DateCalculation:
        return self._calculation

    def __len__(self) -> int:
        return int(self._present.size)

    def _lookup(self, value: date) -> float | None:
        if value < self._start or value > self._end:
            return None
        if not self._calculation.is_valid_date(value):
            return None
        found = self._values[self._calculation.calculate_position(self._start, value)]
        if np.isnan(found):
            return None
        return float(found)

    def _slot_date(self, position: int) -> date:
        return self._calculation.get_date_from_start(self._start, int(position))

    def stream(self) -> Iterator[Point]:
        dates = self._calculation.date_range(self._start, self._values.size)
        for position in self._present:
            yield Point(dates[position], float(self._values[position]))

    def dates(self) -> Iterator[date]:
        dates = self._calculation.date_range(self._start, self._values.size)
        return (dates[position] for position in self._present)

    def _bisect(self, value: date) -> int:
        position = self._calculation.calculate_position(self._start, value)
        return int(np.searchsorted(self._present, position, side="left"))

    def _slice(self, lo: int, hi: int) -> TimeSeries:
        if lo >= hi:
            return TimeSeries.empty()
        first = int(self._present[lo])
        last = int(self._present[hi - 1])
        if first == 0 and last == self._values.size - 1:
            return self
        return DenseTimeSeries(
            self._slot_date(first),
            self._values[first : last + 1],
            self._calculation,
        )

    def _point_at(self, index: int) -> Point:
        position = int(self._present[index])
        return Point(self._slot_date(position), float(self._values[position]))

    def _stored_values(self) -> np.ndarray:
        return self._values[self._present]

    def to_numpy(self) -> np.ndarray:
        """Copy of the slot array, NaN marking gaps."""
        return self._values.copy()

    def map_values(self, mapper: Callable[[float], float]) -> TimeSeries:
        mapped = np.full(self._values.size, np.nan)
        for position in self._present:
            mapped[position] = coerce_value(mapper(float(self._values[position])), "mapped value")
        if np.isnan(mapped).all():
            return TimeSeries.empty()
        return DenseTimeSeries(self._start, mapped, self._calculation)
