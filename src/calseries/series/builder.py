"""Two-phase construction of time series.

Points are accumulated in a mutable builder, then validated, sorted and
frozen by ``build()`` into whichever representation suits them.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

import numpy as np
import pandas as pd

from calseries.core.config import SeriesConfig
from calseries.core.errors import EInvalidArgument
from calseries.core.point import Point
from calseries.core.types import coerce_date, coerce_value
from calseries.series.base import TimeSeries
from calseries.series.dense import DenseTimeSeries
from calseries.series.sparse import EMPTY_SERIES, SparseTimeSeries
from calseries.time import DateCalculation

logger = logging.getLogger(__name__)

_MISSING = object()


class TimeSeriesBuilder:
    """Mutable accumulator of (date, value) pairs.

    Dates may be added in any order. A later value for a date replaces an
    earlier one. A NaN value records a missing observation: the date is
    left out of the built series. Each ``put*`` call validates its whole
    input before storing any of it.

    A builder is meant to be filled by a single owner; it is not
    synchronised.

    Args:
        config: Representation policy (default: ``SeriesConfig()``)

    Examples:
        >>> from datetime import date
        >>> series = (
        ...     TimeSeriesBuilder()
        ...     .put(date(2015, 1, 6), 11.0)
        ...     .put(date(2015, 1, 5), 10.0)
        ...     .build()
        ... )
        >>> list(series.values())
        [10.0, 11.0]
    """

    def __init__(self, config: SeriesConfig | None = None) -> None:
        self._config = config or SeriesConfig()
        self._entries: dict[date, float] = {}

    @property
    def config(self) -> SeriesConfig:
        return self._config

    def __len__(self) -> int:
        return len(self._entries)

    def put(self, point_date: Any, value: Any) -> TimeSeriesBuilder:
        """Add one observation.

        Raises:
            EInvalidArgument: If the date or value is missing or invalid
        """
        entry_date = coerce_date(point_date)
        self._entries[entry_date] = coerce_value(value)
        return self

    def put_point(self, point: Point) -> TimeSeriesBuilder:
        if not isinstance(point, Point):
            raise EInvalidArgument(
                "Expected a Point",
                context={"type": type(point).__name__},
            )
        self._entries[point.date] = point.value
        return self

    def put_all(self, source: Any, values: Any = _MISSING) -> TimeSeriesBuilder:
        """Add many observations.

        Accepts either two equal-length iterables ``(dates, values)``, a
        mapping of date to value (including a pandas Series), or an
        iterable of ``Point``.

        Raises:
            EInvalidArgument: If an argument is None, the paired iterables
                differ in length, or any date or value is invalid
        """
        if source is None:
            raise EInvalidArgument("Collection of dates or points must not be None")
        if values is not _MISSING:
            pairs = _paired(source, values)
        elif isinstance(source, (Mapping, pd.Series)):
            pairs = [(coerce_date(d), coerce_value(v)) for d, v in source.items()]
        else:
            pairs = _points(source)
        self._entries.update(pairs)
        return self

    def build(self) -> TimeSeries:
        """Freeze the accumulated points into an immutable series.

        The builder is left untouched and can keep accumulating.
        """
        dates = sorted(d for d, v in self._entries.items() if not math.isnan(v))
        if not dates:
            return EMPTY_SERIES
        values = np.array([self._entries[d] for d in dates], dtype=np.float64)

        if self._config.densify:
            calculation = DateCalculation.for_dates(dates)
            slots = calculation.positions_between(dates[0], dates[-1])
            density = len(dates) / slots
            if density >= self._config.density_threshold:
                logger.debug(
                    "Building dense series: %d points over %d %s slots",
                    len(dates),
                    slots,
                    calculation.value,
                )
                array = np.full(slots, np.nan)
                array[calculation.calculate_positions(dates[0], dates)] = values
                return DenseTimeSeries(dates[0], array, calculation)

        logger.debug("Building sparse series: %d points", len(dates))
        return SparseTimeSeries._from_sorted(tuple(dates), values)


def _paired(dates: Any, values: Any) -> list[tuple[date, float]]:
    if values is None:
        raise EInvalidArgument("Collection of values must not be None")
    try:
        date_list = list(dates)
        value_list = list(values)
    except TypeError as exc:
        raise EInvalidArgument("dates and values must be iterable") from exc
    if len(date_list) != len(value_list):
        raise EInvalidArgument(
            "dates and values must have the same length",
            context={"dates": len(date_list), "values": len(value_list)},
        )
    return [(coerce_date(d), coerce_value(v)) for d, v in zip(date_list, value_list)]


def _points(points: Any) -> list[tuple[date, float]]:
    try:
        items = list(points)
    except TypeError as exc:
        raise EInvalidArgument(
            "Expected an iterable of points",
            context={"type": type(points).__name__},
        ) from exc
    pairs = []
    for item in items:
        if not isinstance(item, Point):
            raise EInvalidArgument(
                "Expected an iterable of points",
                context={"item_type": type(item).__name__},
            )
        pairs.append((item.date, item.value))
    return pairs


def to_series(points: Iterable[Point], config: SeriesConfig | None = None) -> TimeSeries:
    """Collect a stream of points into a series.

    Inverse of ``TimeSeries.stream``:
    ``to_series(series.stream()) == series``.
    """
    return TimeSeriesBuilder(config).put_all(points).build()


def build_series(
    source: Any,
    values: Any = _MISSING,
    config: SeriesConfig | None = None,
) -> TimeSeries:
    """Build a series from any input ``TimeSeriesBuilder.put_all`` accepts.

    Convenience function for one-shot construction.
    """
    return TimeSeriesBuilder(config).put_all(source, values).build()
