"""calseries - Calendar-indexed time series for financial data.

Maps calendar dates to float values. Regular business-day data is held
in a compact array keyed by a start date and a calendar policy; irregular
data falls back to an explicit sorted date list. Both behave identically.

Basic usage:
    >>> from datetime import date
    >>> from calseries import TimeSeries
    >>> series = (
    ...     TimeSeries.builder()
    ...     .put_all([date(2015, 1, 5), date(2015, 1, 6)], [10.0, 11.0])
    ...     .build()
    ... )
    >>> series.get(date(2015, 1, 6))
    11.0

Pipelines:
    >>> from calseries import to_series
    >>> doubled = to_series(p.with_value(p.value * 2) for p in series.stream())
"""

__version__ = "0.1.0"

from calseries.core.config import SeriesConfig
from calseries.core.errors import (
    CalSeriesError,
    EInvalidArgument,
    ENotFound,
)
from calseries.core.point import Point
from calseries.rates import (
    ForwardIborRateObservationFn,
    IborRateObservation,
    IborRateSensitivity,
    SimpleRatesProvider,
)
from calseries.series import (
    EMPTY_SERIES,
    DenseTimeSeries,
    SparseTimeSeries,
    TimeSeries,
    TimeSeriesBuilder,
    build_series,
    to_series,
)
from calseries.time import DateCalculation

__all__ = [
    "__version__",
    # Series
    "TimeSeries",
    "DenseTimeSeries",
    "SparseTimeSeries",
    "EMPTY_SERIES",
    "TimeSeriesBuilder",
    "build_series",
    "to_series",
    "Point",
    "DateCalculation",
    # Config
    "SeriesConfig",
    # Errors
    "CalSeriesError",
    "EInvalidArgument",
    "ENotFound",
    # Rates
    "ForwardIborRateObservationFn",
    "IborRateObservation",
    "IborRateSensitivity",
    "SimpleRatesProvider",
]
