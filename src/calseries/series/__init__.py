"""Series module for calseries.

Provides the time series contract, its dense and sparse
representations, and the builder that chooses between them.
"""

from .base import TimeSeries
from .builder import TimeSeriesBuilder, build_series, to_series
from .dense import DenseTimeSeries
from .sparse import EMPTY_SERIES, SparseTimeSeries

__all__ = [
    # Contract
    "TimeSeries",
    # Representations
    "DenseTimeSeries",
    "SparseTimeSeries",
    "EMPTY_SERIES",
    # Construction
    "TimeSeriesBuilder",
    "build_series",
    "to_series",
]
