"""Core building blocks: errors, configuration, input coercion and points."""

from calseries.core.config import SeriesConfig
from calseries.core.errors import (
    ERROR_REGISTRY,
    CalSeriesError,
    EInvalidArgument,
    ENotFound,
    get_error_class,
)
from calseries.core.point import Point
from calseries.core.types import DateLike, coerce_date, coerce_value

__all__ = [
    # Errors
    "CalSeriesError",
    "EInvalidArgument",
    "ENotFound",
    "ERROR_REGISTRY",
    "get_error_class",
    # Config
    "SeriesConfig",
    # Points
    "Point",
    "DateLike",
    "coerce_date",
    "coerce_value",
]
