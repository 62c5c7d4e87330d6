"""Input coercion shared by points, builders and series.

Dates are normalised to ``datetime.date`` and values to ``float``;
anything absent or of the wrong kind is rejected with ``EInvalidArgument``.
"""

from __future__ import annotations

import numbers
from datetime import date, datetime
from typing import Any, Union

import numpy as np
import pandas as pd

from calseries.core.errors import EInvalidArgument

DateLike = Union[date, datetime, np.datetime64, pd.Timestamp]


def coerce_date(value: Any, name: str = "date") -> date:
    """Return ``value`` as a calendar date.

    ``datetime`` and ``pandas.Timestamp`` are truncated to their date;
    ``numpy.datetime64`` is converted through pandas.

    Raises:
        EInvalidArgument: If value is None, NaT, or not date-like
    """
    if value is None:
        raise EInvalidArgument(f"{name} must not be None")
    if isinstance(value, np.datetime64):
        if np.isnat(value):
            raise EInvalidArgument(f"{name} must not be NaT")
        return pd.Timestamp(value).date()
    if isinstance(value, datetime):
        if pd.isna(value):
            raise EInvalidArgument(f"{name} must not be NaT")
        return value.date()
    if isinstance(value, date):
        return value
    raise EInvalidArgument(
        f"{name} must be a date",
        context={"type": type(value).__name__},
    )


def coerce_value(value: Any, name: str = "value") -> float:
    """Return ``value`` as a float.

    NaN passes through; it is the builder's job to interpret it.

    Raises:
        EInvalidArgument: If value is None, a bool, or not a real number
    """
    if value is None:
        raise EInvalidArgument(f"{name} must not be None")
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise EInvalidArgument(
            f"{name} must be a real number",
            context={"type": type(value).__name__},
        )
    return float(value)


def is_date_like(value: Any) -> bool:
    """True when ``coerce_date`` would accept ``value``."""
    if isinstance(value, np.datetime64):
        return not np.isnat(value)
    if isinstance(value, datetime):
        return not pd.isna(value)
    return isinstance(value, date)
