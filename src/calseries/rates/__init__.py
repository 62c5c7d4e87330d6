"""Rate observation functions over externally supplied index rates."""

from .ibor import (
    ForwardIborRateObservationFn,
    IborIndexRates,
    IborRateObservation,
    IborRateSensitivity,
    RatesProvider,
    SimpleRatesProvider,
)

__all__ = [
    "ForwardIborRateObservationFn",
    "IborIndexRates",
    "IborRateObservation",
    "IborRateSensitivity",
    "RatesProvider",
    "SimpleRatesProvider",
]
