"""Forward Ibor rate observation.

The rate for an observation is read straight from the index rates held
by a rates provider; curves and fixings are external collaborators.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, ClassVar, Protocol

from calseries.core.errors import EInvalidArgument, ENotFound
from calseries.core.types import coerce_date, coerce_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IborRateObservation:
    """Observation of an Ibor index on a fixing date.

    Attributes:
        index: Index name, e.g. "GBP-LIBOR-3M"
        fixing_date: Date the index is observed
    """

    index: str
    fixing_date: date

    def __post_init__(self) -> None:
        if not isinstance(self.index, str) or not self.index:
            raise EInvalidArgument("index must be a non-empty string")
        object.__setattr__(self, "fixing_date", coerce_date(self.fixing_date, "fixing_date"))

    @classmethod
    def of(cls, index: str, fixing_date: Any) -> IborRateObservation:
        return cls(index, fixing_date)


@dataclass(frozen=True)
class IborRateSensitivity:
    """Point sensitivity to an Ibor index fixing."""

    index: str
    fixing_date: date
    sensitivity: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "fixing_date", coerce_date(self.fixing_date, "fixing_date"))
        object.__setattr__(self, "sensitivity", coerce_value(self.sensitivity, "sensitivity"))

    @classmethod
    def of(cls, index: str, fixing_date: Any, sensitivity: float) -> IborRateSensitivity:
        return cls(index, fixing_date, sensitivity)


class IborIndexRates(Protocol):
    """Rates for one Ibor index, typically backed by a forward curve."""

    def rate(self, fixing_date: date) -> float: ...

    def point_sensitivity(self, fixing_date: date) -> Any: ...


class RatesProvider(Protocol):
    def ibor_index_rates(self, index: str) -> IborIndexRates: ...


@dataclass
class SimpleRatesProvider:
    """Mutable provider holding a single set of Ibor index rates.

    Intended for tests and simple wiring; every index resolves to
    ``ibor_rates``.
    """

    valuation_date: date | None = None
    ibor_rates: IborIndexRates | None = field(default=None)

    def set_ibor_rates(self, ibor_rates: IborIndexRates) -> None:
        self.ibor_rates = ibor_rates

    def ibor_index_rates(self, index: str) -> IborIndexRates:
        if self.ibor_rates is None:
            raise ENotFound(
                "No Ibor index rates available",
                context={"index": index},
                fix_hint="Call set_ibor_rates() before pricing",
            )
        return self.ibor_rates


class ForwardIborRateObservationFn:
    """Rate of an Ibor observation read from the provider's forward rates.

    Accrual dates are part of the observation-function signature but do not
    affect a plain forward Ibor rate.
    """

    DEFAULT: ClassVar[ForwardIborRateObservationFn]

    def rate(
        self,
        observation: IborRateObservation,
        accrual_start_date: date,
        accrual_end_date: date,
        provider: RatesProvider,
    ) -> float:
        rates = self._index_rates(observation, provider)
        rate = rates.rate(observation.fixing_date)
        logger.debug(
            "Forward rate for %s fixing %s: %s",
            observation.index,
            observation.fixing_date,
            rate,
        )
        return rate

    def rate_sensitivity(
        self,
        observation: IborRateObservation,
        accrual_start_date: date,
        accrual_end_date: date,
        provider: RatesProvider,
    ) -> Any:
        return self._index_rates(observation, provider).point_sensitivity(observation.fixing_date)

    @staticmethod
    def _index_rates(observation: Any, provider: RatesProvider) -> IborIndexRates:
        if not isinstance(observation, IborRateObservation):
            raise EInvalidArgument(
                "Expected an IborRateObservation",
                context={"type": type(observation).__name__},
            )
        return provider.ibor_index_rates(observation.index)


ForwardIborRateObservationFn.DEFAULT = ForwardIborRateObservationFn()
