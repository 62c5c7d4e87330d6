"""Builder configuration.

Controls when a builder stores accumulated points in the array-backed
dense representation instead of the explicit sparse one.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SeriesConfig(BaseModel):
    """Representation policy used by ``TimeSeriesBuilder.build``.

    Args:
        densify: Allow the builder to pick the dense representation
        density_threshold: Minimum ratio of stored points to calendar
            positions between the first and last date for a dense build
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    densify: bool = True
    density_threshold: float = Field(default=0.7, gt=0.0, le=1.0)

    @classmethod
    def default(cls) -> SeriesConfig:
        return cls()

    @classmethod
    def sparse_only(cls) -> SeriesConfig:
        """Never densify; every built series uses explicit dates."""
        return cls(densify=False)
