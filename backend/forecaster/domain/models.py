from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from datetime import date
from typing import Sequence, Tuple

FORECAST_DAYS = 5
POSITION_EPSILON = sys.float_info.epsilon
# Grid cell size in degrees; must stay far above POSITION_EPSILON.
CELL_SIZE = 1e-6

Temperature = float
Forecast = Tuple[float, float, float, float, float]


@dataclass(frozen=True, eq=False)
class Position:
    """Latitude/longitude pair used as the forecast cache key.

    Positions come from the static city catalog and are never computed, so
    they compare equal when both components are within machine epsilon.
    Tolerance equality is not transitive and no hash can agree with it, so
    positions are unhashable; the cache files them by ``cell()`` and checks
    neighbouring cells instead.
    """

    lat: float
    lon: float

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            abs(self.lat - other.lat) <= POSITION_EPSILON
            and abs(self.lon - other.lon) <= POSITION_EPSILON
        )

    __hash__ = None  # type: ignore[assignment]

    def cell(self) -> Tuple[int, int]:
        return (math.floor(self.lat / CELL_SIZE), math.floor(self.lon / CELL_SIZE))

    def as_lat_lon(self) -> Tuple[float, float]:
        return (self.lat, self.lon)


@dataclass(frozen=True)
class CacheEntry:
    computed_day: date
    forecast: Forecast


def to_forecast(values: Sequence[float]) -> Forecast:
    """Validate and freeze a daily temperature sequence."""
    if len(values) != FORECAST_DAYS:
        raise ValueError(f"forecast must have {FORECAST_DAYS} days, got {len(values)}")
    return tuple(float(v) for v in values)  # type: ignore[return-value]
