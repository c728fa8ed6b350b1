from __future__ import annotations

from forecaster.domain.models import FORECAST_DAYS, Forecast, Position, to_forecast

from .base import ForecastProvider, ProviderError


class StaticForecastProvider(ForecastProvider):
    """Returns ``base, base + 1, ..., base + 4`` for every position."""

    name = "static"

    def __init__(self, base: float) -> None:
        self.base = base
        self.calls = 0

    async def fetch(self, position: Position) -> Forecast:
        self.calls += 1
        return to_forecast([self.base + day for day in range(FORECAST_DAYS)])


class FailingForecastProvider(ForecastProvider):
    name = "failing"

    def __init__(self, message: str) -> None:
        self.message = message
        self.calls = 0

    async def fetch(self, position: Position) -> Forecast:
        self.calls += 1
        raise ProviderError(self.message)
