from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, timezone
from typing import Callable, List, Optional, Sequence, Union

from forecaster.domain.models import FORECAST_DAYS, Forecast, Position, to_forecast
from forecaster.errors import AggregationError, ProviderError
from forecaster.infra.cache import ForecastCache
from forecaster.providers.weather.base import ForecastProvider

from .weather_registry import ForecastProviderRegistry

logger = logging.getLogger(__name__)


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class ForecastHub:
    """Averages daily forecasts from every provider and caches them per day.

    A cache hit for today's date never reaches a provider. A miss fans out to
    all providers at once; one failure fails the whole request and nothing is
    cached. Concurrent misses for the same position are not coalesced: each
    fetches on its own and the last store wins.
    """

    def __init__(
        self,
        providers: Union[ForecastProviderRegistry, Sequence[ForecastProvider]],
        *,
        cache: Optional[ForecastCache] = None,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        if isinstance(providers, ForecastProviderRegistry):
            self._names = providers.list()
            self._providers: List[ForecastProvider] = providers.providers()
        else:
            self._providers = list(providers)
            self._names = [getattr(p, "name", p.__class__.__name__) for p in self._providers]
        if not self._providers:
            raise ValueError("tried to initialize weather service with zero providers")
        self.cache = cache if cache is not None else ForecastCache()
        self._today = today or _utc_today

    @property
    def providers(self) -> List[str]:
        return list(self._names)

    async def forecast(self, position: Position) -> Forecast:
        today = self._today()
        cached = await self.cache.lookup(position, today)
        if cached is not None:
            logger.debug("cache hit for %s on %s", position, today)
            return cached

        # Slow path: the read lock is already released here.
        result = await self._fetch_forecast(position)
        await self.cache.store(position, today, result)
        return result

    async def _fetch_forecast(self, position: Position) -> Forecast:
        logger.info("fetching forecast for %s from %d providers", position, len(self._providers))
        results = await asyncio.gather(
            *(provider.fetch(position) for provider in self._providers),
            return_exceptions=True,
        )

        forecasts: List[Forecast] = []
        for name, result in zip(self._names, results):
            if isinstance(result, ProviderError):
                logger.warning("provider %s failed: %s", name, result)
                raise AggregationError("error while fetching forecast") from result
            if isinstance(result, Exception):
                logger.error("provider %s raised unexpectedly", name, exc_info=result)
                raise AggregationError("error while fetching forecast") from result
            if isinstance(result, BaseException):
                raise result
            forecasts.append(result)
        return self._average(forecasts)

    @staticmethod
    def _average(forecasts: Sequence[Forecast]) -> Forecast:
        count = float(len(forecasts))
        totals = [0.0] * FORECAST_DAYS
        for forecast in forecasts:
            for day in range(FORECAST_DAYS):
                totals[day] += forecast[day]
        return to_forecast([total / count for total in totals])
