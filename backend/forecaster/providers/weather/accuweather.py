from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from forecaster.domain.models import FORECAST_DAYS, Forecast, Position, to_forecast

from .base import DEFAULT_TIMEOUT, ForecastProvider, ProviderError

logger = logging.getLogger(__name__)


class AccuWeatherProvider(ForecastProvider):
    """AccuWeather 5-day daily forecast (https://developer.accuweather.com/).

    The forecast endpoint is keyed by an AccuWeather location id, so every
    fetch first resolves the position through the geoposition search.
    """

    SEARCH_URL = "https://dataservice.accuweather.com/locations/v1/cities/geoposition/search"
    FORECAST_URL = "https://dataservice.accuweather.com/forecasts/v1/daily/5day/{key}"
    name = "accuweather"

    def __init__(
        self,
        token: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if not token:
            raise RuntimeError("ACCU_TOKEN is required for AccuWeatherProvider")
        self.token = token
        self.timeout = timeout
        self._client = client

    async def fetch(self, position: Position) -> Forecast:
        async with self._session() as client:
            key = await self._search(client, position)
            try:
                resp = await client.get(
                    self.FORECAST_URL.format(key=key),
                    params={"metric": "true", "apikey": self.token},
                    timeout=self.timeout,
                )
            except httpx.HTTPError as exc:
                raise ProviderError("error fetching data") from exc
        self._check_status(resp)
        try:
            return self._parse_daily(resp.json())
        except (ValueError, KeyError, TypeError) as exc:
            raise ProviderError("error parsing response") from exc

    async def _search(self, client: httpx.AsyncClient, position: Position) -> str:
        lat, lon = position.as_lat_lon()
        try:
            resp = await client.get(
                self.SEARCH_URL,
                params={"apikey": self.token, "q": f"{lat},{lon}"},
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise ProviderError("error searching location") from exc
        self._check_status(resp)
        try:
            return str(resp.json()["Key"])
        except (ValueError, KeyError, TypeError) as exc:
            raise ProviderError("error parsing location search response") from exc

    @staticmethod
    def _parse_daily(data: dict) -> Forecast:
        daily = data["DailyForecasts"]
        if len(daily) != FORECAST_DAYS:
            raise ValueError(f"expected {FORECAST_DAYS} daily forecasts, got {len(daily)}")
        temps = []
        for day in daily:
            temperature = day["Temperature"]
            low = float(temperature["Minimum"]["Value"])
            high = float(temperature["Maximum"]["Value"])
            temps.append((low + high) / 2.0)
        return to_forecast(temps)

    @staticmethod
    def _check_status(resp: httpx.Response) -> None:
        if resp.is_success:
            return
        try:
            message = str(resp.json()["Message"])
        except (ValueError, KeyError, TypeError):
            message = f"HTTP {resp.status_code}"
        logger.warning("accuweather returned %s: %s", resp.status_code, message)
        raise ProviderError(f"external provider error: {message}")

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            yield client
