from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from forecaster.domain.models import FORECAST_DAYS, Forecast, Position, to_forecast

from .base import DEFAULT_TIMEOUT, ForecastProvider, ProviderError

logger = logging.getLogger(__name__)


class OpenWeatherMapProvider(ForecastProvider):
    """OpenWeatherMap One Call API (https://openweathermap.org/api/one-call-api)."""

    BASE_URL = "https://api.openweathermap.org/data/2.5/onecall"
    name = "openweathermap"

    def __init__(
        self,
        token: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if not token:
            raise RuntimeError("OWM_TOKEN is required for OpenWeatherMapProvider")
        self.token = token
        self.timeout = timeout
        self._client = client

    async def fetch(self, position: Position) -> Forecast:
        lat, lon = position.as_lat_lon()
        params = {
            "lat": lat,
            "lon": lon,
            "exclude": "current,minutely,hourly,alerts",
            "units": "metric",
            "appid": self.token,
        }
        async with self._session() as client:
            try:
                resp = await client.get(self.BASE_URL, params=params, timeout=self.timeout)
            except httpx.HTTPError as exc:
                raise ProviderError("error requesting provider") from exc
        if resp.status_code != httpx.codes.OK:
            message = self._error_message(resp)
            logger.warning("openweathermap returned %s: %s", resp.status_code, message)
            raise ProviderError(f"external provider error: {message}")
        try:
            return self._parse_daily(resp.json())
        except (ValueError, KeyError, TypeError) as exc:
            raise ProviderError("error parsing response") from exc

    @staticmethod
    def _parse_daily(data: dict) -> Forecast:
        daily = data["daily"]
        if len(daily) < FORECAST_DAYS:
            raise ValueError(f"expected at least {FORECAST_DAYS} daily entries, got {len(daily)}")
        temps = []
        for day in daily[:FORECAST_DAYS]:
            temp = day["temp"]
            temps.append((float(temp["day"]) + float(temp["night"])) / 2.0)
        return to_forecast(temps)

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        try:
            return str(resp.json()["message"])
        except (ValueError, KeyError, TypeError):
            return f"HTTP {resp.status_code}"

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            yield client
