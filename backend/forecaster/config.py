from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional
from zoneinfo import ZoneInfo

from forecaster.domain.catalog import DEFAULT_CITIES_PATH
from forecaster.hub.weather_registry import ForecastProviderRegistry
from forecaster.providers.weather.accuweather import AccuWeatherProvider
from forecaster.providers.weather.base import DEFAULT_TIMEOUT
from forecaster.providers.weather.openweathermap import OpenWeatherMapProvider


@dataclass(frozen=True)
class Settings:
    owm_token: Optional[str] = None
    accu_token: Optional[str] = None
    provider_timeout: float = DEFAULT_TIMEOUT
    forecast_tz: str = "UTC"
    cities_path: Path = DEFAULT_CITIES_PATH
    log_level: str = "INFO"


def load_settings() -> Settings:
    return Settings(
        owm_token=os.getenv("OWM_TOKEN") or None,
        accu_token=os.getenv("ACCU_TOKEN") or None,
        provider_timeout=float(os.getenv("PROVIDER_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT))),
        forecast_tz=os.getenv("FORECAST_TZ", "UTC"),
        cities_path=Path(os.getenv("CITIES_PATH", str(DEFAULT_CITIES_PATH))),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def build_registry(settings: Settings) -> ForecastProviderRegistry:
    """Register OpenWeatherMap then AccuWeather; both tokens are mandatory."""
    missing: List[str] = []
    if not settings.owm_token:
        missing.append("OWM_TOKEN")
    if not settings.accu_token:
        missing.append("ACCU_TOKEN")
    if missing:
        raise RuntimeError(f"missing provider tokens: {', '.join(missing)}")
    registry = ForecastProviderRegistry()
    registry.register(
        OpenWeatherMapProvider.name,
        OpenWeatherMapProvider(settings.owm_token, timeout=settings.provider_timeout),
    )
    registry.register(
        AccuWeatherProvider.name,
        AccuWeatherProvider(settings.accu_token, timeout=settings.provider_timeout),
    )
    return registry


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def today_in(tz_name: str, now: Callable[[], datetime] = _utc_now) -> Callable[[], date]:
    """Calendar-day clock pinned to one reference time zone."""
    tz = ZoneInfo(tz_name)

    def _today() -> date:
        return now().astimezone(tz).date()

    return _today
