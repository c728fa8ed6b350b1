from __future__ import annotations

from typing import Tuple

from fastapi import APIRouter, Depends, Query

from forecaster.api.deps import get_catalog, get_forecast_hub
from forecaster.api.errors import StatusError
from forecaster.domain.catalog import CityCatalog
from forecaster.domain.models import FORECAST_DAYS, Forecast, Position
from forecaster.errors import AggregationError, describe_error
from forecaster.hub.forecast_hub import ForecastHub

router = APIRouter(tags=["forecast"])


@router.get("/")
def index():
    return {"status": "ok"}


@router.get("/forecast")
async def get_forecast(
    country: str = Query(..., description="Country code, case-sensitive"),
    city: str = Query(..., description="City name"),
    hub: ForecastHub = Depends(get_forecast_hub),
    catalog: CityCatalog = Depends(get_catalog),
):
    position, forecast = await _fetch(hub, catalog, country, city)
    return {"pos": list(position.as_lat_lon()), "forecast": list(forecast)}


@router.get("/current")
async def get_current(
    country: str = Query(..., description="Country code, case-sensitive"),
    city: str = Query(..., description="City name"),
    day: int = Query(0, ge=0, description="Days ahead of today"),
    hub: ForecastHub = Depends(get_forecast_hub),
    catalog: CityCatalog = Depends(get_catalog),
):
    if day >= FORECAST_DAYS:
        raise StatusError(400, "can't see further than 5 days")
    position, forecast = await _fetch(hub, catalog, country, city)
    return {"pos": list(position.as_lat_lon()), "temp": forecast[day]}


async def _fetch(
    hub: ForecastHub, catalog: CityCatalog, country: str, city: str
) -> Tuple[Position, Forecast]:
    position = catalog.find(country, city)
    if position is None:
        raise StatusError(404, "City not found")
    try:
        forecast = await hub.forecast(position)
    except AggregationError as exc:
        raise StatusError(500, describe_error(exc)) from exc
    return position, forecast
