from __future__ import annotations

from fastapi import HTTPException, Request

from forecaster.domain.catalog import CityCatalog
from forecaster.hub.forecast_hub import ForecastHub


def get_forecast_hub(request: Request) -> ForecastHub:
    hub = getattr(request.app.state, "forecast_hub", None)
    if hub is None:
        raise HTTPException(status_code=500, detail="Forecast service not configured")
    return hub


def get_catalog(request: Request) -> CityCatalog:
    catalog = getattr(request.app.state, "city_catalog", None)
    if catalog is None:
        raise HTTPException(status_code=500, detail="City catalog not configured")
    return catalog
