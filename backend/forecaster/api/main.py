from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from forecaster.api.errors import StatusError, status_error_handler
from forecaster.api.routers import forecast
from forecaster.config import Settings, build_registry, load_settings, today_in
from forecaster.domain.catalog import CityCatalog
from forecaster.hub.forecast_hub import ForecastHub


def create_app(
    hub: Optional[ForecastHub] = None,
    catalog: Optional[CityCatalog] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the API; without an explicit hub one is wired from settings.

    Missing provider tokens raise here so the server refuses to start instead
    of failing per request. Serve with ``uvicorn --factory
    forecaster.api.main:create_app``.
    """
    if hub is None or catalog is None:
        settings = settings or load_settings()
    if hub is None:
        hub = ForecastHub(build_registry(settings), today=today_in(settings.forecast_tz))
    if catalog is None:
        catalog = CityCatalog.from_json(settings.cities_path)

    app = FastAPI(title="Forecast API", version="0.1.0")
    app.state.forecast_hub = hub
    app.state.city_catalog = catalog
    app.add_exception_handler(StatusError, status_error_handler)
    app.include_router(forecast.router)
    return app
