from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from forecaster.api.main import create_app
from forecaster.domain.catalog import CityCatalog
from forecaster.hub.forecast_hub import ForecastHub
from forecaster.providers.weather.static import FailingForecastProvider, StaticForecastProvider


def _build_api_client(providers):
    hub = ForecastHub(providers, today=lambda: date(2026, 2, 18))
    app = create_app(hub=hub, catalog=CityCatalog.from_json())
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def api_client():
    yield from _build_api_client([StaticForecastProvider(2.0), StaticForecastProvider(4.0)])


@pytest.fixture()
def api_client_failing():
    yield from _build_api_client([FailingForecastProvider("something bad happened")])
