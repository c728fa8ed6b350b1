from __future__ import annotations

import asyncio
import logging
from typing import Tuple

import typer

from forecaster.config import Settings, build_registry, load_settings, today_in
from forecaster.domain.catalog import CityCatalog
from forecaster.domain.models import FORECAST_DAYS, Forecast, Position
from forecaster.errors import AggregationError
from forecaster.hub.forecast_hub import ForecastHub

app = typer.Typer(help="Averaged 5-day forecast from several weather providers")


def _build_hub(settings: Settings) -> ForecastHub:
    return ForecastHub(build_registry(settings), today=today_in(settings.forecast_tz))


def _resolve(country: str, city: str) -> Tuple[Position, Forecast]:
    settings = load_settings()
    logging.basicConfig(level=settings.log_level)
    catalog = CityCatalog.from_json(settings.cities_path)
    position = catalog.find(country, city)
    if position is None:
        typer.echo("City not found", err=True)
        raise typer.Exit(code=1)
    hub = _build_hub(settings)
    try:
        forecast = asyncio.run(hub.forecast(position))
    except AggregationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    return position, forecast


@app.command("forecast")
def cli_forecast(
    country: str = typer.Option(..., help="Country code, e.g. US"),
    city: str = typer.Option(..., help="City name"),
):
    position, forecast = _resolve(country, city)
    lat, lon = position.as_lat_lon()
    typer.echo(f"pos\t{lat:.5f}\t{lon:.5f}")
    for day, temp in enumerate(forecast):
        typer.echo(f"day+{day}\t{temp:.1f}")


@app.command("current")
def cli_current(
    country: str = typer.Option(..., help="Country code, e.g. US"),
    city: str = typer.Option(..., help="City name"),
    day: int = typer.Option(0, min=0, help="Days ahead of today"),
):
    if day >= FORECAST_DAYS:
        typer.echo("can't see further than 5 days", err=True)
        raise typer.Exit(code=2)
    _, forecast = _resolve(country, city)
    typer.echo(f"{forecast[day]:.1f}")


if __name__ == "__main__":
    app()
