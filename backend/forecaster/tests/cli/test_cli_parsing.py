import pytest
from typer.testing import CliRunner

from forecaster.cli import main as cli_main
from forecaster.hub.forecast_hub import ForecastHub
from forecaster.providers.weather.static import FailingForecastProvider, StaticForecastProvider


@pytest.fixture()
def stub_hub(monkeypatch):
    monkeypatch.setattr(
        cli_main,
        "_build_hub",
        lambda settings: ForecastHub([StaticForecastProvider(2.0), StaticForecastProvider(4.0)]),
    )


def test_forecast_command_prints_five_days(stub_hub):
    runner = CliRunner()
    result = runner.invoke(cli_main.app, ["forecast", "--country", "US", "--city", "chicago"])
    assert result.exit_code == 0
    assert "pos\t41.85003\t-87.65005" in result.output
    assert "day+0\t3.0" in result.output
    assert "day+4\t7.0" in result.output


def test_current_command_prints_one_day(stub_hub):
    runner = CliRunner()
    result = runner.invoke(cli_main.app, ["current", "--country", "RU", "--city", "Moscow", "--day", "1"])
    assert result.exit_code == 0
    assert result.output.strip().splitlines()[-1] == "4.0"


def test_current_command_rejects_sixth_day(stub_hub):
    runner = CliRunner()
    result = runner.invoke(cli_main.app, ["current", "--country", "RU", "--city", "Moscow", "--day", "5"])
    assert result.exit_code == 2


def test_unknown_city_exits_with_error(stub_hub):
    runner = CliRunner()
    result = runner.invoke(cli_main.app, ["forecast", "--country", "US", "--city", "Sanity"])
    assert result.exit_code == 1
    assert "City not found" in result.output


def test_provider_failure_exits_with_error_chain(monkeypatch):
    monkeypatch.setattr(
        cli_main,
        "_build_hub",
        lambda settings: ForecastHub([FailingForecastProvider("something bad happened")]),
    )
    runner = CliRunner()
    result = runner.invoke(cli_main.app, ["forecast", "--country", "DE", "--city", "Berlin"])
    assert result.exit_code == 1
    assert "error while fetching forecast: something bad happened" in result.output
