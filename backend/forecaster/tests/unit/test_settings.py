from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from forecaster.config import Settings, build_registry, load_settings, today_in


def _frozen(moment: datetime):
    return lambda: moment


def test_today_in_utc_just_before_midnight():
    today = today_in("UTC", now=_frozen(datetime(2026, 2, 18, 23, 59, tzinfo=timezone.utc)))

    assert today() == date(2026, 2, 18)


def test_today_in_far_east_zone_is_already_tomorrow():
    moment = datetime(2026, 2, 18, 23, 59, tzinfo=timezone.utc)

    assert today_in("Pacific/Kiritimati", now=_frozen(moment))() == date(2026, 2, 19)


def test_today_in_far_west_zone_is_still_yesterday():
    moment = datetime(2026, 2, 19, 0, 1, tzinfo=timezone.utc)

    assert today_in("UTC", now=_frozen(moment))() == date(2026, 2, 19)
    assert today_in("Pacific/Pago_Pago", now=_frozen(moment))() == date(2026, 2, 18)


def test_load_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("OWM_TOKEN", "owm")
    monkeypatch.setenv("ACCU_TOKEN", "")
    monkeypatch.setenv("PROVIDER_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("FORECAST_TZ", "Europe/Berlin")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.owm_token == "owm"
    assert settings.accu_token is None
    assert settings.provider_timeout == 2.5
    assert settings.forecast_tz == "Europe/Berlin"
    assert settings.log_level == "DEBUG"


def test_build_registry_names_every_missing_token():
    with pytest.raises(RuntimeError, match="OWM_TOKEN, ACCU_TOKEN"):
        build_registry(Settings())


def test_build_registry_orders_providers():
    registry = build_registry(Settings(owm_token="owm", accu_token="accu"))

    assert registry.list() == ["openweathermap", "accuweather"]
