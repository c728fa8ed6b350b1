from __future__ import annotations

import pytest

from forecaster.hub.weather_registry import ForecastProviderRegistry
from forecaster.providers.weather.static import FailingForecastProvider, StaticForecastProvider


def test_registry_register_and_get() -> None:
    registry = ForecastProviderRegistry()
    provider = StaticForecastProvider(1.0)
    registry.register("demo", provider)

    assert registry.get("demo") is provider
    assert registry.list() == ["demo"]
    assert len(registry) == 1


def test_registry_duplicate_registration_fails() -> None:
    registry = ForecastProviderRegistry()
    provider = StaticForecastProvider(1.0)
    registry.register("demo", provider)

    with pytest.raises(ValueError):
        registry.register("demo", provider)


def test_registry_unknown_provider_raises_key_error() -> None:
    registry = ForecastProviderRegistry()

    with pytest.raises(KeyError):
        registry.get("missing")


def test_registry_keeps_registration_order() -> None:
    registry = ForecastProviderRegistry()
    first = StaticForecastProvider(1.0)
    second = FailingForecastProvider("down")
    registry.register("zeta", first)
    registry.register("alpha", second)

    assert registry.list() == ["zeta", "alpha"]
    assert registry.providers() == [first, second]
