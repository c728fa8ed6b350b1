from __future__ import annotations

from typing import Dict, List

from forecaster.providers.weather.base import ForecastProvider


class ForecastProviderRegistry:
    """Ordered name -> provider mapping; registration order is fan-out order."""

    def __init__(self) -> None:
        self._providers: Dict[str, ForecastProvider] = {}

    def register(self, name: str, provider: ForecastProvider) -> None:
        if name in self._providers:
            raise ValueError(f"Provider '{name}' already registered")
        self._providers[name] = provider

    def get(self, name: str) -> ForecastProvider:
        try:
            return self._providers[name]
        except KeyError as exc:
            raise KeyError(f"Provider '{name}' is not registered") from exc

    def list(self) -> List[str]:
        return list(self._providers.keys())

    def providers(self) -> List[ForecastProvider]:
        return list(self._providers.values())

    def __len__(self) -> int:
        return len(self._providers)
