from __future__ import annotations

from typing import Protocol

from forecaster.domain.models import Forecast, Position
from forecaster.errors import ProviderError

DEFAULT_TIMEOUT = 10.0


class ForecastProvider(Protocol):
    """Contract for daily forecast providers."""

    async def fetch(self, position: Position) -> Forecast:
        """Return five daily mean temperatures (Celsius) starting today.

        Implementations either return a complete forecast or raise
        ``ProviderError`` chained to the original failure.
        """
        raise NotImplementedError


__all__ = ["DEFAULT_TIMEOUT", "ForecastProvider", "ProviderError"]
