from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterable, Optional

from .models import Position

DEFAULT_CITIES_PATH = Path(__file__).resolve().parents[1] / "data" / "cities.json"


class CityCatalog:
    """Read-only (country, city) -> Position lookup.

    Country codes match exactly, city names case-insensitively.
    """

    def __init__(self, records: Iterable[dict]) -> None:
        self._cities: Dict[str, Dict[str, Position]] = {}
        for record in records:
            country = self._cities.setdefault(record["country"], {})
            country[record["name"].lower()] = Position(float(record["lat"]), float(record["lng"]))

    @classmethod
    def from_json(cls, path: Optional[Path] = None) -> "CityCatalog":
        path = Path(path) if path else DEFAULT_CITIES_PATH
        return cls(json.loads(path.read_text(encoding="utf-8")))

    def find(self, country: str, city: str) -> Optional[Position]:
        cities = self._cities.get(country)
        if cities is None:
            return None
        return cities.get(city.lower())

    def __len__(self) -> int:
        return sum(len(cities) for cities in self._cities.values())
