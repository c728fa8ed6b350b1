from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncIterator, Dict, List, Optional, Tuple

from forecaster.domain.models import CacheEntry, Forecast, Position

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]
Bucket = List[Tuple[Position, CacheEntry]]


class ReadWriteLock:
    """asyncio shared-read / exclusive-write lock.

    Waiting writers block new readers so a steady stream of lookups cannot
    starve a store.
    """

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(lambda: not self._writer and not self._waiting_writers)
            self._readers += 1
        try:
            yield
        finally:
            async with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._cond:
            self._waiting_writers += 1
            try:
                await self._cond.wait_for(lambda: not self._writer and not self._readers)
            finally:
                self._waiting_writers -= 1
                self._cond.notify_all()
            self._writer = True
        try:
            yield
        finally:
            async with self._cond:
                self._writer = False
                self._cond.notify_all()

    @property
    def readers(self) -> int:
        """Number of readers holding the lock; diagnostic hook only."""
        return self._readers

    @property
    def writing(self) -> bool:
        """Whether a writer holds the lock; diagnostic hook only."""
        return self._writer


class ForecastCache:
    """In-memory forecast cache keyed by position, valid for one calendar day.

    Entries are filed under the position's grid cell. An epsilon-close
    position may fall in a neighbouring cell, so both lookup and store scan
    the 3x3 block around the cell and match with ``Position.__eq__``.

    Stale entries are never purged; they are ignored on lookup and replaced
    by the next store for the same position.
    """

    def __init__(self) -> None:
        self._cells: Dict[Cell, Bucket] = {}
        self._lock = ReadWriteLock()

    def _slot(self, position: Position) -> Optional[Tuple[Bucket, int]]:
        lat_cell, lon_cell = position.cell()
        for d_lat in (0, -1, 1):
            for d_lon in (0, -1, 1):
                bucket = self._cells.get((lat_cell + d_lat, lon_cell + d_lon), [])
                for index, (stored, _) in enumerate(bucket):
                    if stored == position:
                        return bucket, index
        return None

    async def lookup(self, position: Position, today: date) -> Optional[Forecast]:
        async with self._lock.read():
            slot = self._slot(position)
            if slot is None:
                return None
            bucket, index = slot
            entry = bucket[index][1]
        if entry.computed_day != today:
            logger.debug("stale cache entry for %s computed on %s", position, entry.computed_day)
            return None
        return entry.forecast

    async def store(self, position: Position, today: date, forecast: Forecast) -> None:
        entry = CacheEntry(computed_day=today, forecast=tuple(forecast))
        async with self._lock.write():
            slot = self._slot(position)
            if slot is None:
                self._cells.setdefault(position.cell(), []).append((position, entry))
            else:
                bucket, index = slot
                bucket[index] = (bucket[index][0], entry)

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._cells.values())
