from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from waste_api.models.persistence import JsonFileGateway
from waste_api.models.schemas import BinUpdate, WasteBin, clamp_fill_level, utc_timestamp
from waste_api.sensors.simulator import (
    DEFAULT_COLLECTION_THRESHOLD,
    RandomSource,
    apply_reading,
    build_random_source,
)

LOGGER = logging.getLogger(__name__)


class BinStore:
    """Ordered in-memory collection of bins, mirrored to disk on every mutation.

    All public methods hold one re-entrant lock for their whole duration, and
    mutations save through the gateway inside that same critical section.
    Records handed out are copies, so callers never observe a store mid-update.
    """

    def __init__(
        self,
        gateway: JsonFileGateway,
        *,
        rng: RandomSource | None = None,
        collection_threshold: int = DEFAULT_COLLECTION_THRESHOLD,
    ) -> None:
        self.gateway = gateway
        self.rng = rng or build_random_source()
        self.collection_threshold = collection_threshold
        self._lock = threading.RLock()
        self._bins: list[WasteBin] = []
        self._next_id = 1

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    def __len__(self) -> int:
        with self._lock:
            return len(self._bins)

    def _find(self, bin_id: int) -> WasteBin | None:
        for item in self._bins:
            if item.id == bin_id:
                return item
        return None

    def _persist(self) -> bool:
        return self.gateway.save(self._bins)

    def _replace(self, bins: Iterable[WasteBin]) -> None:
        self._bins = list(bins)
        self._next_id = max((item.id for item in self._bins), default=0) + 1

    def reload(self) -> int:
        with self._lock:
            self._replace(self.gateway.load())
            return len(self._bins)

    def flush(self) -> bool:
        with self._lock:
            return self._persist()

    def list(self) -> list[WasteBin]:
        with self._lock:
            return [item.model_copy() for item in self._bins]

    def get(self, bin_id: int) -> WasteBin | None:
        with self._lock:
            item = self._find(bin_id)
            return item.model_copy() if item else None

    def create(self, location: str) -> WasteBin:
        return self.create_many([location])[0]

    def create_many(self, locations: Iterable[str]) -> list[WasteBin]:
        with self._lock:
            created: list[WasteBin] = []
            for location in locations:
                item = WasteBin(
                    id=self._next_id,
                    location=location,
                    fill_level=0,
                    needs_collection=False,
                    last_updated=utc_timestamp(),
                )
                self._next_id += 1
                self._bins.append(item)
                created.append(item.model_copy())

            self._persist()
            LOGGER.info("Created %d bins", len(created))
            return created

    def update(self, bin_id: int, changes: BinUpdate) -> WasteBin | None:
        with self._lock:
            item = self._find(bin_id)
            if item is None:
                return None

            if changes.location is not None:
                item.location = changes.location
            if changes.fill_level is not None:
                item.fill_level = clamp_fill_level(changes.fill_level)
            if changes.needs_collection is not None:
                item.needs_collection = changes.needs_collection
            item.last_updated = utc_timestamp()

            self._persist()
            return item.model_copy()

    def delete(self, bin_id: int) -> bool:
        with self._lock:
            item = self._find(bin_id)
            if item is None:
                return False
            self._bins.remove(item)
            self._persist()
            LOGGER.info("Deleted bin %d", bin_id)
            return True

    def simulate_sensor_reading(self) -> list[WasteBin] | None:
        """Draw a fresh reading for every bin. Returns `None` if there are no bins."""
        with self._lock:
            if not self._bins:
                return None

            for item in self._bins:
                apply_reading(
                    item,
                    self.rng,
                    timestamp=utc_timestamp(),
                    threshold=self.collection_threshold,
                )

            self._persist()
            LOGGER.info("Simulated sensor readings for %d bins", len(self._bins))
            return [item.model_copy() for item in self._bins]
