from __future__ import annotations

import random
from typing import Protocol

from waste_api.models.schemas import FILL_LEVEL_MAX, FILL_LEVEL_MIN, WasteBin, clamp_fill_level

DEFAULT_COLLECTION_THRESHOLD = 75


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


def build_random_source(seed: int | None = None) -> RandomSource:
    return random.Random(seed)


def needs_collection(fill_level: int, threshold: int = DEFAULT_COLLECTION_THRESHOLD) -> bool:
    return fill_level >= threshold


def apply_reading(
    item: WasteBin,
    rng: RandomSource,
    *,
    timestamp: str,
    threshold: int = DEFAULT_COLLECTION_THRESHOLD,
) -> WasteBin:
    """Overwrite a bin's fill state with one simulated sensor reading."""
    item.fill_level = clamp_fill_level(rng.randint(FILL_LEVEL_MIN, FILL_LEVEL_MAX))
    item.needs_collection = needs_collection(item.fill_level, threshold)
    item.last_updated = timestamp
    return item
