from __future__ import annotations

import math
from collections.abc import Sequence

from waste_api.models.schemas import (
    DashboardStats,
    FillLevelDistribution,
    RoutePlan,
    RouteStop,
    WasteBin,
)

# Upper bounds (exclusive) of each bucket; anything at or above the last is critical.
BUCKET_BOUNDS: tuple[tuple[str, int], ...] = (
    ("low", 25),
    ("medium", 50),
    ("high", 75),
)


def _round_half_up(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


def fill_bucket(fill_level: int) -> str:
    for name, upper in BUCKET_BOUNDS:
        if fill_level < upper:
            return name
    return "critical"


def compute_route(bins: Sequence[WasteBin]) -> RoutePlan:
    # sorted() is stable, so equal fill levels keep store order.
    pending = sorted(
        (item for item in bins if item.needs_collection),
        key=lambda item: item.fill_level,
        reverse=True,
    )
    route = [
        RouteStop(
            id=item.id,
            location=item.location,
            fill_level=item.fill_level,
            last_updated=item.last_updated,
        )
        for item in pending
    ]
    return RoutePlan(bins_to_collect=len(route), route=route)


def compute_stats(bins: Sequence[WasteBin]) -> DashboardStats:
    distribution = FillLevelDistribution()
    total_fill = 0
    needing_collection = 0

    for item in bins:
        total_fill += item.fill_level
        if item.needs_collection:
            needing_collection += 1
        bucket = fill_bucket(item.fill_level)
        setattr(distribution, bucket, getattr(distribution, bucket) + 1)

    average = _round_half_up(total_fill / len(bins)) if bins else 0.0

    return DashboardStats(
        total_bins=len(bins),
        bins_needing_collection=needing_collection,
        average_fill_level=average,
        fill_level_distribution=distribution,
    )
