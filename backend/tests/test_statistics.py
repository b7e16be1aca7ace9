import random

import pytest

from waste_api.analytics.statistics import compute_route, compute_stats, fill_bucket
from waste_api.models.schemas import WasteBin


def _bin(bin_id: int, fill_level: int, needs_collection: bool = False) -> WasteBin:
    return WasteBin(
        id=bin_id,
        location=f"Street {bin_id}",
        fill_level=fill_level,
        needs_collection=needs_collection,
        last_updated="2024-05-01T12:30:45.123Z",
    )


@pytest.mark.parametrize(
    ("level", "bucket"),
    [(0, "low"), (24, "low"), (25, "medium"), (49, "medium"), (50, "high"), (74, "high"), (75, "critical"), (100, "critical")],
)
def test_fill_bucket_boundaries(level: int, bucket: str) -> None:
    assert fill_bucket(level) == bucket


def test_stats_for_empty_store() -> None:
    stats = compute_stats([])
    assert stats.total_bins == 0
    assert stats.average_fill_level == 0.0
    assert stats.fill_level_distribution.model_dump() == {"low": 0, "medium": 0, "high": 0, "critical": 0}


def test_stats_example() -> None:
    bins = [_bin(1, 10), _bin(2, 30), _bin(3, 60), _bin(4, 90, True)]
    stats = compute_stats(bins)
    assert stats.total_bins == 4
    assert stats.bins_needing_collection == 1
    assert stats.average_fill_level == 47.5
    assert stats.fill_level_distribution.model_dump() == {"low": 1, "medium": 1, "high": 1, "critical": 1}


def test_stats_average_rounds_to_one_decimal() -> None:
    stats = compute_stats([_bin(1, 10), _bin(2, 10), _bin(3, 11)])
    assert stats.average_fill_level == 10.3


def test_bucket_counts_sum_to_total() -> None:
    rng = random.Random(7)
    bins = [_bin(idx, rng.randint(0, 100)) for idx in range(1, 200)]
    stats = compute_stats(bins)
    assert sum(stats.fill_level_distribution.model_dump().values()) == stats.total_bins == 199


def test_route_filters_and_sorts_descending() -> None:
    bins = [
        _bin(1, 80, True),
        _bin(2, 99, False),
        _bin(3, 95, True),
        _bin(4, 80, True),
        _bin(5, 20, True),
    ]
    plan = compute_route(bins)
    assert plan.bins_to_collect == 4
    # Equal fill levels keep store order (1 before 4).
    assert [stop.id for stop in plan.route] == [3, 1, 4, 5]


def test_route_empty_when_nothing_flagged() -> None:
    plan = compute_route([_bin(1, 100, False)])
    assert plan.bins_to_collect == 0
    assert plan.route == []


def test_route_serializes_with_wire_names() -> None:
    plan = compute_route([_bin(1, 80, True)])
    assert plan.model_dump(by_alias=True) == {
        "binsToCollect": 1,
        "route": [
            {"id": 1, "location": "Street 1", "fillLevel": 80, "lastUpdated": "2024-05-01T12:30:45.123Z"}
        ],
    }
