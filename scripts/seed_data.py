#!/usr/bin/env python3
from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "backend"))

from waste_api.config import load_config
from waste_api.models.persistence import JsonFileGateway
from waste_api.models.schemas import WasteBin, utc_timestamp
from waste_api.sensors.simulator import needs_collection

STREETS: list[str] = [
    "Main St",
    "Forbes Ave",
    "Fifth Ave",
    "Craig St",
    "Murray Ave",
    "Liberty Ave",
    "Penn Ave",
    "Butler St",
]


def generate_bins(count: int, *, seed: str, threshold: int) -> list[WasteBin]:
    rng = random.Random(seed)
    timestamp = utc_timestamp()
    bins: list[WasteBin] = []
    for bin_id in range(1, count + 1):
        street = STREETS[(bin_id - 1) % len(STREETS)]
        block = rng.randint(1, 40) * 100
        fill_level = rng.randint(0, 100)
        bins.append(
            WasteBin(
                id=bin_id,
                location=f"{block} {street}",
                fill_level=fill_level,
                needs_collection=needs_collection(fill_level, threshold),
                last_updated=timestamp,
            )
        )
    return bins


def main() -> None:
    parser = argparse.ArgumentParser(description="Write a set of demo bins to the configured data file")
    parser.add_argument("--count", type=int, default=12)
    parser.add_argument("--seed", type=str, default="waste-api")
    parser.add_argument(
        "--data-file",
        type=Path,
        default=None,
        help="Override the data file from config/settings.yaml",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing data file",
    )
    args = parser.parse_args()

    config = load_config(ROOT / "config")
    data_file = args.data_file or config.storage.data_file
    if data_file.exists() and not args.force:
        print(f"{data_file} already exists, pass --force to overwrite", file=sys.stderr)
        raise SystemExit(1)

    bins = generate_bins(args.count, seed=args.seed, threshold=config.sensors.collection_threshold)
    if not JsonFileGateway(data_file).save(bins):
        raise SystemExit(1)
    print(f"Wrote {len(bins)} bins into {data_file}")


if __name__ == "__main__":
    main()
