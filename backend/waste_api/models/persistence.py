from __future__ import annotations

import json
import logging
import threading
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from waste_api.models.schemas import WasteBin

LOGGER = logging.getLogger(__name__)


class JsonFileGateway:
    """Mirrors the bin store to a single JSON document on disk.

    Every save overwrites the whole file. Failures are logged and reported
    through return values, never raised to the caller.
    """

    def __init__(self, data_file: Path):
        self.data_file = data_file
        self._lock = threading.Lock()

    def save(self, bins: Iterable[WasteBin]) -> bool:
        payload = [item.to_json() for item in bins]
        with self._lock:
            try:
                self.data_file.parent.mkdir(parents=True, exist_ok=True)
                self.data_file.write_text(json.dumps(payload, indent=4), encoding="utf-8")
            except (OSError, TypeError, ValueError):
                LOGGER.exception("Error saving data to %s", self.data_file)
                return False
        LOGGER.debug("Saved %d bins to %s", len(payload), self.data_file)
        return True

    def load(self) -> list[WasteBin]:
        with self._lock:
            if not self.data_file.exists():
                LOGGER.info("Data file %s not found, starting with an empty store", self.data_file)
                return []
            try:
                raw = json.loads(self.data_file.read_text(encoding="utf-8"))
                if not isinstance(raw, list):
                    raise ValueError(f"expected a JSON array, got {type(raw).__name__}")
                bins = [WasteBin.model_validate(item, strict=True) for item in raw]
            except (OSError, ValueError, ValidationError):
                LOGGER.exception("Error loading data from %s, starting with an empty store", self.data_file)
                return []

        LOGGER.info("Loaded %d bins from %s", len(bins), self.data_file)
        return bins
