from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

FILL_LEVEL_MIN = 0
FILL_LEVEL_MAX = 100


def utc_timestamp() -> str:
    """Current UTC time as `YYYY-MM-DDTHH:MM:SS.mmmZ`."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def clamp_fill_level(value: int) -> int:
    return max(FILL_LEVEL_MIN, min(FILL_LEVEL_MAX, int(value)))


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class WasteBin(_CamelModel):
    id: int
    location: str
    fill_level: int = Field(alias="fillLevel")
    needs_collection: bool = Field(alias="needsCollection")
    last_updated: str = Field(alias="lastUpdated")

    @field_validator("fill_level")
    @classmethod
    def _clamp(cls, value: int) -> int:
        return clamp_fill_level(value)

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)


class RouteStop(_CamelModel):
    id: int
    location: str
    fill_level: int = Field(alias="fillLevel")
    last_updated: str = Field(alias="lastUpdated")


class RoutePlan(_CamelModel):
    bins_to_collect: int = Field(alias="binsToCollect")
    route: list[RouteStop]


class FillLevelDistribution(BaseModel):
    low: int = 0
    medium: int = 0
    high: int = 0
    critical: int = 0


class DashboardStats(_CamelModel):
    total_bins: int = Field(alias="totalBins")
    bins_needing_collection: int = Field(alias="binsNeedingCollection")
    average_fill_level: float = Field(alias="averageFillLevel")
    fill_level_distribution: FillLevelDistribution = Field(alias="fillLevelDistribution")


class BinUpdate(BaseModel):
    """Fields accepted by a partial update. `None` means "leave unchanged"."""

    location: str | None = None
    fill_level: int | None = None
    needs_collection: bool | None = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    version: str
