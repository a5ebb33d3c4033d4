"""
Statistics Schemas.

Most statistics endpoints return open-ended payloads that are passed through
as JSON; only the percentile and sum responses are modelled.
"""

from enum import Enum

from pydantic import BaseModel, Field


class StatType(str, Enum):
    """Statistic types for the time series endpoints."""

    BANDWIDTH = "bandwidth"
    COSTS = "costs"
    HEADERS = "headers"
    HEADERS_DETAIL = "headers-detail"
    HIT_MISS = "hit-miss"
    HIT_MISS_DETAIL = "hit-miss-detail"
    TRAFFIC = "traffic"
    TRAFFIC_DETAIL = "traffic-detail"


class SumStatType(str, Enum):
    """Statistic types accepted by the sum endpoints."""

    HEADERS = "headers"
    TRAFFIC = "traffic"
    HIT_MISS = "hit-miss"
    COSTS = "costs"


class StatsSumRequest(BaseModel):
    """Body shared by the sum and percentile endpoints."""

    from_: int = Field(serialization_alias="from", description="Start as epoch seconds")
    to: int = Field(description="End as epoch seconds")
    cdn_ids: list[int] | None = None
    location_ids: list[str] | None = None

    def to_payload(self) -> dict:
        """Serialize for the API, omitting unset filters."""
        return self.model_dump(by_alias=True, exclude_none=True)


class StatsRequest(StatsSumRequest):
    """Body of the time series endpoints."""

    aggregation: str | None = None


class PercentileResponse(BaseModel):
    """Response of POST /stats/bandwidth/percentile."""

    percentile: int | float


class SumResponse(BaseModel):
    """Response of the POST /stats/sum/{type} endpoint."""

    sum: int | float
