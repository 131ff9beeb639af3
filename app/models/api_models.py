"""
API Request/Response Models — public contract of the release endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from app.models.release_models import Release, ReleaseMetrics, ReleaseRisk, Repository


class Pagination(BaseModel):
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    has_more: bool


class CoverageTrend(BaseModel):
    """Coverage movement between the two most recent releases."""

    direction: Literal["up", "down", "stable"] = "stable"
    change: float = Field(default=0.0, description="Percentage-point change")


class LatestReleaseResponse(BaseModel):
    release: Release
    risks: list[ReleaseRisk] = Field(default_factory=list)
    metrics: ReleaseMetrics


class ReleasesListResponse(BaseModel):
    releases: list[Release] = Field(default_factory=list)
    pagination: Pagination
    trend: CoverageTrend = Field(default_factory=CoverageTrend)


class ReleaseDetailResponse(BaseModel):
    release: Release
    risks: list[ReleaseRisk] = Field(default_factory=list)
    repository: Repository | None = None
    metrics: ReleaseMetrics


class IngestionResponse(BaseModel):
    """Response for a successfully ingested coverage webhook."""

    message: str = "release_created"
    release_id: str
    release_number: str
    risk_score: float
    risk_count: int
    metrics: ReleaseMetrics


class WebhookLogEntry(BaseModel):
    """One webhook delivery, as written to the delivery log."""

    id: str
    event_type: str
    delivery_id: str | None = None
    signature: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)
    processed: bool = False
    success: bool = False
    error_message: str | None = None
    release_id: str | None = None
    created_at: datetime | None = None
