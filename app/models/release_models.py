"""
Release Data Models — Feature coverage, risk items, stored releases,
and the CI webhook payload.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.core.classifiers import classify_feature_status
from app.models.enums import FeatureStatus, RiskItemLevel, RiskLevel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FeatureCoverage(BaseModel):
    """Coverage of one feature/module. ``status`` is always derived from ``coverage``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1, description="Display label")
    coverage: float = Field(..., description="Coverage percentage (0-100)")
    status: FeatureStatus
    test_count: int | None = Field(default=None, ge=0, alias="testCount")
    lines_covered: int | None = Field(default=None, ge=0, alias="linesCovered")
    total_lines: int | None = Field(default=None, ge=0, alias="totalLines")

    @model_validator(mode="before")
    @classmethod
    def _derive_status(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "coverage" not in data:
            return data
        try:
            coverage = float(data["coverage"])
        except (TypeError, ValueError):
            return data  # field validation reports the bad coverage
        return {**data, "status": classify_feature_status(coverage)}


class RiskItem(BaseModel):
    """A single generated risk finding."""

    risk_name: str
    risk_level: RiskItemLevel
    severity: int = Field(..., ge=1, le=10, description="1-10, higher is more urgent")
    description: str
    affected_feature: str | None = None
    recommendation: str | None = None


class ReleaseRisk(RiskItem):
    """A risk item as persisted against a release."""

    id: str
    release_id: str
    auto_generated: bool = True
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Repository(BaseModel):
    """A CI repository that reports releases."""

    id: str
    repo_id: str = Field(..., description="Repository id on the CI side")
    repo_name: str
    owner: str
    full_name: str
    default_branch: str = "main"
    is_active: bool = True
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Release(BaseModel):
    """A stored release with its precomputed metrics."""

    id: str
    repo_id: str

    release_number: str
    commit_sha: str | None = None
    branch: str | None = None
    workflow_run_id: str | None = None

    coverage_percent: float
    pass_count: int = Field(default=0, ge=0)
    fail_count: int = Field(default=0, ge=0)
    total_tests: int | None = Field(default=None, ge=0)

    risk_score: float = Field(..., ge=0, le=100)
    release_confidence: float = Field(..., ge=0, le=100)
    risk_level: RiskLevel
    time_to_ship_minutes: int

    features: list[FeatureCoverage] = Field(default_factory=list)
    raw_data: dict[str, Any] | None = None

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    repo_name: str | None = None
    owner: str | None = None
    full_name: str | None = None


class ReleaseMetrics(BaseModel):
    """Dashboard view of a release's metrics."""

    release_confidence: float
    test_coverage: float
    risk_level: RiskLevel
    time_to_ship: str
    pass_rate: float = 0.0
    total_tests: int = 0
    failed_tests: int = 0


# ── Webhook input ──


class CoverageData(BaseModel):
    """
    Raw coverage report from CI.

    Every field is left untyped: junk values (Istanbul's ``"pct": "Unknown"``,
    a list where a map belongs) must reach the parser, which treats them as
    zero coverage instead of rejecting the release.
    """

    model_config = ConfigDict(extra="allow")

    total: Any = 0.0
    lines: Any = None
    statements: Any = None
    functions: Any = None
    branches: Any = None
    files: Any = None
    features: Any = None

    @model_validator(mode="before")
    @classmethod
    def _ignore_non_mapping(cls, data: Any) -> Any:
        return data if isinstance(data, dict) else {}


class SuiteResult(BaseModel):
    name: str
    tests: int = 0
    passed: int = 0
    failed: int = 0


class TestResults(BaseModel):
    """Test run summary from CI."""

    total: int = Field(default=0, ge=0)
    passed: int = Field(default=0, ge=0)
    failed: int = Field(default=0, ge=0)
    skipped: int = Field(default=0, ge=0)
    duration: float | None = Field(default=None, description="Duration in milliseconds")
    suites: list[SuiteResult] | None = None


class WebhookRepository(BaseModel):
    id: int | str
    name: str
    owner: str
    full_name: str


class WebhookRelease(BaseModel):
    number: str
    commit_sha: str | None = None
    branch: str | None = None
    workflow_run_id: str | None = None


class CoverageWebhookPayload(BaseModel):
    """Body of POST /webhook/coverage, sent by the CI workflow."""

    repository: WebhookRepository
    release: WebhookRelease
    coverage: CoverageData = Field(default_factory=CoverageData)
    tests: TestResults = Field(default_factory=TestResults)
    features: Any = Field(
        default=None, description="Optional pre-aggregated feature breakdown"
    )
    timestamp: str | None = None
