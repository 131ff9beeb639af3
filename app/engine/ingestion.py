"""
Ingestion Pipeline — Turns a CI coverage webhook into a stored release.

Pipeline:
1. Resolve features (explicit payload features, else parse the coverage report)
2. Resolve overall coverage and test counts
3. Risk score
4. Risk level
5. Release confidence
6. Time-to-ship
7. Risk items
8. Persist repository + release + risk items

A MetricValidationError from steps 4-6 aborts the pipeline before anything
is persisted.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from app.core.classifiers import calculate_risk_level
from app.core.confidence import calculate_pass_rate, calculate_release_confidence
from app.core.feature_coverage import coerce_percentage, parse_feature_coverage
from app.core.risk_items import generate_risk_items
from app.core.risk_scorer import calculate_risk_score
from app.core.time_to_ship import estimate_time_to_ship_minutes, format_minutes_to_time
from app.models.release_models import (
    CoverageData,
    CoverageWebhookPayload,
    FeatureCoverage,
    ReleaseMetrics,
    RiskItem,
    TestResults,
)
from app.store.release_store import ReleaseStore, StoredRelease

logger = logging.getLogger("release_confidence.ingestion")


@dataclass
class ReleaseEvaluation:
    """Everything computed for one release, before persistence."""

    coverage: float
    pass_count: int
    fail_count: int
    total_tests: int
    risk_score: float
    time_to_ship_minutes: int
    metrics: ReleaseMetrics
    features: list[FeatureCoverage] = field(default_factory=list)
    risk_items: list[RiskItem] = field(default_factory=list)


def resolve_coverage(coverage: CoverageData) -> float:
    """Overall coverage: ``total``, else lines pct, else statements pct, else 0."""
    total = coerce_percentage(coverage.total)
    if total:
        return total
    for summary in (coverage.lines, coverage.statements):
        if isinstance(summary, Mapping):
            pct = coerce_percentage(summary.get("pct"))
            if pct:
                return pct
    return 0.0


def resolve_total_tests(tests: TestResults) -> int:
    return tests.total or tests.passed + tests.failed


def resolve_features(payload: CoverageWebhookPayload) -> list[FeatureCoverage]:
    """Explicit payload features win over the coverage report's own breakdown."""
    if isinstance(payload.features, list) and payload.features:
        return parse_feature_coverage({"features": payload.features})
    return parse_feature_coverage(payload.coverage.model_dump(exclude_none=True))


class IngestionPipeline:
    """Computes release metrics from webhook payloads and persists them."""

    def __init__(self, store: ReleaseStore | None = None) -> None:
        self.store = store or ReleaseStore()

    def evaluate(self, payload: CoverageWebhookPayload) -> ReleaseEvaluation:
        """
        Run the metrics engine over a payload without storing anything.

        Raises:
            MetricValidationError: if coverage or a derived score is out of range.
        """
        features = resolve_features(payload)
        coverage = resolve_coverage(payload.coverage)
        tests = payload.tests
        total_tests = resolve_total_tests(tests)
        pass_rate = calculate_pass_rate(tests.passed, total_tests)

        risk_score = calculate_risk_score(coverage, tests.failed, total_tests, features)
        risk_level = calculate_risk_level(coverage)
        confidence = calculate_release_confidence(coverage, pass_rate, risk_score)
        minutes = estimate_time_to_ship_minutes(coverage, risk_score)
        risk_items = generate_risk_items(coverage, tests.failed, features)

        metrics = ReleaseMetrics(
            release_confidence=confidence,
            test_coverage=coverage,
            risk_level=risk_level,
            time_to_ship=format_minutes_to_time(minutes),
            pass_rate=pass_rate,
            total_tests=total_tests,
            failed_tests=tests.failed,
        )

        return ReleaseEvaluation(
            coverage=coverage,
            pass_count=tests.passed,
            fail_count=tests.failed,
            total_tests=total_tests,
            risk_score=risk_score,
            time_to_ship_minutes=minutes,
            metrics=metrics,
            features=features,
            risk_items=risk_items,
        )

    def ingest(self, payload: CoverageWebhookPayload) -> tuple[StoredRelease, ReleaseEvaluation]:
        """Evaluate a payload and persist the resulting release."""
        release_number = payload.release.number
        logger.info(
            f"[{release_number}] Ingesting release for {payload.repository.full_name}"
        )

        evaluation = self.evaluate(payload)

        repository = self.store.upsert_repository(
            repo_id=str(payload.repository.id),
            repo_name=payload.repository.name,
            owner=payload.repository.owner,
            full_name=payload.repository.full_name,
        )
        stored = self.store.add_release(
            repository,
            {
                "release_number": release_number,
                "commit_sha": payload.release.commit_sha,
                "branch": payload.release.branch,
                "workflow_run_id": payload.release.workflow_run_id,
                "coverage_percent": evaluation.coverage,
                "pass_count": evaluation.pass_count,
                "fail_count": evaluation.fail_count,
                "total_tests": evaluation.total_tests,
                "risk_score": evaluation.risk_score,
                "release_confidence": evaluation.metrics.release_confidence,
                "risk_level": evaluation.metrics.risk_level,
                "time_to_ship_minutes": evaluation.time_to_ship_minutes,
                "features": evaluation.features,
                "raw_data": {
                    "coverage": payload.coverage.model_dump(exclude_none=True),
                    "tests": payload.tests.model_dump(exclude_none=True),
                },
            },
            evaluation.risk_items,
        )

        logger.info(
            f"[{release_number}] Stored release {stored.release.id}: "
            f"coverage={evaluation.coverage:.1f}% risk={evaluation.risk_score} "
            f"confidence={evaluation.metrics.release_confidence} "
            f"level={evaluation.metrics.risk_level.value} risks={len(stored.risks)}"
        )
        return stored, evaluation
