"""
Risk Scoring Engine — Combines coverage deficit, test failures and
feature-coverage spread into a single 0-100 risk score.

    risk = coverage_term + failure_term + variance_term

    coverage_term = max(0, 100 - coverage) × 0.4           (0-40)
    failure_term  = failed / total × 100 × 0.3             (0-30, 0 when total == 0)
    variance_term = min(30, stddev(feature coverages) × 0.3)

The result is clamped to [0, 100] and rounded to 2 places. Low *and* uneven
coverage both push the score up.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from app.models.release_models import FeatureCoverage

COVERAGE_WEIGHT = 0.4
FAILURE_WEIGHT = 0.3
VARIANCE_WEIGHT = 0.3
VARIANCE_CAP = 30.0


def calculate_risk_score(
    coverage: float,
    failed_tests: int,
    total_tests: int,
    features: Sequence[FeatureCoverage] = (),
) -> float:
    """
    Compute the release risk score (higher = riskier).

    Args:
        coverage: Overall coverage percentage.
        failed_tests: Number of failing tests.
        total_tests: Number of tests run. Zero disables the failure term.
        features: Per-feature coverage. Empty disables the variance term.

    Returns:
        Risk score in [0, 100], rounded to 2 decimals.
    """
    score = max(0.0, 100 - coverage) * COVERAGE_WEIGHT

    if total_tests > 0:
        failure_rate = failed_tests / total_tests * 100
        score += failure_rate * FAILURE_WEIGHT

    if features:
        score += min(VARIANCE_CAP, coverage_std_dev(features) * VARIANCE_WEIGHT)

    return max(0.0, min(100.0, round(score, 2)))


def coverage_std_dev(features: Sequence[FeatureCoverage]) -> float:
    """Population standard deviation of feature coverage (divides by N)."""
    if not features:
        return 0.0
    values = [f.coverage for f in features]
    mean = sum(values) / len(values)
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    return math.sqrt(variance)
