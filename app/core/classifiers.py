"""
Bucketing rules for coverage values.

Both classifiers treat a boundary value as belonging to the higher bucket:
95 is excellent, 70 is High rather than Critical.
"""

from __future__ import annotations

from app.core.validation import require_percentage
from app.models.enums import FeatureStatus, RiskLevel

# (lower bound, status) checked top-down
FEATURE_STATUS_THRESHOLDS: tuple[tuple[float, FeatureStatus], ...] = (
    (95.0, FeatureStatus.EXCELLENT),
    (80.0, FeatureStatus.GOOD),
    (60.0, FeatureStatus.WARNING),
)

# (exclusive upper bound, level) checked bottom-up
RISK_LEVEL_THRESHOLDS: tuple[tuple[float, RiskLevel], ...] = (
    (70.0, RiskLevel.CRITICAL),
    (85.0, RiskLevel.HIGH),
    (90.0, RiskLevel.MEDIUM),
)


def classify_feature_status(coverage: float) -> FeatureStatus:
    """Map a feature's coverage percentage to its status bucket.

    The value is not range-checked; anything below 60 (including negatives)
    is ``danger``.
    """
    for lower, status in FEATURE_STATUS_THRESHOLDS:
        if coverage >= lower:
            return status
    return FeatureStatus.DANGER


def calculate_risk_level(coverage: float) -> RiskLevel:
    """
    Map overall coverage to a release risk level.

        Critical  < 70
        High      70 – <85
        Medium    85 – <90
        Low       >= 90

    Raises:
        MetricValidationError: if coverage is outside [0, 100].
    """
    require_percentage("coverage", coverage)
    for upper, level in RISK_LEVEL_THRESHOLDS:
        if coverage < upper:
            return level
    return RiskLevel.LOW
