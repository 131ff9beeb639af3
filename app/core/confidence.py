"""
Release Confidence — Weighted readiness score.

    confidence = coverage × 0.6 + pass_rate × 0.3 + (100 - risk_score) × 0.1
"""

from __future__ import annotations

from app.core.validation import require_percentage

CONFIDENCE_WEIGHTS: dict[str, float] = {
    "coverage": 0.6,
    "pass_rate": 0.3,
    "risk_adjustment": 0.1,
}


def calculate_release_confidence(coverage: float, pass_rate: float, risk_score: float) -> float:
    """
    Compute release confidence (0-100, rounded to 2 decimals).

    Raises:
        MetricValidationError: if any argument is outside [0, 100].
    """
    require_percentage("coverage", coverage)
    require_percentage("pass_rate", pass_rate)
    require_percentage("risk_score", risk_score)

    confidence = (
        coverage * CONFIDENCE_WEIGHTS["coverage"]
        + pass_rate * CONFIDENCE_WEIGHTS["pass_rate"]
        + (100 - risk_score) * CONFIDENCE_WEIGHTS["risk_adjustment"]
    )
    return round(confidence, 2)


def calculate_pass_rate(passed: int, total: int) -> float:
    """Percentage of passing tests, 0 when nothing ran."""
    if total <= 0:
        return 0.0
    return round(passed / total * 100, 2)
