"""
Tests for serving-path metrics and coverage trend.
"""

from app.core.metrics import build_release_metrics, compute_coverage_trend
from app.models.enums import RiskLevel
from app.models.release_models import Release


def _release(coverage=87.5, **overrides):
    fields = {
        "id": "rel-1",
        "repo_id": "repo-1",
        "release_number": "v1.0.0",
        "coverage_percent": coverage,
        "pass_count": 245,
        "fail_count": 8,
        "total_tests": 253,
        "risk_score": 15.0,
        "release_confidence": 90.04,
        "risk_level": RiskLevel.MEDIUM,
        "time_to_ship_minutes": 105,
    }
    fields.update(overrides)
    return Release(**fields)


def test_build_release_metrics():
    metrics = build_release_metrics(_release())
    assert metrics.release_confidence == 90.04
    assert metrics.test_coverage == 87.5
    assert metrics.risk_level == RiskLevel.MEDIUM
    assert metrics.time_to_ship == "1h 45m"
    assert metrics.pass_rate == 96.84
    assert metrics.total_tests == 253
    assert metrics.failed_tests == 8


def test_metrics_without_total_tests():
    metrics = build_release_metrics(_release(total_tests=None))
    assert metrics.pass_rate == 0.0
    assert metrics.total_tests == 253


def test_trend_needs_two_releases():
    trend = compute_coverage_trend([_release()])
    assert trend.direction == "stable"
    assert trend.change == 0.0


def test_trend_up_and_down():
    up = compute_coverage_trend([_release(90.0), _release(85.5)])
    assert (up.direction, up.change) == ("up", 4.5)

    down = compute_coverage_trend([_release(80.0), _release(85.25)])
    assert (down.direction, down.change) == ("down", -5.25)


def test_small_change_is_stable():
    trend = compute_coverage_trend([_release(85.9), _release(85.0)])
    assert trend.direction == "stable"
    assert trend.change == 0.9


def test_custom_stable_threshold():
    trend = compute_coverage_trend([_release(85.9), _release(85.0)], stable_threshold=0.5)
    assert trend.direction == "up"
