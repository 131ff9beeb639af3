"""
Serving-path views over stored releases.

Nothing here recomputes scores; values precomputed at ingestion are only
reformatted for responses.
"""

from __future__ import annotations

from collections.abc import Sequence

from app.core.confidence import calculate_pass_rate
from app.core.time_to_ship import format_minutes_to_time
from app.models.api_models import CoverageTrend
from app.models.release_models import Release, ReleaseMetrics


def build_release_metrics(release: Release) -> ReleaseMetrics:
    """Dashboard metrics for a stored release."""
    total_tests = release.total_tests or release.pass_count + release.fail_count
    return ReleaseMetrics(
        release_confidence=release.release_confidence,
        test_coverage=release.coverage_percent,
        risk_level=release.risk_level,
        time_to_ship=format_minutes_to_time(release.time_to_ship_minutes),
        pass_rate=calculate_pass_rate(release.pass_count, release.total_tests or 0),
        total_tests=total_tests,
        failed_tests=release.fail_count,
    )


def compute_coverage_trend(
    releases: Sequence[Release],
    stable_threshold: float = 1.0,
) -> CoverageTrend:
    """
    Compare coverage of the two newest releases (``releases`` is newest first).

    Changes smaller than ``stable_threshold`` points count as stable.
    """
    if len(releases) < 2:
        return CoverageTrend()

    change = releases[0].coverage_percent - releases[1].coverage_percent
    if abs(change) < stable_threshold:
        direction = "stable"
    elif change > 0:
        direction = "up"
    else:
        direction = "down"

    return CoverageTrend(direction=direction, change=round(change, 2))
