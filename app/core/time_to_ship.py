"""
Time-to-Ship Estimator.

Starts from a 30 minute base, adds a block for the coverage risk level and
15 minutes for every full 10 points of risk score.
"""

from __future__ import annotations

import math

from app.core.classifiers import calculate_risk_level
from app.models.enums import RiskLevel

BASE_MINUTES = 30
RISK_SCORE_STEP = 10
MINUTES_PER_RISK_STEP = 15

RISK_LEVEL_MINUTES: dict[RiskLevel, int] = {
    RiskLevel.CRITICAL: 240,
    RiskLevel.HIGH: 120,
    RiskLevel.MEDIUM: 60,
    RiskLevel.LOW: 0,
}


def estimate_time_to_ship_minutes(coverage: float, risk_score: float) -> int:
    """Estimated minutes until the release can ship.

    Raises MetricValidationError if coverage is outside [0, 100].
    """
    level = calculate_risk_level(coverage)
    risk_steps = math.floor(risk_score / RISK_SCORE_STEP)
    return BASE_MINUTES + RISK_LEVEL_MINUTES[level] + risk_steps * MINUTES_PER_RISK_STEP


def calculate_time_to_ship(coverage: float, risk_score: float) -> str:
    """Formatted time-to-ship, e.g. ``calculate_time_to_ship(87.5, 15) == "1h 45m"``."""
    return format_minutes_to_time(estimate_time_to_ship_minutes(coverage, risk_score))


def format_minutes_to_time(total_minutes: int) -> str:
    """
    Render minutes as ``"2h 30m"``, ``"2h"`` or ``"45m"``.

    Zero renders as ``"0m"``.
    """
    hours, minutes = divmod(int(total_minutes), 60)
    if hours and minutes:
        return f"{hours}h {minutes}m"
    if hours:
        return f"{hours}h"
    return f"{minutes}m"
