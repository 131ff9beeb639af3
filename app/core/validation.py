"""
Input validation for the scoring functions that reject out-of-range values.
"""

from __future__ import annotations

import math


class MetricValidationError(ValueError):
    """A metric input fell outside its allowed range."""

    def __init__(self, parameter: str, value: float, low: float = 0, high: float = 100) -> None:
        self.parameter = parameter
        self.value = value
        super().__init__(f"{parameter} must be between {low:g} and {high:g}, got {value!r}")


def require_percentage(parameter: str, value: float) -> float:
    """Return ``value`` unchanged if it lies in [0, 100], else raise."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MetricValidationError(parameter, value)
    if math.isnan(value) or value < 0 or value > 100:
        raise MetricValidationError(parameter, value)
    return value
