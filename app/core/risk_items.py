"""
Risk Item Generator — Rule-based findings for a release.

Every rule in RISK_RULES is evaluated in order and may contribute any number
of items; the output keeps that order (it is not sorted by severity). When no
rule fires, a single "All Checks Passed" info item is returned, so the result
is never empty.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Callable

from app.models.enums import RiskItemLevel
from app.models.release_models import FeatureCoverage, RiskItem

CRITICAL_COVERAGE_THRESHOLD = 70.0
RECOMMENDED_COVERAGE_THRESHOLD = 85.0
FEATURE_CRITICAL_THRESHOLD = 60.0
FEATURE_WARNING_THRESHOLD = 80.0


@dataclass(frozen=True)
class RiskContext:
    """Inputs shared by all risk rules."""

    coverage: float
    failed_tests: int
    features: Sequence[FeatureCoverage] = field(default_factory=tuple)


RiskRuleFn = Callable[[RiskContext], list[RiskItem]]


def overall_coverage_rule(ctx: RiskContext) -> list[RiskItem]:
    if ctx.coverage < CRITICAL_COVERAGE_THRESHOLD:
        return [
            RiskItem(
                risk_name="Critical Coverage Gap",
                risk_level=RiskItemLevel.HIGH,
                severity=9,
                description=(
                    f"Overall test coverage is only {ctx.coverage:.1f}% - well below "
                    f"the {CRITICAL_COVERAGE_THRESHOLD:.0f}% minimum threshold."
                ),
                recommendation=(
                    "Add comprehensive test coverage before deploying to production. "
                    "Focus on critical paths and edge cases."
                ),
            )
        ]
    if ctx.coverage < RECOMMENDED_COVERAGE_THRESHOLD:
        return [
            RiskItem(
                risk_name="Low Test Coverage",
                risk_level=RiskItemLevel.MEDIUM,
                severity=6,
                description=(
                    f"Test coverage is at {ctx.coverage:.1f}% - below the recommended "
                    f"{RECOMMENDED_COVERAGE_THRESHOLD:.0f}% threshold."
                ),
                recommendation="Increase test coverage, especially for business-critical features.",
            )
        ]
    return []


def failed_tests_rule(ctx: RiskContext) -> list[RiskItem]:
    failed = ctx.failed_tests
    if failed <= 0:
        return []

    if failed > 10:
        level, severity = RiskItemLevel.HIGH, 10
    elif failed > 5:
        level, severity = RiskItemLevel.MEDIUM, 8
    else:
        level, severity = RiskItemLevel.LOW, 6

    return [
        RiskItem(
            risk_name="Failed Tests",
            risk_level=level,
            severity=severity,
            description=f"{failed} test(s) are currently failing.",
            recommendation="Fix all failing tests before proceeding with deployment.",
        )
    ]


def feature_critical_rule(ctx: RiskContext) -> list[RiskItem]:
    return [
        RiskItem(
            risk_name="Feature Coverage Critical",
            risk_level=RiskItemLevel.HIGH,
            severity=8,
            description=f"{f.name} has critically low coverage at {f.coverage:.1f}%.",
            affected_feature=f.name,
            recommendation=f"Add tests for {f.name} module to improve coverage to at least 70%.",
        )
        for f in ctx.features
        if f.coverage < FEATURE_CRITICAL_THRESHOLD
    ]


def feature_needs_testing_rule(ctx: RiskContext) -> list[RiskItem]:
    return [
        RiskItem(
            risk_name="Feature Needs Testing",
            risk_level=RiskItemLevel.MEDIUM,
            severity=5,
            description=f"{f.name} has {f.coverage:.1f}% coverage - below recommended levels.",
            affected_feature=f.name,
            recommendation=f"Consider adding more tests for {f.name}, especially for edge cases.",
        )
        for f in ctx.features
        if FEATURE_CRITICAL_THRESHOLD <= f.coverage < FEATURE_WARNING_THRESHOLD
    ]


# Evaluation order is output order
RISK_RULES: tuple[RiskRuleFn, ...] = (
    overall_coverage_rule,
    failed_tests_rule,
    feature_critical_rule,
    feature_needs_testing_rule,
)


def all_clear_item() -> RiskItem:
    return RiskItem(
        risk_name="All Checks Passed",
        risk_level=RiskItemLevel.INFO,
        severity=1,
        description="Release looks good! All quality metrics are within acceptable ranges.",
        recommendation="Proceed with deployment. Consider monitoring key metrics post-release.",
    )


def generate_risk_items(
    coverage: float,
    failed_tests: int,
    features: Sequence[FeatureCoverage] = (),
    rules: Sequence[RiskRuleFn] = RISK_RULES,
) -> list[RiskItem]:
    """Run every risk rule and collect their findings."""
    ctx = RiskContext(coverage=coverage, failed_tests=failed_tests, features=tuple(features))

    items: list[RiskItem] = []
    for rule in rules:
        items.extend(rule(ctx))

    return items or [all_clear_item()]
