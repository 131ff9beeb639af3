"""
Tests for Risk Item Generator — verify each rule fires correctly.
"""

from app.core.risk_items import RISK_RULES, generate_risk_items
from app.models.enums import RiskItemLevel
from app.models.release_models import FeatureCoverage


def _names(items):
    return [item.risk_name for item in items]


def test_all_clear_when_nothing_fires():
    items = generate_risk_items(95.0, 0, [])
    assert len(items) == 1
    assert items[0].risk_name == "All Checks Passed"
    assert items[0].risk_level == RiskItemLevel.INFO
    assert items[0].severity == 1


def test_never_empty_with_healthy_features():
    features = [FeatureCoverage(name="Search", coverage=99.0)]
    assert _names(generate_risk_items(85.0, 0, features)) == ["All Checks Passed"]


def test_critical_coverage_gap():
    items = generate_risk_items(65.43, 0, [])
    assert _names(items) == ["Critical Coverage Gap"]
    assert items[0].risk_level == RiskItemLevel.HIGH
    assert items[0].severity == 9
    assert "65.4%" in items[0].description


def test_low_test_coverage():
    items = generate_risk_items(70.0, 0, [])
    assert _names(items) == ["Low Test Coverage"]
    assert items[0].risk_level == RiskItemLevel.MEDIUM
    assert items[0].severity == 6
    assert "70.0%" in items[0].description


def test_failed_tests_severity_bands():
    low = generate_risk_items(95.0, 5, [])[0]
    medium = generate_risk_items(95.0, 6, [])[0]
    high = generate_risk_items(95.0, 11, [])[0]

    assert (low.risk_level, low.severity) == (RiskItemLevel.LOW, 6)
    assert (medium.risk_level, medium.severity) == (RiskItemLevel.MEDIUM, 8)
    assert (high.risk_level, high.severity) == (RiskItemLevel.HIGH, 10)
    assert "11 test(s)" in high.description


def test_feature_rules(sample_features):
    items = generate_risk_items(95.0, 0, sample_features)
    assert _names(items) == ["Feature Coverage Critical", "Feature Needs Testing"]

    critical, needs_testing = items
    assert critical.affected_feature == "Database"
    assert critical.severity == 8
    assert "45.0%" in critical.description
    assert needs_testing.affected_feature == "API Routes"
    assert needs_testing.risk_level == RiskItemLevel.MEDIUM
    assert needs_testing.severity == 5
    assert "72.5%" in needs_testing.description


def test_feature_boundaries():
    features = [
        FeatureCoverage(name="A", coverage=59.99),
        FeatureCoverage(name="B", coverage=60.0),
        FeatureCoverage(name="C", coverage=79.99),
        FeatureCoverage(name="D", coverage=80.0),
    ]
    items = generate_risk_items(95.0, 0, features)
    assert [(i.risk_name, i.affected_feature) for i in items] == [
        ("Feature Coverage Critical", "A"),
        ("Feature Needs Testing", "B"),
        ("Feature Needs Testing", "C"),
    ]


def test_items_follow_rule_order_not_severity(sample_features):
    items = generate_risk_items(50.0, 3, sample_features)
    assert _names(items) == [
        "Critical Coverage Gap",
        "Failed Tests",
        "Feature Coverage Critical",
        "Feature Needs Testing",
    ]
    assert [i.severity for i in items] == [9, 6, 8, 5]


def test_every_item_has_recommendation(sample_features):
    for item in generate_risk_items(50.0, 20, sample_features):
        assert item.recommendation
        assert 1 <= item.severity <= 10


def test_custom_rule_set():
    items = generate_risk_items(10.0, 50, [], rules=RISK_RULES[1:2])
    assert _names(items) == ["Failed Tests"]


def test_feature_items_grouped_by_rule():
    features = [
        FeatureCoverage(name="Search", coverage=70.0),
        FeatureCoverage(name="Billing", coverage=40.0),
        FeatureCoverage(name="Admin", coverage=65.0),
        FeatureCoverage(name="Export", coverage=50.0),
    ]
    items = generate_risk_items(95.0, 0, features)
    assert [(i.risk_name, i.affected_feature) for i in items] == [
        ("Feature Coverage Critical", "Billing"),
        ("Feature Coverage Critical", "Export"),
        ("Feature Needs Testing", "Search"),
        ("Feature Needs Testing", "Admin"),
    ]
