"""
Feature Coverage Parser — Normalizes CI coverage reports into per-feature records.

Two report shapes are understood:

1. ``{"features": [...]}``  — already aggregated, mapped entry by entry.
2. ``{"files": {path: {...}}}`` — per-file report, grouped by the second path
   segment (``src/auth/login.ts`` → ``auth``) and averaged per group.

Anything else yields an empty list. Malformed values count as zero coverage;
the parser never raises.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from app.models.release_models import FeatureCoverage

FALLBACK_GROUP = "core"
UNKNOWN_FEATURE = "Unknown"

FEATURE_ABBREVIATIONS: Mapping[str, str] = {
    "auth": "Authentication",
    "api": "API Routes",
    "db": "Database",
    "ui": "User Interface",
    "utils": "Utilities",
    "lib": "Libraries",
    "components": "Components",
    "pages": "Pages",
    "app": "Application",
}

_PASSTHROUGH_FIELDS = ("testCount", "linesCovered", "totalLines")


def format_feature_name(name: str) -> str:
    """
    Turn a raw module identifier into a display label.

    Known abbreviations map to fixed labels (case-insensitive); everything
    else has ``-``/``_`` replaced by spaces and is title-cased word by word.

        >>> format_feature_name("auth")
        'Authentication'
        >>> format_feature_name("payment-gateway")
        'Payment Gateway'
    """
    known = FEATURE_ABBREVIATIONS.get(name.lower())
    if known:
        return known

    words = name.replace("-", " ").replace("_", " ").split(" ")
    return " ".join(word[:1].upper() + word[1:].lower() for word in words)


def parse_feature_coverage(data: Any) -> list[FeatureCoverage]:
    """Parse a coverage report of any supported shape, sorted by coverage descending."""
    if not isinstance(data, Mapping):
        return []

    if isinstance(data.get("features"), list):
        features = [_feature_from_entry(entry) for entry in data["features"]]
    elif isinstance(data.get("files"), Mapping):
        features = _features_from_files(data["files"])
    else:
        features = []

    features.sort(key=lambda f: f.coverage, reverse=True)
    return features


def _feature_from_entry(entry: Any) -> FeatureCoverage:
    if not isinstance(entry, Mapping):
        return FeatureCoverage(name=UNKNOWN_FEATURE, coverage=0.0)

    coverage = coerce_percentage(entry.get("coverage")) or coerce_percentage(entry.get("pct"))
    fields: dict[str, Any] = {
        "name": str(entry.get("name") or UNKNOWN_FEATURE),
        "coverage": coverage,
    }
    for key in _PASSTHROUGH_FIELDS:
        count = entry.get(key)
        if isinstance(count, int) and not isinstance(count, bool) and count >= 0:
            fields[key] = count
    return FeatureCoverage(**fields)


def _features_from_files(files: Mapping[str, Any]) -> list[FeatureCoverage]:
    groups: dict[str, list[float]] = {}

    for file_path, file_coverage in files.items():
        parts = str(file_path).split("/")
        group = parts[1] if len(parts) > 1 and parts[1] else FALLBACK_GROUP
        groups.setdefault(group, []).append(_file_percentage(file_coverage))

    return [
        FeatureCoverage(
            name=format_feature_name(group),
            coverage=round(sum(values) / len(values), 2),
        )
        for group, values in groups.items()
    ]


def _file_percentage(file_coverage: Any) -> float:
    """Line percentage, else statement percentage, else 0."""
    if not isinstance(file_coverage, Mapping):
        return 0.0
    for metric in ("lines", "statements"):
        summary = file_coverage.get(metric)
        if isinstance(summary, Mapping):
            pct = coerce_percentage(summary.get("pct"))
            if pct:
                return pct
    return 0.0


def coerce_percentage(value: Any) -> float:
    """Numeric percentage from a loosely typed value; anything unusable is 0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else 0.0
    if isinstance(value, str):
        try:
            parsed = float(value)
        except ValueError:
            return 0.0
        return parsed if math.isfinite(parsed) else 0.0
    return 0.0
