"""
Test fixtures shared across all release confidence tests.
"""

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_release_store, get_webhook_logger
from app.audit.logger import WebhookLogger
from app.models.release_models import FeatureCoverage
from app.store.release_store import ReleaseStore


@pytest.fixture
def per_file_coverage():
    """Per-file coverage report in the Istanbul/json-summary shape."""
    return {
        "total": 82.0,
        "files": {
            "src/auth/login.ts": {"lines": {"pct": 95}, "statements": {"pct": 90}},
            "src/auth/register.ts": {"lines": {"pct": 88}, "statements": {"pct": 85}},
            "src/api/releases.ts": {"lines": {"pct": 72.5}},
            "src/db/client.ts": {"statements": {"pct": 40}},
            "README.md": {"lines": {"pct": 100}},
        },
    }


@pytest.fixture
def sample_features():
    return [
        FeatureCoverage(name="Authentication", coverage=96.0),
        FeatureCoverage(name="API Routes", coverage=72.5),
        FeatureCoverage(name="Database", coverage=45.0),
    ]


@pytest.fixture
def webhook_payload(per_file_coverage):
    """A CI coverage webhook body."""
    return {
        "repository": {
            "id": 123456,
            "name": "shop",
            "owner": "acme",
            "full_name": "acme/shop",
        },
        "release": {
            "number": "v1.4.0",
            "commit_sha": "a1b2c3d",
            "branch": "main",
            "workflow_run_id": "987",
        },
        "coverage": per_file_coverage,
        "tests": {"total": 250, "passed": 242, "failed": 8, "skipped": 0},
        "timestamp": "2026-10-01T12:00:00Z",
    }


@pytest.fixture
def store():
    return ReleaseStore()


@pytest.fixture
def webhook_logger(tmp_path):
    return WebhookLogger(log_path=str(tmp_path / "webhook_log.jsonl"))


@pytest.fixture
def client(store, webhook_logger):
    """API client with a fresh store and a temp-path webhook log."""
    from app.main import app

    app.dependency_overrides[get_release_store] = lambda: store
    app.dependency_overrides[get_webhook_logger] = lambda: webhook_logger
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
