"""
Coverage Webhook Routes — POST /webhook/coverage, GET /webhook/deliveries

Receives coverage + test results from a CI workflow, computes release metrics
and stores the release. Every delivery is recorded in the webhook log.
"""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request
from pydantic import ValidationError

from app.api.dependencies import (
    get_ingestion_pipeline,
    get_webhook_logger,
    require_api_token,
)
from app.audit.logger import WebhookLogger
from app.config import settings
from app.core.validation import MetricValidationError
from app.engine.ingestion import IngestionPipeline
from app.models.api_models import IngestionResponse, WebhookLogEntry
from app.models.release_models import CoverageWebhookPayload, utc_now
from app.utils.signature import validate_github_signature

logger = logging.getLogger("release_confidence.api.webhook")

router = APIRouter()

EVENT_TYPE = "coverage"


@router.post("/webhook/coverage", response_model=IngestionResponse, status_code=201)
async def coverage_webhook(
    request: Request,
    x_hub_signature_256: str | None = Header(default=None),
    x_github_delivery: str | None = Header(default=None),
    pipeline: IngestionPipeline = Depends(get_ingestion_pipeline),
    webhook_log: WebhookLogger = Depends(get_webhook_logger),
):
    """
    Ingest a CI coverage report.

    401 on a bad signature, 422 on a malformed payload or out-of-range
    metrics. Nothing is stored unless all metrics compute cleanly.
    """
    body = await request.body()
    entry = WebhookLogEntry(
        id=str(uuid.uuid4()),
        event_type=EVENT_TYPE,
        delivery_id=x_github_delivery,
        signature=x_hub_signature_256,
        created_at=utc_now(),
    )

    if settings.webhook_secret and not validate_github_signature(
        body, x_hub_signature_256, settings.webhook_secret
    ):
        logger.warning(f"Rejected webhook delivery {x_github_delivery}: invalid signature")
        _record(webhook_log, entry, error="Invalid signature")
        raise HTTPException(status_code=401, detail={"error": "Invalid signature"})

    try:
        payload = CoverageWebhookPayload.model_validate_json(body)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        logger.warning(f"Malformed webhook payload: {len(errors)} validation errors")
        _record(webhook_log, entry, error="Invalid payload")
        raise HTTPException(
            status_code=422,
            detail={"error": "Invalid payload", "code": "invalid_payload", "details": errors},
        )

    entry.payload = payload.model_dump(mode="json", exclude_none=True)

    try:
        stored, evaluation = pipeline.ingest(payload)
    except MetricValidationError as e:
        logger.warning(f"[{payload.release.number}] Ingestion failed: {e}")
        _record(webhook_log, entry, error=str(e))
        raise HTTPException(
            status_code=422,
            detail={
                "error": str(e),
                "code": "invalid_metrics",
                "details": {"parameter": e.parameter, "value": e.value},
            },
        )

    entry.release_id = stored.release.id
    _record(webhook_log, entry)

    return IngestionResponse(
        release_id=stored.release.id,
        release_number=stored.release.release_number,
        risk_score=evaluation.risk_score,
        risk_count=len(stored.risks),
        metrics=evaluation.metrics,
    )


@router.get("/webhook/deliveries", dependencies=[Depends(require_api_token)])
async def recent_deliveries(
    count: int = Query(default=50, ge=1, le=500, description="Number of entries"),
    webhook_log: WebhookLogger = Depends(get_webhook_logger),
):
    """Most recent webhook deliveries, oldest first."""
    deliveries = webhook_log.read_recent(count)
    return {"deliveries": deliveries, "count": len(deliveries)}


def _record(webhook_log: WebhookLogger, entry: WebhookLogEntry, error: str | None = None) -> None:
    entry.processed = True
    entry.success = error is None
    entry.error_message = error
    webhook_log.log(entry)
