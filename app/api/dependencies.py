"""
FastAPI Dependencies — Shared singletons injected via Depends().
"""

from __future__ import annotations

import hmac
from functools import lru_cache

from fastapi import Depends, Header, HTTPException

from app.audit.logger import WebhookLogger
from app.config import settings
from app.engine.ingestion import IngestionPipeline
from app.store.release_store import ReleaseStore


@lru_cache
def get_release_store() -> ReleaseStore:
    """Shared release store singleton."""
    return ReleaseStore()


@lru_cache
def get_webhook_logger() -> WebhookLogger:
    """Shared webhook delivery logger singleton."""
    return WebhookLogger()


def get_ingestion_pipeline(
    store: ReleaseStore = Depends(get_release_store),
) -> IngestionPipeline:
    """Ingestion pipeline bound to the shared release store."""
    return IngestionPipeline(store=store)


async def require_api_token(authorization: str | None = Header(default=None)) -> None:
    """Reject requests without the configured bearer token. No-op when unset."""
    if not settings.api_token:
        return
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not hmac.compare_digest(
        token.encode("utf-8"), settings.api_token.encode("utf-8")
    ):
        raise HTTPException(status_code=401, detail={"error": "Unauthorized"})
