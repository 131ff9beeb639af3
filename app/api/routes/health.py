"""
Health Check Route — GET /health
"""

from __future__ import annotations

from fastapi import APIRouter

from app.config import settings

router = APIRouter()


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": settings.service_version,
        "engine": "release-metrics",
    }
