"""
Release Routes — read-only views over stored releases.

  GET /releases            → paginated list + coverage trend
  GET /releases/latest     → newest release, its risks and metrics
  GET /releases/{id}       → one release with repository details

Scores are precomputed at ingestion; these routes only format them.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from app.api.dependencies import get_release_store, require_api_token
from app.config import settings
from app.core.metrics import build_release_metrics, compute_coverage_trend
from app.models.api_models import (
    LatestReleaseResponse,
    Pagination,
    ReleaseDetailResponse,
    ReleasesListResponse,
)
from app.store.release_store import ReleaseStore

logger = logging.getLogger("release_confidence.api.releases")

router = APIRouter(prefix="/releases", dependencies=[Depends(require_api_token)])


def _set_cache_headers(response: Response) -> None:
    response.headers["Cache-Control"] = (
        f"public, s-maxage={settings.cache_max_age_seconds}, stale-while-revalidate"
    )


@router.get("", response_model=ReleasesListResponse)
async def list_releases(
    response: Response,
    limit: int | None = Query(default=None, description="Releases per page"),
    page: int = Query(default=1, description="1-based page number"),
    repo: str | None = Query(default=None, description="Filter by repository full name"),
    store: ReleaseStore = Depends(get_release_store),
):
    """Paginated releases, newest first. Out-of-range limit/page values are clamped."""
    limit = settings.default_page_limit if limit is None else limit
    limit = max(1, min(limit, settings.max_page_limit))
    page = max(page, 1)
    offset = (page - 1) * limit

    releases = store.list_releases(limit=limit, offset=offset, full_name=repo)
    total = store.count_releases(full_name=repo)
    trend = compute_coverage_trend(releases, settings.trend_stable_threshold)

    logger.info(f"Returning {len(releases)} releases (page {page}, total {total})")
    _set_cache_headers(response)

    return ReleasesListResponse(
        releases=releases,
        pagination=Pagination(
            total=total,
            page=page,
            limit=limit,
            has_more=offset + len(releases) < total,
        ),
        trend=trend,
    )


@router.get("/latest", response_model=LatestReleaseResponse)
async def latest_release(
    response: Response,
    repo: str | None = Query(default=None, description="Filter by repository full name"),
    store: ReleaseStore = Depends(get_release_store),
):
    """Newest release with its risk items and dashboard metrics."""
    stored = store.latest_release(full_name=repo)
    if stored is None:
        logger.info("No releases found")
        raise HTTPException(
            status_code=404,
            detail={
                "error": "No releases found",
                "message": (
                    "No releases have been recorded yet. Send a coverage webhook "
                    "from CI to create your first release."
                ),
            },
        )

    _set_cache_headers(response)
    return LatestReleaseResponse(
        release=stored.release,
        risks=stored.risks,
        metrics=build_release_metrics(stored.release),
    )


@router.get("/{release_id}", response_model=ReleaseDetailResponse)
async def release_detail(
    release_id: str,
    response: Response,
    store: ReleaseStore = Depends(get_release_store),
):
    """One release with its risks, repository and metrics."""
    stored = store.get_release(release_id)
    if stored is None:
        raise HTTPException(
            status_code=404,
            detail={"error": "Release not found", "release_id": release_id},
        )

    _set_cache_headers(response)
    return ReleaseDetailResponse(
        release=stored.release,
        risks=stored.risks,
        repository=store.get_repository(stored.release.repo_id),
        metrics=build_release_metrics(stored.release),
    )
