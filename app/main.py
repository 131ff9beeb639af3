"""
Release Confidence FastAPI Application.

  POST /webhook/coverage     → ingest CI coverage, compute release metrics
  GET  /webhook/deliveries   → recent webhook delivery log
  GET  /releases             → paginated releases + coverage trend
  GET  /releases/latest      → newest release with risks and metrics
  GET  /releases/{id}        → release detail
  GET  /health               → {"status": "ok"}
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes.health import router as health_router
from app.api.routes.releases import router as releases_router
from app.api.routes.webhook import router as webhook_router
from app.config import settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("release_confidence")

app = FastAPI(
    title="Release Confidence",
    description="Release quality metrics from CI coverage and test results",
    version=settings.service_version,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(releases_router)
app.include_router(webhook_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    body = await request.body()
    logger.error(f"Validation Error. Raw body: {body.decode('utf-8')[:500]} | Errors: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder({"detail": exc.errors(), "body": body.decode("utf-8")[:100]}),
    )
