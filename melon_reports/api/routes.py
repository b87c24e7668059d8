"""
FastAPI routes for the analytics report service.
"""

from __future__ import annotations

import asyncio
import logging
from http import HTTPStatus
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from melon_reports.clients import AnalysisStore, AnalysisStoreError
from melon_reports.core.config import AppSettings
from melon_reports.dependencies import (
    get_analysis_store,
    get_app_settings,
    get_report_pipeline,
)
from melon_reports.pipeline import ReportPipeline
from melon_reports.schemas import ErrorEnvelope, ReportExportSuccess

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck(
    store: Annotated[AnalysisStore, Depends(get_analysis_store)],
    settings: Annotated[AppSettings, Depends(get_app_settings)],
) -> JSONResponse:
    """Health endpoint that also confirms the analysis store answers queries."""
    try:
        total = await asyncio.to_thread(store.count_analyses)
    except AnalysisStoreError as exc:
        logger.error("Analysis store health check failed: %s", exc)
        return JSONResponse(
            status_code=HTTPStatus.SERVICE_UNAVAILABLE,
            content={"status": "degraded", "environment": settings.environment},
        )
    return JSONResponse(
        content={"status": "ok", "environment": settings.environment, "analyses": total}
    )


@router.post(
    "/reports/analytics",
    response_model=ReportExportSuccess,
    responses={
        400: {"model": ErrorEnvelope},
        404: {"model": ErrorEnvelope},
        500: {"model": ErrorEnvelope},
    },
)
async def export_analytics_report(
    request: Request,
    pipeline: Annotated[ReportPipeline, Depends(get_report_pipeline)],
) -> JSONResponse:
    """Render an analytics PDF for a date range and return a signed download link.

    Body: ``{"startDate", "endDate", "location"?, "fruitType"?, "fruitVariety"?}``.
    Every failure is answered with ``{"success": false, "error": {...}}``.
    """
    payload: Any
    try:
        payload = await request.json()
    except ValueError:
        # malformed JSON is reported by the validation stage
        payload = None

    outcome = await pipeline.run(payload)
    if outcome.succeeded:
        logger.info("Analytics report exported")
    return JSONResponse(status_code=outcome.status_code, content=outcome.to_json())


__all__ = ["router"]
