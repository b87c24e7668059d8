"""
State shared across the report pipeline graph.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, TypedDict

from melon_reports.core.errors import ReportPipelineError
from melon_reports.schemas import AnalysisRecord, ReportData, ReportRequest
from melon_reports.services.publisher import PublishedReport


class PipelineStage(str, Enum):
    """Where a pipeline run currently is, or where it stopped."""

    VALIDATING = "validating"
    FETCHING = "fetching"
    AGGREGATING = "aggregating"
    RENDERING = "rendering"
    PUBLISHING = "publishing"
    DONE = "done"
    FAILED = "failed"


class ReportPipelineState(TypedDict, total=False):
    """State tracked inside the LangGraph workflow."""

    payload: Any
    stage: PipelineStage
    failed_stage: PipelineStage
    request: ReportRequest
    records: List[AnalysisRecord]
    report: ReportData
    document: bytes
    published: PublishedReport
    error: ReportPipelineError


__all__ = ["PipelineStage", "ReportPipelineState"]
