"""
Run the report pipeline for one request and shape the HTTP response body.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Union

from melon_reports.core.errors import ReportPipelineError
from melon_reports.pipeline.graph import ReportStages, create_report_graph
from melon_reports.pipeline.models import PipelineStage, ReportPipelineState
from melon_reports.schemas import (
    ErrorBody,
    ErrorEnvelope,
    ReportExportResult,
    ReportExportSuccess,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PipelineOutcome:
    """Final HTTP status, body and the stage the run ended in."""

    status_code: int
    body: Union[ReportExportSuccess, ErrorEnvelope]
    stage: PipelineStage

    @property
    def succeeded(self) -> bool:
        return isinstance(self.body, ReportExportSuccess)

    def to_json(self) -> dict[str, Any]:
        return self.body.model_dump(mode="json", by_alias=True, exclude_none=True)


class ReportPipeline:
    """Validate, fetch, aggregate, render and publish one analytics report.

    The pipeline holds no per-request state; one instance serves concurrent
    requests. Nothing is retried and nothing is cleaned up after a failure.
    """

    def __init__(self, stages: ReportStages) -> None:
        self._graph = create_report_graph(stages)

    async def run(self, payload: Any) -> PipelineOutcome:
        """Execute the pipeline for a decoded JSON body."""
        initial: ReportPipelineState = {"payload": payload, "stage": PipelineStage.VALIDATING}
        try:
            final_state: ReportPipelineState = await self._graph.ainvoke(initial)
        except Exception as exc:
            logger.exception("PDF export error")
            error = ReportPipelineError(details=str(exc) or "Unknown error")
            return self._failure(error, PipelineStage.FAILED)

        error = final_state.get("error")
        if error is not None:
            return self._failure(error, final_state.get("failed_stage", PipelineStage.FAILED))

        published = final_state["published"]
        body = ReportExportSuccess(
            data=ReportExportResult(
                download_url=published.link.url,
                file_name=published.file_name,
                expires_in=published.link.expires_in_seconds,
                expires_at=published.link.expires_at,
            )
        )
        return PipelineOutcome(
            status_code=HTTPStatus.OK, body=body, stage=PipelineStage.DONE
        )

    @staticmethod
    def _failure(error: ReportPipelineError, stage: PipelineStage) -> PipelineOutcome:
        body = ErrorEnvelope(
            error=ErrorBody(
                code=error.kind.value,
                message=error.message,
                details=error.details,
            )
        )
        return PipelineOutcome(status_code=error.status_code, body=body, stage=stage)


__all__ = ["PipelineOutcome", "ReportPipeline"]
