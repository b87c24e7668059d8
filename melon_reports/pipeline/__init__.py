"""Analytics report pipeline: a LangGraph workflow over the stage services."""

from .graph import ReportStages, create_report_graph
from .models import PipelineStage, ReportPipelineState
from .orchestrator import PipelineOutcome, ReportPipeline
from .validation import parse_report_request

__all__ = [
    "PipelineOutcome",
    "PipelineStage",
    "ReportPipeline",
    "ReportPipelineState",
    "ReportStages",
    "create_report_graph",
    "parse_report_request",
]
