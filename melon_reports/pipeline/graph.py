"""
LangGraph workflow definition for the analytics report pipeline.

validate -> fetch -> aggregate -> render -> publish, with an exit to END after
any node that leaves an error in the state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from langgraph.graph import END, START, StateGraph

from melon_reports.core.errors import ReportPipelineError
from melon_reports.pipeline.models import PipelineStage, ReportPipelineState
from melon_reports.pipeline.validation import parse_report_request
from melon_reports.services.aggregator import build_report_data
from melon_reports.services.publisher import ArtifactPublisher
from melon_reports.services.record_fetcher import RecordFetcher
from melon_reports.services.renderer import DocumentRendererAdapter

logger = logging.getLogger(__name__)

_CONTINUE = "continue"
_HALT = "halt"


@dataclass(slots=True)
class ReportStages:
    """Collaborators each graph node delegates to."""

    fetcher: RecordFetcher
    renderer: DocumentRendererAdapter
    publisher: ArtifactPublisher
    timezone: str = "Asia/Jakarta"
    recent_limit: int = 10


async def _validate(state: ReportPipelineState, stages: ReportStages) -> ReportPipelineState:
    state["request"] = parse_report_request(state.get("payload"))
    return state


async def _fetch(state: ReportPipelineState, stages: ReportStages) -> ReportPipelineState:
    state["records"] = await stages.fetcher.fetch(state["request"])
    return state


async def _aggregate(state: ReportPipelineState, stages: ReportStages) -> ReportPipelineState:
    state["report"] = build_report_data(
        state["records"],
        state["request"],
        tz=stages.timezone,
        recent_limit=stages.recent_limit,
    )
    return state


async def _render(state: ReportPipelineState, stages: ReportStages) -> ReportPipelineState:
    state["document"] = await stages.renderer.render(state["report"])
    return state


async def _publish(state: ReportPipelineState, stages: ReportStages) -> ReportPipelineState:
    state["published"] = await stages.publisher.publish(state["document"])
    state["stage"] = PipelineStage.DONE
    return state


def _guarded(
    stage: PipelineStage,
    step: Callable[[ReportPipelineState, ReportStages], Awaitable[ReportPipelineState]],
    stages: ReportStages,
) -> Callable[[ReportPipelineState], Awaitable[ReportPipelineState]]:
    """Record the stage and park a typed stage failure in the state."""

    async def node(state: ReportPipelineState) -> ReportPipelineState:
        state["stage"] = stage
        try:
            return await step(state, stages)
        except ReportPipelineError as exc:
            logger.error(
                "Report pipeline halted at %s: %s (%s)",
                stage.value,
                exc.kind.value,
                exc.details or exc.message,
            )
            state["error"] = exc
            state["failed_stage"] = stage
            state["stage"] = PipelineStage.FAILED
            return state

    return node


def _route(state: ReportPipelineState) -> str:
    return _HALT if state.get("error") is not None else _CONTINUE


def create_report_graph(stages: ReportStages) -> Any:
    """Compile and return the report pipeline LangGraph workflow."""
    graph = StateGraph(ReportPipelineState)

    steps = [
        ("validate", PipelineStage.VALIDATING, _validate),
        ("fetch", PipelineStage.FETCHING, _fetch),
        ("aggregate", PipelineStage.AGGREGATING, _aggregate),
        ("render", PipelineStage.RENDERING, _render),
        ("publish", PipelineStage.PUBLISHING, _publish),
    ]
    for name, stage, step in steps:
        graph.add_node(name, _guarded(stage, step, stages))

    graph.add_edge(START, "validate")
    for (name, _, _), (next_name, _, _) in zip(steps, steps[1:]):
        graph.add_conditional_edges(name, _route, {_CONTINUE: next_name, _HALT: END})
    graph.add_edge("publish", END)
    return graph.compile()


__all__ = ["ReportStages", "create_report_graph"]
