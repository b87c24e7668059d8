"""Service layer exports."""

from .aggregator import build_report_data
from .publisher import Artifact, ArtifactPublisher, PublishedReport
from .record_fetcher import RecordFetcher
from .renderer import DocumentRendererAdapter, StreamingRenderer

__all__ = [
    "Artifact",
    "ArtifactPublisher",
    "DocumentRendererAdapter",
    "PublishedReport",
    "RecordFetcher",
    "StreamingRenderer",
    "build_report_data",
]
