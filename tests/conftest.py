"""Pytest configuration shared across the suite."""

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import pytest

from melon_reports.pipeline import ReportPipeline, ReportStages
from melon_reports.schemas import AnalysisRecord
from melon_reports.services import (
    ArtifactPublisher,
    DocumentRendererAdapter,
    RecordFetcher,
)

BASE_TIME = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def make_record():
    """Build analysis records with sensible defaults, one hour apart by index."""

    def _make(index: int = 0, **overrides) -> AnalysisRecord:
        values = {
            "id": f"analysis-{index:03d}",
            "created_at": BASE_TIME - timedelta(hours=index),
            "location": "Bogor",
            "watermelon_type": "merah:sugar baby",
            "maturity_status": "Matang",
            "confidence": 90,
            "sweetness_level": 8,
            "skin_quality": "baik",
        }
        values.update(overrides)
        return AnalysisRecord(**values)

    return _make


class FakeAnalysisStore:
    """In-memory stand-in for ``AnalysisStore`` that records every query."""

    def __init__(self, records=None, error: Exception | None = None) -> None:
        self.records = list(records or [])
        self.error = error
        self.queries: list[dict] = []

    def query_analyses(self, **kwargs):
        self.queries.append(kwargs)
        if self.error is not None:
            raise self.error
        return list(self.records)

    def count_analyses(self, **kwargs) -> int:
        if self.error is not None:
            raise self.error
        return len(self.records)


class FakeDocumentRenderer:
    """Renderer yielding a fixed PDF-looking byte stream."""

    def __init__(self, chunks=(b"%PDF-1.7\n", b"%%EOF")) -> None:
        self.chunks = list(chunks)
        self.rendered: list = []

    def render_stream(self, data):
        self.rendered.append(data)
        yield from self.chunks


class FakeObjectStorage:
    """Object store double keeping uploads in memory."""

    def __init__(self, *, upload_error=None, sign_error=None) -> None:
        self.bucket_name = "reports"
        self.upload_error = upload_error
        self.sign_error = sign_error
        self.objects: dict[str, bytes] = {}

    async def upload(self, *, key, body, content_type, cache_control, upsert=False) -> None:
        if self.upload_error is not None:
            raise self.upload_error
        self.objects[key] = body

    async def create_signed_url(self, *, key, expires_in) -> str:
        if self.sign_error is not None:
            raise self.sign_error
        return f"https://storage.example.com/{self.bucket_name}/{key}?expires={expires_in}"


@dataclass
class PipelineHarness:
    pipeline: ReportPipeline
    store: FakeAnalysisStore
    renderer: FakeDocumentRenderer
    storage: FakeObjectStorage


@pytest.fixture
def build_pipeline():
    """Assemble a ``ReportPipeline`` from in-memory collaborators."""

    def _build(
        records=None,
        *,
        store_error=None,
        chunks=(b"%PDF-1.7\n", b"%%EOF"),
        upload_error=None,
        sign_error=None,
    ) -> PipelineHarness:
        store = FakeAnalysisStore(records, error=store_error)
        renderer = FakeDocumentRenderer(chunks)
        storage = FakeObjectStorage(upload_error=upload_error, sign_error=sign_error)
        stages = ReportStages(
            fetcher=RecordFetcher(store),
            renderer=DocumentRendererAdapter(renderer),
            publisher=ArtifactPublisher(storage, clock=lambda: BASE_TIME),
        )
        return PipelineHarness(ReportPipeline(stages), store, renderer, storage)

    return _build
