try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from datetime import datetime, timezone

import pytest

from melon_reports.clients import AnalysisStoreError
from melon_reports.core.errors import ErrorKind, FetchFailure
from melon_reports.schemas import ReportRequest
from melon_reports.services.record_fetcher import RecordFetcher


class RecordingStore:
    def __init__(self, records=None, error: Exception | None = None) -> None:
        self.records = records or []
        self.error = error
        self.calls: list[dict] = []

    def query_analyses(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.records


def _request(**overrides) -> ReportRequest:
    values = {
        "start_date": datetime(2025, 3, 1, tzinfo=timezone.utc),
        "end_date": datetime(2025, 3, 31, tzinfo=timezone.utc),
    }
    values.update(overrides)
    return ReportRequest(**values)


@pytest.mark.asyncio
async def test_fetch_passes_filters_to_store(make_record) -> None:
    store = RecordingStore(records=[make_record()])
    fetcher = RecordFetcher(store)

    records = await fetcher.fetch(
        _request(location="Bogor", fruit_type="merah", fruit_variety="inul")
    )

    assert len(records) == 1
    assert store.calls == [
        {
            "start": datetime(2025, 3, 1, tzinfo=timezone.utc),
            "end": datetime(2025, 3, 31, tzinfo=timezone.utc),
            "location": "Bogor",
            "type_prefix": "merah",
            "variety_suffix": "inul",
        }
    ]


@pytest.mark.asyncio
async def test_fetch_omits_empty_filters() -> None:
    store = RecordingStore()
    fetcher = RecordFetcher(store)

    assert await fetcher.fetch(_request(location="")) == []
    call = store.calls[0]
    assert call["location"] is None
    assert call["type_prefix"] is None
    assert call["variety_suffix"] is None


@pytest.mark.asyncio
async def test_store_errors_become_fetch_failures() -> None:
    store = RecordingStore(error=AnalysisStoreError("no such table: analyses"))
    fetcher = RecordFetcher(store)

    with pytest.raises(FetchFailure) as excinfo:
        await fetcher.fetch(_request())

    assert excinfo.value.kind is ErrorKind.DATABASE_ERROR
    assert excinfo.value.details == "no such table: analyses"
    assert len(store.calls) == 1
