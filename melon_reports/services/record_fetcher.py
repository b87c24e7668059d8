"""
Fetch the analysis records a report is built from.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List

from melon_reports.clients import AnalysisStore, AnalysisStoreError
from melon_reports.core.errors import FetchFailure
from melon_reports.schemas import AnalysisRecord, ReportRequest

logger = logging.getLogger(__name__)


class RecordFetcher:
    """Translate a report request into one filtered, newest-first store query."""

    def __init__(self, store: AnalysisStore) -> None:
        self._store = store

    async def fetch(self, request: ReportRequest) -> List[AnalysisRecord]:
        """Return matching records or raise ``FetchFailure``. Never retries."""
        try:
            records = await asyncio.to_thread(
                self._store.query_analyses,
                start=request.start_date,
                end=request.end_date,
                location=request.location or None,
                type_prefix=request.fruit_type or None,
                variety_suffix=request.fruit_variety or None,
            )
        except AnalysisStoreError as exc:
            logger.error("Error fetching analyses: %s", exc)
            raise FetchFailure(details=str(exc)) from exc

        logger.info("Fetched analyses for report", extra={"record_count": len(records)})
        return records


__all__ = ["RecordFetcher"]
