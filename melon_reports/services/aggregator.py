"""
Pure aggregation of analysis records into a report payload.

Nothing in this module performs I/O; the same records in the same order always
produce the same ``ReportData`` for a fixed ``generated_at``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional, Sequence
from zoneinfo import ZoneInfo

from melon_reports.core.errors import NoDataError
from melon_reports.schemas import (
    AnalysisRecord,
    DistributionEntry,
    RecentAnalysis,
    ReportData,
    ReportFilters,
    ReportPeriod,
    ReportRequest,
    ReportSummary,
)
from melon_reports.utils.formatting import format_id_date, round_half_up

UNKNOWN_CATEGORY = "unknown"
ALL_LOCATIONS = "Semua lokasi"
ALL_FRUIT_TYPES = "Semua buah"
ALL_VARIETIES = "Semua varietas"
DEFAULT_RECENT_LIMIT = 10


def _percentage(count: int, total: int) -> int:
    return round_half_up(count / total * 100)


def _average(values: Sequence[Optional[float]], total: int) -> int:
    # Missing values count as zero but stay in the denominator.
    return round_half_up(sum(value or 0 for value in values) / total)


def _tally(counts: dict[str, int], category: Optional[str]) -> None:
    category = category or UNKNOWN_CATEGORY
    counts[category] = counts.get(category, 0) + 1


def _to_distribution(counts: dict[str, int], total: int) -> list[DistributionEntry]:
    # dicts keep insertion order, so entries come out in first-seen order
    return [
        DistributionEntry(key=category, count=count, percentage=_percentage(count, total))
        for category, count in counts.items()
    ]


def build_distribution(
    records: Sequence[AnalysisRecord],
    key: Callable[[AnalysisRecord], Optional[str]],
) -> list[DistributionEntry]:
    """Count records per category, preserving first-seen order."""
    counts: dict[str, int] = {}
    for record in records:
        _tally(counts, key(record))
    return _to_distribution(counts, len(records))


def variety_label(watermelon_type: Optional[str]) -> Optional[str]:
    """Variety half of ``"<type>:<variety>"``, or the whole label without one."""
    if not watermelon_type:
        return watermelon_type
    parts = watermelon_type.split(":")
    if len(parts) > 1 and parts[1]:
        return parts[1]
    return watermelon_type


def _recent_row(record: AnalysisRecord, tz: ZoneInfo) -> RecentAnalysis:
    return RecentAnalysis(
        date=format_id_date(record.created_at, tz),
        maturity_status=record.maturity_status,
        confidence=record.confidence,
        sweetness_level=record.sweetness_level,
        fruit_variety=variety_label(record.watermelon_type),
        skin_quality=record.skin_quality,
    )


def build_report_data(
    records: Sequence[AnalysisRecord],
    request: ReportRequest,
    *,
    generated_at: Optional[datetime] = None,
    tz: str = "Asia/Jakarta",
    recent_limit: int = DEFAULT_RECENT_LIMIT,
) -> ReportData:
    """Compute summary figures, distributions and the recent-analyses table.

    ``records`` must already be ordered newest first; the first
    ``recent_limit`` of them become the recent-analyses rows.

    Raises:
        NoDataError: if ``records`` is empty.
    """
    total = len(records)
    if total == 0:
        raise NoDataError()

    zone = ZoneInfo(tz)
    mature_count = sum(1 for record in records if record.is_mature)

    summary = ReportSummary(
        total_analyses=total,
        maturity_rate=_percentage(mature_count, total),
        average_sweetness=_average([record.sweetness_level for record in records], total),
        average_confidence=_average([record.confidence for record in records], total),
    )

    return ReportData(
        generated_at=generated_at or datetime.now(timezone.utc),
        period=ReportPeriod(
            start_date=format_id_date(request.start_date, zone),
            end_date=format_id_date(request.end_date, zone),
        ),
        filters=ReportFilters(
            location=request.location or ALL_LOCATIONS,
            fruit_type=request.fruit_type or ALL_FRUIT_TYPES,
            fruit_variety=request.fruit_variety or ALL_VARIETIES,
        ),
        summary=summary,
        type_distribution=build_distribution(records, lambda record: record.watermelon_type),
        skin_quality_distribution=build_distribution(
            records, lambda record: record.skin_quality
        ),
        recent_analyses=[_recent_row(record, zone) for record in records[:recent_limit]],
    )


__all__ = [
    "ALL_FRUIT_TYPES",
    "ALL_LOCATIONS",
    "ALL_VARIETIES",
    "UNKNOWN_CATEGORY",
    "build_distribution",
    "build_report_data",
    "variety_label",
]
