"""Public schema exports."""

from .analysis import AnalysisRecord, MaturityStatus
from .report import (
    DistributionEntry,
    ErrorBody,
    ErrorEnvelope,
    RecentAnalysis,
    ReportData,
    ReportExportResult,
    ReportExportSuccess,
    ReportFilters,
    ReportPeriod,
    ReportRequest,
    ReportSummary,
    SignedLink,
)

__all__ = [
    "AnalysisRecord",
    "DistributionEntry",
    "ErrorBody",
    "ErrorEnvelope",
    "MaturityStatus",
    "RecentAnalysis",
    "ReportData",
    "ReportExportResult",
    "ReportExportSuccess",
    "ReportFilters",
    "ReportPeriod",
    "ReportRequest",
    "ReportSummary",
    "SignedLink",
]
