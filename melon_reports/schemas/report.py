"""
Pydantic models for analytics report requests, report payloads and envelopes.

Wire names are camelCase to match the existing web client; Python attributes
stay snake_case.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReportRequest(_CamelModel):
    """Validated report request. Dates are timezone-aware instants."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    start_date: datetime
    end_date: datetime
    location: Optional[str] = Field(None, description="Exact location filter.")
    fruit_type: Optional[str] = Field(
        None, description='Type half of the compound watermelon type ("merah").'
    )
    fruit_variety: Optional[str] = Field(
        None, description='Variety half of the compound watermelon type ("sugar baby").'
    )


class ReportPeriod(_CamelModel):
    start_date: str
    end_date: str


class ReportFilters(_CamelModel):
    location: str
    fruit_type: str
    fruit_variety: str


class ReportSummary(_CamelModel):
    total_analyses: int
    maturity_rate: int
    average_sweetness: int
    average_confidence: int


class DistributionEntry(_CamelModel):
    """Count and rounded percentage for one observed category value."""

    key: str
    count: int
    percentage: int


class RecentAnalysis(_CamelModel):
    """Display-only projection of an analysis record."""

    date: str
    maturity_status: Optional[str] = None
    confidence: Optional[float] = None
    sweetness_level: Optional[float] = None
    fruit_variety: Optional[str] = None
    skin_quality: Optional[str] = None


class ReportData(_CamelModel):
    """Everything the document renderer needs for one report."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    generated_at: datetime
    period: ReportPeriod
    filters: ReportFilters
    summary: ReportSummary
    type_distribution: List[DistributionEntry] = Field(default_factory=list)
    skin_quality_distribution: List[DistributionEntry] = Field(default_factory=list)
    recent_analyses: List[RecentAnalysis] = Field(default_factory=list)


class SignedLink(_CamelModel):
    """Time-limited download URL minted by the object store."""

    url: str
    expires_in_seconds: int
    expires_at: datetime


class ReportExportResult(_CamelModel):
    download_url: str
    file_name: str
    expires_in: int
    expires_at: datetime


class ReportExportSuccess(BaseModel):
    success: Literal[True] = True
    data: ReportExportResult


class ErrorBody(BaseModel):
    code: str
    message: str
    details: Optional[str] = None


class ErrorEnvelope(BaseModel):
    """Uniform failure envelope returned for every error kind."""

    success: Literal[False] = False
    error: ErrorBody


__all__ = [
    "DistributionEntry",
    "ErrorBody",
    "ErrorEnvelope",
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
