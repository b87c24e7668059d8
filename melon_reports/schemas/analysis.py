"""
Pydantic models for stored watermelon analysis records.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MaturityStatus(str, Enum):
    """Ripeness classification produced by the analysis step."""

    MATURE = "Matang"
    NOT_MATURE = "Belum Matang"


class AnalysisRecord(BaseModel):
    """One immutable analysis row as read from the analysis store."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Opaque record identifier.")
    created_at: datetime = Field(..., description="When the analysis was recorded.")
    location: Optional[str] = Field(None, description="Free-text location label.")
    watermelon_type: Optional[str] = Field(
        None,
        description='Compound "<type>:<variety>" label, e.g. "merah:sugar baby".',
    )
    maturity_status: Optional[str] = Field(
        None, description='Either "Matang" or "Belum Matang".'
    )
    confidence: Optional[float] = Field(None, ge=0, le=100)
    sweetness_level: Optional[float] = Field(None, ge=0, le=10)
    skin_quality: Optional[str] = None

    @property
    def is_mature(self) -> bool:
        return self.maturity_status == MaturityStatus.MATURE.value


__all__ = ["AnalysisRecord", "MaturityStatus"]
