"""
Error taxonomy for the analytics report pipeline.

Every stage raises a subclass of ``ReportPipelineError``; the orchestrator is the
only place that turns one into an HTTP error envelope.
"""

from __future__ import annotations

from enum import Enum
from http import HTTPStatus


class ErrorKind(str, Enum):
    """Error codes exposed in the response envelope."""

    MISSING_PARAMETERS = "MISSING_PARAMETERS"
    DATABASE_ERROR = "DATABASE_ERROR"
    NO_DATA = "NO_DATA"
    UPLOAD_ERROR = "UPLOAD_ERROR"
    SIGNED_URL_ERROR = "SIGNED_URL_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    @property
    def status_code(self) -> HTTPStatus:
        return _STATUS_BY_KIND[self]


_STATUS_BY_KIND = {
    ErrorKind.MISSING_PARAMETERS: HTTPStatus.BAD_REQUEST,
    ErrorKind.DATABASE_ERROR: HTTPStatus.INTERNAL_SERVER_ERROR,
    ErrorKind.NO_DATA: HTTPStatus.NOT_FOUND,
    ErrorKind.UPLOAD_ERROR: HTTPStatus.INTERNAL_SERVER_ERROR,
    ErrorKind.SIGNED_URL_ERROR: HTTPStatus.INTERNAL_SERVER_ERROR,
    ErrorKind.INTERNAL_ERROR: HTTPStatus.INTERNAL_SERVER_ERROR,
}


class ReportPipelineError(Exception):
    """Base class for failures surfaced by a pipeline stage."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR
    default_message = "Terjadi kesalahan saat membuat PDF"

    def __init__(self, message: str | None = None, *, details: str | None = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    @property
    def status_code(self) -> HTTPStatus:
        return self.kind.status_code


class MissingParametersError(ReportPipelineError):
    """Raised when the request lacks a usable date range."""

    kind = ErrorKind.MISSING_PARAMETERS
    default_message = "Tanggal mulai dan tanggal akhir harus diisi"


class FetchFailure(ReportPipelineError):
    """Raised when the analysis store query fails."""

    kind = ErrorKind.DATABASE_ERROR
    default_message = "Gagal mengambil data analisis"


class NoDataError(ReportPipelineError):
    """Raised when no analysis record matches the request."""

    kind = ErrorKind.NO_DATA
    default_message = "Tidak ada data untuk periode yang dipilih"


class RenderFailure(ReportPipelineError):
    """Raised when the document renderer cannot produce the report."""

    kind = ErrorKind.INTERNAL_ERROR
    default_message = "Terjadi kesalahan saat membuat PDF"


class UploadFailure(ReportPipelineError):
    """Raised when the object store rejects the rendered artifact."""

    kind = ErrorKind.UPLOAD_ERROR
    default_message = "Gagal mengunggah PDF ke storage"

    def __init__(
        self,
        message: str | None = None,
        *,
        details: str | None = None,
        mime_rejected: bool = False,
    ) -> None:
        super().__init__(message, details=details)
        self.mime_rejected = mime_rejected

    @classmethod
    def for_mime_rejection(
        cls, *, bucket: str, content_type: str, details: str | None = None
    ) -> "UploadFailure":
        """Build the variant that tells operators how to provision the bucket."""
        message = (
            "Storage bucket tidak mendukung PDF. "
            f'Silakan buat bucket "{bucket}" dengan allowed_mime_types: ["{content_type}"]. '
            "Lihat STORAGE_SETUP.md untuk panduan."
        )
        return cls(message, details=details, mime_rejected=True)


class SignedUrlFailure(ReportPipelineError):
    """Raised when the download link cannot be minted after a successful upload."""

    kind = ErrorKind.SIGNED_URL_ERROR
    default_message = "Gagal membuat URL download"


__all__ = [
    "ErrorKind",
    "FetchFailure",
    "MissingParametersError",
    "NoDataError",
    "RenderFailure",
    "ReportPipelineError",
    "SignedUrlFailure",
    "UploadFailure",
]
