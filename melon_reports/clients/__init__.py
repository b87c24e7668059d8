"""Expose constructed client wrappers."""

from .pdf_renderer import DocumentRenderError, WeasyPrintRenderer
from .s3_storage import ObjectStorageClient, ObjectStorageError
from .sqlite_store import AnalysisStore, AnalysisStoreError

__all__ = [
    "AnalysisStore",
    "AnalysisStoreError",
    "DocumentRenderError",
    "ObjectStorageClient",
    "ObjectStorageError",
    "WeasyPrintRenderer",
]
