"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_analysis_store,
    get_app_settings,
    get_artifact_publisher,
    get_document_renderer,
    get_object_storage_client,
    get_report_pipeline,
)

__all__ = [
    "get_analysis_store",
    "get_app_settings",
    "get_artifact_publisher",
    "get_document_renderer",
    "get_object_storage_client",
    "get_report_pipeline",
]
