"""
Factory functions to provide shared clients and services as FastAPI dependencies.

Each collaborator is built once from settings and handed to the pipeline at
construction time; tests replace any of them through
``app.dependency_overrides``.
"""

from functools import lru_cache

from melon_reports.clients import AnalysisStore, ObjectStorageClient, WeasyPrintRenderer
from melon_reports.core.config import AppSettings, get_settings
from melon_reports.pipeline import ReportPipeline, ReportStages
from melon_reports.services import (
    ArtifactPublisher,
    DocumentRendererAdapter,
    RecordFetcher,
)


@lru_cache()
def _settings():
    """Internal helper to cache settings for client factories."""
    return get_settings()


def get_app_settings() -> AppSettings:
    """FastAPI dependency returning application settings."""
    return _settings()


@lru_cache()
def get_analysis_store() -> AnalysisStore:
    """Provide the shared analysis record store."""
    settings = _settings()
    return AnalysisStore(
        settings.analysis_store.db_path,
        table_name=settings.analysis_store.table_name,
    )


@lru_cache()
def get_object_storage_client() -> ObjectStorageClient:
    """Provide the S3 client used to publish report artifacts."""
    return ObjectStorageClient(_settings().storage)


@lru_cache()
def get_document_renderer() -> WeasyPrintRenderer:
    """Provide the PDF renderer."""
    settings = _settings()
    return WeasyPrintRenderer(
        timezone=settings.report.timezone,
        chunk_size=settings.report.stream_chunk_size,
    )


def get_artifact_publisher() -> ArtifactPublisher:
    """Build an artifact publisher over the configured bucket."""
    settings = _settings()
    return ArtifactPublisher(
        get_object_storage_client(),
        content_type=settings.storage.content_type,
        cache_control=settings.storage.cache_control,
        signed_url_ttl_seconds=settings.storage.signed_url_ttl_seconds,
        file_prefix=settings.report.file_prefix,
    )


@lru_cache()
def get_report_pipeline() -> ReportPipeline:
    """Provide the compiled report pipeline."""
    settings = _settings()
    stages = ReportStages(
        fetcher=RecordFetcher(get_analysis_store()),
        renderer=DocumentRendererAdapter(get_document_renderer()),
        publisher=get_artifact_publisher(),
        timezone=settings.report.timezone,
        recent_limit=settings.report.recent_limit,
    )
    return ReportPipeline(stages)


__all__ = [
    "get_analysis_store",
    "get_app_settings",
    "get_artifact_publisher",
    "get_document_renderer",
    "get_object_storage_client",
    "get_report_pipeline",
]
