"""
Application configuration models and helpers.

Centralizes settings management so the FastAPI app, the report pipeline and the
operator scripts share a consistent configuration surface.
"""

from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()


_SETTINGS_CONFIG = SettingsConfigDict(populate_by_name=True, extra="ignore")


class AnalysisStoreSettings(BaseSettings):
    """Location of the analysis record store."""

    model_config = _SETTINGS_CONFIG

    db_path: str = Field("data/analyses.db", validation_alias="ANALYSIS_DB_PATH")
    table_name: str = Field("analyses", validation_alias="ANALYSIS_TABLE_NAME")

    @field_validator("table_name")
    @classmethod
    def _check_table_name(cls, value: str) -> str:
        """Table names are interpolated into SQL, so keep them to identifiers."""
        if not value.isidentifier():
            raise ValueError("ANALYSIS_TABLE_NAME must be a plain identifier")
        return value


class StorageSettings(BaseSettings):
    """Object storage used to publish rendered reports."""

    model_config = _SETTINGS_CONFIG

    bucket_name: str = Field("reports", validation_alias="REPORTS_BUCKET")
    region_name: str = Field("us-east-1", validation_alias="AWS_REGION")
    endpoint_url: str | None = Field(
        None,
        validation_alias="S3_ENDPOINT_URL",
        description="Optional endpoint for S3-compatible stores (MinIO, Supabase, R2).",
    )
    signed_url_ttl_seconds: int = Field(3600, validation_alias="REPORT_SIGNED_URL_TTL", gt=0)
    cache_control: str = Field("max-age=3600", validation_alias="REPORT_CACHE_CONTROL")
    content_type: str = Field("application/pdf", validation_alias="REPORT_CONTENT_TYPE")


class ReportSettings(BaseSettings):
    """Presentation settings for generated reports."""

    model_config = _SETTINGS_CONFIG

    timezone: str = Field("Asia/Jakarta", validation_alias="REPORT_TIMEZONE")
    recent_limit: int = Field(10, validation_alias="REPORT_RECENT_LIMIT", gt=0)
    file_prefix: str = Field("analytics-report", validation_alias="REPORT_FILE_PREFIX")
    stream_chunk_size: int = Field(
        64 * 1024, validation_alias="REPORT_STREAM_CHUNK_SIZE", gt=0
    )

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    model_config = SettingsConfigDict(
        populate_by_name=True,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    analysis_store: AnalysisStoreSettings = Field(default_factory=AnalysisStoreSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    report: ReportSettings = Field(default_factory=ReportSettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()


__all__ = [
    "AnalysisStoreSettings",
    "AppSettings",
    "ReportSettings",
    "StorageSettings",
    "get_settings",
]
