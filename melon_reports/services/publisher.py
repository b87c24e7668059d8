"""
Publish rendered reports to object storage and mint download links.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

from melon_reports.clients import ObjectStorageClient, ObjectStorageError
from melon_reports.core.errors import SignedUrlFailure, UploadFailure
from melon_reports.schemas import SignedLink

logger = logging.getLogger(__name__)

_MIME_REJECTION_MARKER = "mime type"
_MIME_REJECTION_CODES = frozenset({"InvalidMimeType", "UnsupportedMediaType"})


@dataclass(frozen=True, slots=True)
class Artifact:
    """A rendered document and where it will be written."""

    file_name: str
    bucket: str
    content: bytes
    content_type: str


@dataclass(frozen=True, slots=True)
class PublishedReport:
    """Outcome of a successful publish: the stored name and its download link."""

    file_name: str
    link: SignedLink


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def is_mime_rejection(error: ObjectStorageError) -> bool:
    """Whether the store refused the upload because of its content type."""
    if error.code in _MIME_REJECTION_CODES or error.status_code == 415:
        return True
    return _MIME_REJECTION_MARKER in (error.message or "").lower()


class ArtifactPublisher:
    """Name, upload and sign report artifacts. Uploads never overwrite."""

    def __init__(
        self,
        storage: ObjectStorageClient,
        *,
        content_type: str = "application/pdf",
        cache_control: str = "max-age=3600",
        signed_url_ttl_seconds: int = 3600,
        file_prefix: str = "analytics-report",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._storage = storage
        self._content_type = content_type
        self._cache_control = cache_control
        self._ttl = signed_url_ttl_seconds
        self._file_prefix = file_prefix
        self._clock = clock

    def build_artifact(self, document: bytes) -> Artifact:
        """Wrap ``document`` with a ``<prefix>-<epoch-millis>.pdf`` name."""
        epoch_millis = int(self._clock().timestamp() * 1000)
        return Artifact(
            file_name=f"{self._file_prefix}-{epoch_millis}.pdf",
            bucket=self._storage.bucket_name,
            content=document,
            content_type=self._content_type,
        )

    async def publish(self, document: bytes) -> PublishedReport:
        """Upload ``document`` and return a signed link to it.

        Raises:
            UploadFailure: the store rejected the upload. ``mime_rejected`` is set
                when the bucket does not accept the artifact's content type.
            SignedUrlFailure: the upload succeeded but no link could be minted.
                The stored object is left in place.
        """
        artifact = self.build_artifact(document)
        try:
            await self._storage.upload(
                key=artifact.file_name,
                body=artifact.content,
                content_type=artifact.content_type,
                cache_control=self._cache_control,
                upsert=False,
            )
        except ObjectStorageError as exc:
            logger.error("Error uploading report %s: %s", artifact.file_name, exc)
            if is_mime_rejection(exc):
                raise UploadFailure.for_mime_rejection(
                    bucket=artifact.bucket,
                    content_type=artifact.content_type,
                    details=exc.message,
                ) from exc
            raise UploadFailure(details=exc.message) from exc

        try:
            url = await self._storage.create_signed_url(
                key=artifact.file_name, expires_in=self._ttl
            )
        except ObjectStorageError as exc:
            logger.error("Error creating signed URL for %s: %s", artifact.file_name, exc)
            raise SignedUrlFailure(details=exc.message) from exc

        if not url:
            logger.error("Object store returned an empty signed URL for %s", artifact.file_name)
            raise SignedUrlFailure(details="Object store returned an empty signed URL")

        logger.info("Published report", extra={"file_name": artifact.file_name})
        return PublishedReport(
            file_name=artifact.file_name,
            link=SignedLink(
                url=url,
                expires_in_seconds=self._ttl,
                expires_at=self._clock() + timedelta(seconds=self._ttl),
            ),
        )


__all__ = ["Artifact", "ArtifactPublisher", "PublishedReport", "is_mime_rejection"]
