"""
Amazon S3 (or S3-compatible) client wrapper for publishing report artifacts.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from melon_reports.core.config import StorageSettings


class ObjectStorageError(Exception):
    """Raised when the object store rejects a request."""

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code

    @classmethod
    def from_client_error(cls, exc: ClientError) -> "ObjectStorageError":
        error = exc.response.get("Error", {})
        metadata = exc.response.get("ResponseMetadata", {})
        return cls(
            error.get("Message") or str(exc),
            code=error.get("Code"),
            status_code=metadata.get("HTTPStatusCode"),
        )


class ObjectStorageClient:
    """Upload binary blobs to a single bucket and mint presigned download URLs."""

    def __init__(self, settings: StorageSettings, client: Any | None = None) -> None:
        self._settings = settings
        self._client = client or boto3.client(
            "s3",
            region_name=settings.region_name,
            endpoint_url=settings.endpoint_url,
        )

    @property
    def bucket_name(self) -> str:
        return self._settings.bucket_name

    async def upload(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        cache_control: str,
        upsert: bool = False,
    ) -> None:
        """Store ``body`` under ``key``.

        With ``upsert=False`` the write is conditional (``If-None-Match: *``),
        so an existing object with the same key is never overwritten.
        """
        params: dict[str, Any] = {
            "Bucket": self._settings.bucket_name,
            "Key": key,
            "Body": body,
            "ContentType": content_type,
            "CacheControl": cache_control,
        }
        if not upsert:
            params["IfNoneMatch"] = "*"

        def _execute_upload() -> None:
            self._client.put_object(**params)

        try:
            await asyncio.to_thread(_execute_upload)
        except ClientError as exc:
            raise ObjectStorageError.from_client_error(exc) from exc
        except BotoCoreError as exc:
            raise ObjectStorageError(str(exc)) from exc

    async def create_signed_url(self, *, key: str, expires_in: int) -> str:
        """Return a presigned GET URL for ``key`` valid for ``expires_in`` seconds."""

        def _execute_presign() -> str:
            return self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self._settings.bucket_name, "Key": key},
                ExpiresIn=expires_in,
            )

        try:
            return await asyncio.to_thread(_execute_presign)
        except ClientError as exc:
            raise ObjectStorageError.from_client_error(exc) from exc
        except BotoCoreError as exc:
            raise ObjectStorageError(str(exc)) from exc


__all__ = ["ObjectStorageClient", "ObjectStorageError"]
