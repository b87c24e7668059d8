try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from urllib.parse import parse_qs, urlparse

import boto3
import pytest
from botocore.config import Config
from botocore.exceptions import ClientError

from melon_reports.clients import ObjectStorageClient, ObjectStorageError
from melon_reports.core.config import StorageSettings


class RecordingS3Client:
    def __init__(self, error: ClientError | None = None) -> None:
        self.error = error
        self.put_calls: list[dict] = []

    def put_object(self, **kwargs):
        self.put_calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return {"ETag": '"etag"'}


def _settings() -> StorageSettings:
    return StorageSettings(bucket_name="reports", region_name="us-east-1", endpoint_url=None)


@pytest.mark.asyncio
async def test_upload_is_conditional_unless_upsert() -> None:
    boto_client = RecordingS3Client()
    storage = ObjectStorageClient(_settings(), client=boto_client)

    await storage.upload(
        key="analytics-report-1.pdf",
        body=b"%PDF",
        content_type="application/pdf",
        cache_control="max-age=3600",
    )
    await storage.upload(
        key="analytics-report-2.pdf",
        body=b"%PDF",
        content_type="application/pdf",
        cache_control="max-age=3600",
        upsert=True,
    )

    first, second = boto_client.put_calls
    assert first == {
        "Bucket": "reports",
        "Key": "analytics-report-1.pdf",
        "Body": b"%PDF",
        "ContentType": "application/pdf",
        "CacheControl": "max-age=3600",
        "IfNoneMatch": "*",
    }
    assert "IfNoneMatch" not in second


@pytest.mark.asyncio
async def test_client_errors_are_wrapped() -> None:
    error = ClientError(
        {
            "Error": {"Code": "PreconditionFailed", "Message": "At least one precondition failed"},
            "ResponseMetadata": {"HTTPStatusCode": 412},
        },
        "PutObject",
    )
    storage = ObjectStorageClient(_settings(), client=RecordingS3Client(error=error))

    with pytest.raises(ObjectStorageError) as excinfo:
        await storage.upload(
            key="analytics-report-1.pdf",
            body=b"%PDF",
            content_type="application/pdf",
            cache_control="max-age=3600",
        )

    assert excinfo.value.code == "PreconditionFailed"
    assert excinfo.value.status_code == 412
    assert excinfo.value.message == "At least one precondition failed"


@pytest.mark.asyncio
async def test_presigned_url_targets_bucket_and_key() -> None:
    # Presigning is computed locally, so no network access is needed.
    boto_client = boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        config=Config(signature_version="s3v4"),
    )
    storage = ObjectStorageClient(_settings(), client=boto_client)

    url = await storage.create_signed_url(key="analytics-report-1.pdf", expires_in=3600)

    parsed = urlparse(url)
    query = parse_qs(parsed.query)
    assert "reports" in parsed.netloc + parsed.path
    assert parsed.path.endswith("analytics-report-1.pdf")
    assert query["X-Amz-Expires"] == ["3600"]


def test_bucket_name_comes_from_settings() -> None:
    storage = ObjectStorageClient(_settings(), client=RecordingS3Client())

    assert storage.bucket_name == "reports"
