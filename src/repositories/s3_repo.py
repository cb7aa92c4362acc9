"""S3 repository for applicant attachments (photo, identity document)."""

import mimetypes
import os
import time
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from utils.error_handling import StoreUnavailableError

UPLOAD_PREFIX = "uploads"


def upload_key(filename: str, now_ms: Optional[int] = None) -> str:
    """Object key ``uploads/<epoch millis>-<basename>``."""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{UPLOAD_PREFIX}/{stamp}-{os.path.basename(filename)}"


class AttachmentRepository:
    """Stores uploaded files and hands back the path string kept on the record."""

    def __init__(self, bucket_name: str, client=None):
        self.bucket_name = bucket_name
        self.client = client or boto3.client("s3")

    def save(self, filename: str, content: bytes, now_ms: Optional[int] = None) -> str:
        """Upload bytes and return the ``/uploads/...`` reference."""
        key = upload_key(filename, now_ms)
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        try:
            self.client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=content,
                ContentType=content_type,
                StorageClass="INTELLIGENT_TIERING",
            )
        except (ClientError, BotoCoreError) as exc:
            raise StoreUnavailableError(f"attachment upload failed: {exc}") from exc
        return f"/{key}"
