"""
S3 object storage for original resume files.

boto3 is synchronous, so calls run in a worker thread.
"""

import asyncio
from functools import lru_cache

import boto3
import structlog
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from resume_enhancer.config import get_settings
from resume_enhancer.exceptions import StorageError

logger = structlog.get_logger()


class StorageService:
    """Upload, fetch and sign access to objects in one bucket."""

    def __init__(self, bucket: str | None = None, client=None):
        settings = get_settings()
        self.bucket = bucket or settings.s3_bucket_name
        self.default_expiration = settings.signed_url_expiration

        if client is None:
            config = Config(
                region_name=settings.aws_region,
                retries={"max_attempts": 3, "mode": "standard"},
            )
            client = boto3.client(
                "s3",
                config=config,
                aws_access_key_id=settings.aws_access_key_id or None,
                aws_secret_access_key=settings.aws_secret_access_key or None,
            )
        self.client = client

    async def upload(self, key: str, content: bytes, content_type: str) -> str:
        """Store ``content`` under ``key`` and return the key."""
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("s3_upload_error", bucket=self.bucket, key=key, error=str(e))
            raise StorageError(f"Failed to upload file: {e}") from e

        logger.info("s3_upload_success", bucket=self.bucket, key=key, size_bytes=len(content))
        return key

    async def download(self, key: str) -> bytes:
        """Fetch the whole object body."""

        def _read() -> bytes:
            response = self.client.get_object(Bucket=self.bucket, Key=key)
            body = response.get("Body")
            if body is None:
                raise StorageError("No file body returned from storage")
            return body.read()

        try:
            return await asyncio.to_thread(_read)
        except (ClientError, BotoCoreError) as e:
            logger.error("s3_download_error", bucket=self.bucket, key=key, error=str(e))
            raise StorageError(f"Failed to download file: {e}") from e

    async def generate_presigned_url(self, key: str, expiration: int | None = None) -> str:
        """Mint a time-limited GET URL for ``key``."""
        expires_in = expiration if expiration is not None else self.default_expiration
        try:
            return await asyncio.to_thread(
                self.client.generate_presigned_url,
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=expires_in,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("s3_presign_error", bucket=self.bucket, key=key, error=str(e))
            raise StorageError(f"Failed to create signed URL: {e}") from e


@lru_cache
def get_storage() -> StorageService:
    """Get the shared storage service."""
    return StorageService()
