"""
S3 resume blob fetcher.

Reads raw resume bytes for payloads that reference an uploaded object
instead of inlining the document.

Dependencies: boto3
System role: Document source for the processing pipeline (S3 keys)
"""

import asyncio
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from hiring_ai.core.exceptions import ConfigurationError, InvalidInputError, TransientGatewayError

logger = logging.getLogger(__name__)


class S3BlobFetcher:
    """Download resume objects from S3 into memory."""

    def __init__(self, bucket: str, region: str = "us-east-1", client=None) -> None:
        """
        Initialize fetcher.

        Args:
            bucket: S3 bucket name for resume storage
            region: AWS region for the bucket
            client: Optional pre-built boto3 S3 client
        """
        self._bucket = bucket
        self._region = region
        self._s3_client = client

    @property
    def client(self):
        """Lazy-initialized boto3 S3 client."""
        if self._s3_client is None:
            self._s3_client = boto3.client("s3", region_name=self._region)
        return self._s3_client

    async def fetch(self, s3_key: str) -> bytes:
        """
        Read an object's bytes without blocking the event loop.

        Args:
            s3_key: S3 object key (e.g., "resumes/cand-1/cv.pdf")

        Returns:
            bytes: Object content

        Raises:
            ConfigurationError: When no bucket is configured
            InvalidInputError: When the key is empty or the object does not exist
            TransientGatewayError: On any other S3 failure
        """
        if not self._bucket:
            raise ConfigurationError("RESUME_STORAGE_BUCKET is not configured")
        if not s3_key:
            raise InvalidInputError("S3 key is required")

        return await asyncio.to_thread(self._fetch_sync, s3_key)

    def _fetch_sync(self, s3_key: str) -> bytes:
        try:
            response = self.client.get_object(Bucket=self._bucket, Key=s3_key)
            return response["Body"].read()
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in ("404", "NoSuchKey"):
                raise InvalidInputError(
                    f"File not found in S3: {s3_key}",
                    {"s3_key": s3_key},
                ) from e
            logger.warning(
                f"{__name__}:fetch - S3 client error",
                extra={"s3_key": s3_key, "error_code": error_code},
            )
            raise TransientGatewayError(
                f"Failed to download from S3: {e}",
                operation="s3_fetch",
                details={"s3_key": s3_key},
            ) from e
        except BotoCoreError as e:
            raise TransientGatewayError(
                f"Failed to download from S3: {e}",
                operation="s3_fetch",
                details={"s3_key": s3_key},
            ) from e
