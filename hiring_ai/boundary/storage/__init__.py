"""Object storage boundary for raw resume documents."""

from hiring_ai.boundary.storage.s3_blob_fetcher import S3BlobFetcher

__all__ = ["S3BlobFetcher"]
