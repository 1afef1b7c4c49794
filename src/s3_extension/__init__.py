"""Convenience helpers over the S3 object storage API.

This package wraps a boto3 S3 client with fully paginated listings, parallel
key collection across prefixes, prefix-wide tag updates, bulk deletes and
single-request uploads. Connections, retries and credentials stay with boto3.

Recommended Usage:

    >>> from s3_extension import S3Client, format_path
    >>> s3 = S3Client.with_default_client()
    >>> summaries = s3.get_object_summaries("bucket", "data/", suffix_filter=".avro")
    >>> format_path("bucket", "/data/part-0.avro")
    's3://bucket/data/part-0.avro'

Tests and callers that already hold a boto3 client pass it in directly:

    >>> s3 = S3Client(boto3.client("s3", endpoint_url="http://localhost:9000"))
"""

__version__ = "0.1.0"

from .core.exceptions import (
    MalformedPathError,
    PathNotFoundError,
    S3ExtensionError,
    StorageError,
    StorageListError,
    StorageReadError,
    StorageWriteError,
    ValidationError,
)
from .objectstorage import (
    ListingPage,
    ObjectSummary,
    S3Client,
    S3ClientConfig,
    StoragePath,
    Tag,
    UploadResult,
    create_s3_client,
    format_path,
    to_uri,
)

__all__ = [
    # Client
    "S3Client",
    "S3ClientConfig",
    "create_s3_client",
    # Paths
    "StoragePath",
    "format_path",
    "to_uri",
    # Models
    "ListingPage",
    "ObjectSummary",
    "Tag",
    "UploadResult",
    # Errors
    "MalformedPathError",
    "PathNotFoundError",
    "S3ExtensionError",
    "StorageError",
    "StorageListError",
    "StorageReadError",
    "StorageWriteError",
    "ValidationError",
]
