"""Object storage operations for S3-compatible services."""

from .clients import S3ClientConfig, S3ClientManager
from .models import ListingPage, ObjectSummary, Tag, UploadResult
from .paths import StoragePath, format_path, to_uri
from .s3_operations import S3Client, create_s3_client

__all__ = [
    "ListingPage",
    "ObjectSummary",
    "S3Client",
    "S3ClientConfig",
    "S3ClientManager",
    "StoragePath",
    "Tag",
    "UploadResult",
    "create_s3_client",
    "format_path",
    "to_uri",
]
