"""Object storage listing operations."""

from .contents import S3ContentFetcher
from .keys import S3KeyCollector
from .pages import S3ObjectLister

__all__ = ["S3ContentFetcher", "S3KeyCollector", "S3ObjectLister"]
