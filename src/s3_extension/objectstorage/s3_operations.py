"""S3 convenience operations: listing, key collection, tagging, upload, delete.

S3Client wires the individual helpers around one boto3 client. Pass an already
configured client for full control (and for tests), or use one of the factory
classmethods to have S3ClientManager build it.

Example:
    >>> from s3_extension import S3Client, Tag
    >>> s3 = S3Client.with_default_client()
    >>> keys = s3.get_keys("my-bucket", ["data/2023/", "data/2024/"])
    >>> s3.add_tag_for_prefixes("my-bucket", ["data/2023/"], Tag("tier", "cold"))
"""

import os
from typing import Iterator, Optional, Sequence, Union

from s3_extension.core import get_logger
from s3_extension.objectstorage.clients import S3ClientConfig, S3ClientManager
from s3_extension.objectstorage.deletion import S3BulkDeleter
from s3_extension.objectstorage.listing import (
    S3ContentFetcher,
    S3KeyCollector,
    S3ObjectLister,
)
from s3_extension.objectstorage.models import (
    ListingPage,
    ObjectSummary,
    Tag,
    UploadResult,
)
from s3_extension.objectstorage.paths import DEFAULT_SCHEME, format_path
from s3_extension.objectstorage.tagging import S3TagMutator
from s3_extension.objectstorage.upload import S3Uploader

logger = get_logger(__name__)


class S3Client:
    """Convenience layer over a boto3 S3 client."""

    def __init__(self, client, max_workers: Optional[int] = None):
        """Initialize the convenience layer.

        Args:
            client: Configured boto3 S3 client, shared by all operations
            max_workers: Pool size for multi-prefix key collection
        """
        self.client = client
        self.lister = S3ObjectLister(client)
        self.key_collector = S3KeyCollector(self.lister, max_workers=max_workers)
        self.content_fetcher = S3ContentFetcher(client, self.lister)
        self.tag_mutator = S3TagMutator(client, self.key_collector)
        self.deleter = S3BulkDeleter(client)
        self.uploader = S3Uploader(client)

    @classmethod
    def from_config(
        cls, config: S3ClientConfig, max_workers: Optional[int] = None
    ) -> "S3Client":
        """Build the boto3 client from explicit connection settings."""
        return cls(S3ClientManager(config).client, max_workers=max_workers)

    @classmethod
    def with_default_client(cls, max_workers: Optional[int] = None) -> "S3Client":
        """Build the boto3 client from the default credential and region chains."""
        return cls.from_config(S3ClientConfig.default_chain(), max_workers=max_workers)

    @staticmethod
    def format_path(bucket: str, object_key: str, scheme: str = DEFAULT_SCHEME) -> str:
        return format_path(bucket, object_key, scheme)

    def list_all_objects(self, bucket: str, prefix: str) -> list[ListingPage]:
        return self.lister.list_all_objects(bucket, prefix)

    def get_object_summaries(
        self, bucket: str, prefix: str, suffix_filter: Optional[str] = None
    ) -> list[ObjectSummary]:
        return self.lister.get_object_summaries(bucket, prefix, suffix_filter)

    def get_object_contents(
        self, bucket: str, prefix: str, suffix_filter: Optional[str] = None
    ) -> Iterator:
        return self.content_fetcher.get_object_contents(bucket, prefix, suffix_filter)

    def get_keys(self, bucket: str, prefixes: Sequence[str]) -> list[str]:
        return self.key_collector.get_keys(bucket, prefixes)

    def get_object_tags(self, bucket: str, key: str) -> list[Tag]:
        return self.tag_mutator.get_object_tags(bucket, key)

    def upload_file(
        self,
        file_path: Union[str, os.PathLike],
        bucket: str,
        key: str,
        encrypted: bool = True,
    ) -> UploadResult:
        return self.uploader.upload_file(file_path, bucket, key, encrypted=encrypted)

    def delete_objects(self, bucket: str, keys: Sequence[str]) -> int:
        return self.deleter.delete_objects(bucket, keys)

    def add_tag_for_prefixes(
        self, bucket: str, prefixes: Sequence[str], tag: Tag
    ) -> int:
        return self.tag_mutator.add_tag_for_prefixes(bucket, prefixes, tag)

    def delete_tag_for_prefixes(
        self, bucket: str, prefixes: Sequence[str], tag_key: str
    ) -> int:
        return self.tag_mutator.delete_tag_for_prefixes(bucket, prefixes, tag_key)


def create_s3_client(
    access_key_id: Optional[str] = None,
    secret_access_key: Optional[str] = None,
    session_token: Optional[str] = None,
    region_name: Optional[str] = "us-east-1",
    endpoint_url: Optional[str] = None,
    aws_profile: Optional[str] = None,
    max_workers: Optional[int] = None,
) -> S3Client:
    """Convenience function to build an S3Client from connection parameters.

    Args:
        access_key_id: AWS access key ID
        secret_access_key: AWS secret access key
        session_token: AWS session token for temporary credentials
        region_name: AWS region name
        endpoint_url: Custom S3 endpoint URL
        aws_profile: AWS CLI profile name
        max_workers: Pool size for multi-prefix key collection

    Returns:
        S3Client backed by a new boto3 client
    """
    config = S3ClientConfig(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=session_token,
        region_name=region_name,
        endpoint_url=endpoint_url,
        aws_profile=aws_profile,
    )
    logger.debug("Creating S3 client", endpoint_url=endpoint_url, profile=aws_profile)
    return S3Client.from_config(config, max_workers=max_workers)
