"""Fully paginated object listings and their flattened summaries."""

from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from s3_extension.core import get_logger
from s3_extension.core.exceptions import StorageListError
from s3_extension.objectstorage.models import ListingPage, ObjectSummary

logger = get_logger(__name__)


class S3ObjectLister:
    """Lists every object under a bucket prefix, one page per round trip."""

    def __init__(self, client):
        """Initialize S3 object lister.

        Args:
            client: boto3 S3 client
        """
        self.client = client

    def list_all_objects(self, bucket: str, prefix: str) -> list[ListingPage]:
        """Fetch every listing page for a prefix.

        The first request carries no continuation token; each following
        request uses the token of the truncated page before it. All pages up
        to and including the first non-truncated one are returned, so an
        empty prefix still yields a single empty page.

        Args:
            bucket: S3 bucket name
            prefix: Key prefix to list (may be empty for the whole bucket)

        Returns:
            Listing pages in request order

        Raises:
            StorageListError: If any page request fails
        """
        logger.debug("Listing S3 objects", bucket=bucket, prefix=prefix)

        pages: list[ListingPage] = []
        try:
            paginator = self.client.get_paginator("list_objects_v2")
            for response in paginator.paginate(Bucket=bucket, Prefix=prefix):
                page = ListingPage.from_response(bucket, response)
                pages.append(page)
                if not page.truncated:
                    break
        except (BotoCoreError, ClientError) as e:
            error_msg = (
                f"Failed to list S3 objects for 's3://{bucket}/{prefix}' "
                f"after {len(pages)} page(s): {e}"
            )
            logger.error(error_msg, bucket=bucket, prefix=prefix, error=str(e))
            raise StorageListError(error_msg) from e

        if not pages:
            pages.append(ListingPage())

        logger.info(
            "S3 objects listed",
            bucket=bucket,
            prefix=prefix,
            page_count=len(pages),
            object_count=sum(len(page.summaries) for page in pages),
        )
        return pages

    def get_object_summaries(
        self, bucket: str, prefix: str, suffix_filter: Optional[str] = None
    ) -> list[ObjectSummary]:
        """Flatten all pages for a prefix into one ordered list of summaries.

        Args:
            bucket: S3 bucket name
            prefix: Key prefix to list
            suffix_filter: Keep only keys ending with this literal string,
                e.g. ".avro". Case-sensitive; not a glob or regex.

        Returns:
            Summaries in page order, then service order within a page
        """
        summaries = [
            summary
            for page in self.list_all_objects(bucket, prefix)
            for summary in page.summaries
            if suffix_filter is None or summary.key.endswith(suffix_filter)
        ]

        if suffix_filter is not None:
            logger.debug(
                "S3 object summaries filtered",
                bucket=bucket,
                prefix=prefix,
                suffix_filter=suffix_filter,
                matched=len(summaries),
            )
        return summaries
