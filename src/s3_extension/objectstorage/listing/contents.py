"""Lazy object content streams for a listed prefix."""

from typing import Iterator, Optional

from botocore.exceptions import BotoCoreError, ClientError

from s3_extension.core import get_logger
from s3_extension.core.exceptions import StorageReadError
from s3_extension.objectstorage.listing.pages import S3ObjectLister

logger = get_logger(__name__)


class S3ContentFetcher:
    """Opens object bodies one at a time as the caller iterates."""

    def __init__(self, client, lister: S3ObjectLister):
        """Initialize S3 content fetcher.

        Args:
            client: boto3 S3 client
            lister: Lister providing the summaries to fetch
        """
        self.client = client
        self.lister = lister

    def open_object(self, bucket: str, key: str):
        """Open the body stream of one object.

        Raises:
            StorageReadError: If the object cannot be fetched
        """
        try:
            response = self.client.get_object(Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            error_msg = f"Failed to get S3 object 's3://{bucket}/{key}': {e}"
            logger.error(error_msg, bucket=bucket, key=key, error=str(e))
            raise StorageReadError(error_msg) from e
        return response["Body"]

    def get_object_contents(
        self, bucket: str, prefix: str, suffix_filter: Optional[str] = None
    ) -> Iterator:
        """Yield an open body stream for each object under a prefix.

        The listing runs on the first ``next()``; after that every ``next()``
        issues exactly one GetObject request and nothing is fetched ahead.
        Each yielded stream belongs to the caller, who must close it, e.g.::

            for body in fetcher.get_object_contents("bucket", "data/"):
                with body:
                    process(body.read())

        Args:
            bucket: S3 bucket name
            prefix: Key prefix to list
            suffix_filter: Optional literal key suffix, e.g. ".avro"

        Yields:
            botocore StreamingBody objects, in listing order
        """
        for summary in self.lister.get_object_summaries(bucket, prefix, suffix_filter):
            yield self.open_object(summary.bucket, summary.key)
