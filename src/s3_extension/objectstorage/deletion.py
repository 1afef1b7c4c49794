"""Bulk deletion of object keys in a single request."""

from typing import Sequence

from botocore.exceptions import BotoCoreError, ClientError

from s3_extension.core import get_logger
from s3_extension.core.exceptions import StorageWriteError

logger = get_logger(__name__)


class S3BulkDeleter:
    """Deletes a batch of keys with one DeleteObjects call."""

    def __init__(self, client):
        self.client = client

    def delete_objects(self, bucket: str, keys: Sequence[str]) -> int:
        """Delete the given keys and report how many the service confirmed.

        The request is sent with quiet mode off so the response lists every
        deleted key. Keys the service refuses are logged but not raised; the
        only signal of a partial delete is a count below ``len(keys)``.

        Args:
            bucket: S3 bucket name
            keys: Object keys to delete (no version ids)

        Returns:
            Number of keys the service reported as deleted

        Raises:
            StorageWriteError: If the request itself fails
        """
        if not keys:
            logger.info("No S3 keys to delete", bucket=bucket)
            return 0

        try:
            response = self.client.delete_objects(
                Bucket=bucket,
                Delete={"Objects": [{"Key": key} for key in keys], "Quiet": False},
            )
        except (BotoCoreError, ClientError) as e:
            error_msg = f"Failed to delete {len(keys)} S3 object(s) from '{bucket}': {e}"
            logger.error(error_msg, bucket=bucket, error=str(e))
            raise StorageWriteError(error_msg) from e

        deleted = len(response.get("Deleted", []))
        errors = response.get("Errors", [])
        if errors:
            logger.warning(
                "Some S3 objects were not deleted",
                bucket=bucket,
                requested=len(keys),
                deleted=deleted,
                failed=len(errors),
            )

        logger.info("S3 objects deleted", bucket=bucket, requested=len(keys), deleted=deleted)
        return deleted
