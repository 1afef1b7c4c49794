"""Tag updates for every object under a set of prefixes.

Each object is updated with a read-modify-write of its whole tag set. There is
no conditional write, so a concurrent writer on the same key can be lost (last
writer wins), and a failure partway through leaves earlier objects updated.
"""

from typing import Callable, Sequence

from botocore.exceptions import BotoCoreError, ClientError

from s3_extension.core import get_logger, get_tracer
from s3_extension.core.exceptions import StorageReadError, StorageWriteError
from s3_extension.objectstorage.listing.keys import S3KeyCollector
from s3_extension.objectstorage.models import Tag

logger = get_logger(__name__)
tracer = get_tracer(__name__)


class S3TagMutator:
    """Adds or removes one tag on all objects matched by some prefixes."""

    def __init__(self, client, key_collector: S3KeyCollector):
        """Initialize S3 tag mutator.

        Args:
            client: boto3 S3 client
            key_collector: Resolves prefixes to object keys
        """
        self.client = client
        self.key_collector = key_collector

    def get_object_tags(self, bucket: str, key: str) -> list[Tag]:
        """Read the current tag set of one object.

        Raises:
            StorageReadError: If the tag set cannot be read
        """
        try:
            response = self.client.get_object_tagging(Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            error_msg = f"Failed to get tags for 's3://{bucket}/{key}': {e}"
            logger.error(error_msg, bucket=bucket, key=key, error=str(e))
            raise StorageReadError(error_msg) from e
        return [Tag.from_dict(tag) for tag in response.get("TagSet", [])]

    def set_object_tags(self, bucket: str, key: str, tags: Sequence[Tag]) -> None:
        """Replace the tag set of one object; an empty sequence clears it.

        Raises:
            StorageWriteError: If the tag set cannot be written
        """
        try:
            self.client.put_object_tagging(
                Bucket=bucket,
                Key=key,
                Tagging={"TagSet": [tag.to_dict() for tag in tags]},
            )
        except (BotoCoreError, ClientError) as e:
            error_msg = f"Failed to set tags for 's3://{bucket}/{key}': {e}"
            logger.error(error_msg, bucket=bucket, key=key, error=str(e))
            raise StorageWriteError(error_msg) from e

    def _update_tags(
        self,
        bucket: str,
        prefixes: Sequence[str],
        change: Callable[[list[Tag]], list[Tag]],
        action: str,
    ) -> int:
        keys = self.key_collector.get_keys(bucket, prefixes)

        with tracer.start_as_current_span(f"s3.{action}") as span:
            span.set_attribute("s3.bucket", bucket)
            span.set_attribute("s3.key_count", len(keys))

            for updated, key in enumerate(keys):
                try:
                    self.set_object_tags(
                        bucket, key, change(self.get_object_tags(bucket, key))
                    )
                except (StorageReadError, StorageWriteError):
                    logger.error(
                        "S3 tag update stopped",
                        action=action,
                        bucket=bucket,
                        key=key,
                        updated=updated,
                        remaining=len(keys) - updated,
                    )
                    raise

        logger.info("S3 tags updated", action=action, bucket=bucket, updated=len(keys))
        return len(keys)

    def add_tag_for_prefixes(
        self, bucket: str, prefixes: Sequence[str], tag: Tag
    ) -> int:
        """Append a tag to every object under the prefixes.

        Existing tags with the same key are kept, so the object can end up
        with two tags sharing a key.

        Args:
            bucket: S3 bucket name
            prefixes: Key prefixes selecting the objects
            tag: Tag to append

        Returns:
            Number of objects updated

        Raises:
            StorageListError: If resolving the keys fails
            StorageReadError: If reading a tag set fails
            StorageWriteError: If writing a tag set fails
        """
        return self._update_tags(bucket, prefixes, lambda tags: tags + [tag], "add_tag")

    def delete_tag_for_prefixes(
        self, bucket: str, prefixes: Sequence[str], tag_key: str
    ) -> int:
        """Remove every tag with the given key from each object under the prefixes.

        Tags with other keys are kept. If nothing remains the object's tag set
        is written back empty.

        Returns:
            Number of objects updated
        """
        return self._update_tags(
            bucket,
            prefixes,
            lambda tags: [tag for tag in tags if tag.key != tag_key],
            "delete_tag",
        )
