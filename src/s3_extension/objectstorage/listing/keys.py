"""Parallel key collection across several prefixes of one bucket."""

import os
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Optional, Sequence

from s3_extension.core import get_logger, get_tracer, settings
from s3_extension.objectstorage.listing.pages import S3ObjectLister

logger = get_logger(__name__)
tracer = get_tracer(__name__)


class S3KeyCollector:
    """Collects object keys for many prefixes, one worker per prefix.

    Each prefix paginates sequentially on its own worker; prefixes run
    concurrently on a bounded thread pool sharing the same boto3 client.
    """

    def __init__(self, lister: S3ObjectLister, max_workers: Optional[int] = None):
        """Initialize S3 key collector.

        Args:
            lister: Lister used for each prefix
            max_workers: Pool size; defaults to settings.max_workers, then to
                min(32, cpu_count + 4) like ThreadPoolExecutor
        """
        self.lister = lister
        self.max_workers = max_workers if max_workers is not None else settings.max_workers

    def _keys_for_prefix(self, bucket: str, prefix: str) -> list[str]:
        return [s.key for s in self.lister.get_object_summaries(bucket, prefix)]

    def get_keys(self, bucket: str, prefixes: Sequence[str]) -> list[str]:
        """Collect the keys under every prefix.

        Keys matched by more than one prefix appear once per matching prefix;
        callers that need set semantics must deduplicate. Keys of one prefix
        keep listing order and prefixes are concatenated in the order given.

        Args:
            bucket: S3 bucket name
            prefixes: Key prefixes to list

        Returns:
            All matching keys, duplicates preserved

        Raises:
            StorageListError: From the first prefix whose listing fails;
                prefixes not yet started are cancelled
        """
        if not prefixes:
            return []

        limit = self.max_workers or min(32, (os.cpu_count() or 1) + 4)
        workers = min(len(prefixes), limit)

        with tracer.start_as_current_span("s3.collect_keys") as span:
            span.set_attribute("s3.bucket", bucket)
            span.set_attribute("s3.prefix_count", len(prefixes))

            executor = ThreadPoolExecutor(
                max_workers=workers, thread_name_prefix="s3-keys"
            )
            try:
                futures: list[Future] = [
                    executor.submit(self._keys_for_prefix, bucket, prefix)
                    for prefix in prefixes
                ]
                done, not_done = wait(futures, return_when=FIRST_EXCEPTION)

                for future in futures:
                    if future in done and future.exception() is not None:
                        for pending in not_done:
                            pending.cancel()
                        logger.error(
                            "S3 key collection aborted",
                            bucket=bucket,
                            prefix_count=len(prefixes),
                            unfinished=len(not_done),
                        )
                        raise future.exception()  # type: ignore[misc]

                keys = [key for future in futures for key in future.result()]
            finally:
                executor.shutdown(wait=False, cancel_futures=True)

            span.set_attribute("s3.key_count", len(keys))

        logger.info(
            "S3 keys collected",
            bucket=bucket,
            prefix_count=len(prefixes),
            key_count=len(keys),
        )
        return keys
