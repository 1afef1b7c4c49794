"""Single-request file uploads."""

import os
from typing import Union

from botocore.exceptions import BotoCoreError, ClientError

from s3_extension.core import get_logger
from s3_extension.core.exceptions import PathNotFoundError, StorageWriteError
from s3_extension.objectstorage.models import UploadResult

logger = get_logger(__name__)

AES256 = "AES256"
BUCKET_OWNER_FULL_CONTROL = "bucket-owner-full-control"


class S3Uploader:
    """Uploads local files with one PutObject request (no multipart)."""

    def __init__(self, client):
        self.client = client

    def upload_file(
        self,
        file_path: Union[str, os.PathLike],
        bucket: str,
        key: str,
        encrypted: bool = True,
    ) -> UploadResult:
        """Upload a local file to ``s3://bucket/key``.

        The object is always written with the bucket-owner-full-control canned
        ACL. With ``encrypted`` the service is asked for SSE-S3 (AES256)
        encryption at rest; otherwise no encryption header is sent.

        Args:
            file_path: Local file to upload
            bucket: Destination bucket
            key: Destination object key
            encrypted: Request server-side AES256 encryption

        Returns:
            UploadResult with the encryption algorithm the service reports

        Raises:
            PathNotFoundError: If file_path is not a readable file
            StorageWriteError: If the upload request fails
        """
        if not os.path.isfile(file_path):
            logger.error("Upload source missing", file_path=str(file_path))
            raise PathNotFoundError(f"File {file_path} does not exist")

        size = os.path.getsize(file_path)
        extra = {"ACL": BUCKET_OWNER_FULL_CONTROL, "ContentLength": size}
        if encrypted:
            extra["ServerSideEncryption"] = AES256

        logger.info(
            "Uploading file to S3",
            file_path=str(file_path),
            bucket=bucket,
            key=key,
            size=size,
            encrypted=encrypted,
        )

        try:
            with open(file_path, "rb") as body:
                response = self.client.put_object(
                    Bucket=bucket, Key=key, Body=body, **extra
                )
        except (BotoCoreError, ClientError) as e:
            error_msg = f"Failed to upload '{file_path}' to 's3://{bucket}/{key}': {e}"
            logger.error(error_msg, bucket=bucket, key=key, error=str(e))
            raise StorageWriteError(error_msg) from e

        result = UploadResult.from_response(response)
        logger.info(
            "File uploaded to S3",
            bucket=bucket,
            key=key,
            server_side_encryption=result.server_side_encryption,
        )
        return result
