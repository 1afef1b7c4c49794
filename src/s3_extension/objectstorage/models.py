"""Value types returned by the object storage helpers.

Each type is a read-only projection of a boto3 response dict. The ``from_*``
constructors are the single place where response field names are read.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class ObjectSummary:
    """One entry of a bucket listing.

    Attributes:
        bucket: Bucket the object lives in
        key: Full object key
        size: Object size in bytes
        last_modified: Last modification time reported by the service
        etag: Entity tag, quotes included as the service returns it
    """

    bucket: str
    key: str
    size: int
    last_modified: Optional[datetime]
    etag: Optional[str]

    @classmethod
    def from_listing_entry(cls, bucket: str, entry: dict[str, Any]) -> "ObjectSummary":
        return cls(
            bucket=bucket,
            key=entry["Key"],
            size=entry.get("Size", 0),
            last_modified=entry.get("LastModified"),
            etag=entry.get("ETag"),
        )


@dataclass(frozen=True)
class ListingPage:
    """One round trip of a paginated listing.

    Attributes:
        summaries: Objects on this page, in service order
        truncated: True if more pages follow
        continuation_cursor: Token for the next page, None on the last page
    """

    summaries: tuple[ObjectSummary, ...] = field(default_factory=tuple)
    truncated: bool = False
    continuation_cursor: Optional[str] = None

    @classmethod
    def from_response(cls, bucket: str, response: dict[str, Any]) -> "ListingPage":
        return cls(
            summaries=tuple(
                ObjectSummary.from_listing_entry(bucket, entry)
                for entry in response.get("Contents", [])
            ),
            truncated=bool(response.get("IsTruncated", False)),
            continuation_cursor=response.get("NextContinuationToken"),
        )


@dataclass(frozen=True)
class Tag:
    """A single object tag."""

    key: str
    value: str

    @classmethod
    def from_dict(cls, data: dict[str, str]) -> "Tag":
        return cls(key=data["Key"], value=data["Value"])

    def to_dict(self) -> dict[str, str]:
        return {"Key": self.key, "Value": self.value}


@dataclass(frozen=True)
class UploadResult:
    """Outcome of a single-object upload.

    Attributes:
        server_side_encryption: Encryption algorithm applied at rest, e.g.
            "AES256", or None when the service reports none
        etag: Entity tag of the stored object
        version_id: Version id when the bucket is versioned
    """

    server_side_encryption: Optional[str] = None
    etag: Optional[str] = None
    version_id: Optional[str] = None

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> "UploadResult":
        return cls(
            server_side_encryption=response.get("ServerSideEncryption"),
            etag=response.get("ETag"),
            version_id=response.get("VersionId"),
        )
