"""Canonical URI rendering for bucket/key pairs.

A StoragePath renders as ``scheme://bucket/key`` with every leading slash of the
key removed, so ``StoragePath("b", "///k")`` and ``StoragePath("b", "k")`` name
the same object. Rendering never fails; converting to a parsed URI validates
the rendered string against RFC 3986 and raises MalformedPathError otherwise.
"""

import re
from dataclasses import dataclass
from urllib.parse import SplitResult, urlsplit

from s3_extension.core.exceptions import MalformedPathError

DEFAULT_SCHEME = "s3"

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
# reg-name (possibly empty) with an optional ":port"
_AUTHORITY_RE = re.compile(
    r"^(?:[A-Za-z0-9\-._~!$&'()*+,;=]|%[0-9A-Fa-f]{2})*(?::[0-9]*)?$"
)
# path: pchar / "/"; "?" and "#" would start a query or fragment
_PATH_RE = re.compile(r"^(?:[A-Za-z0-9\-._~!$&'()*+,;=:@/]|%[0-9A-Fa-f]{2})*$")


class StorageURI(SplitResult):
    """SplitResult that always renders ``scheme://``, even for an empty bucket."""

    __slots__ = ()

    def geturl(self) -> str:
        return f"{self.scheme}://{self.netloc}{self.path}"


@dataclass(frozen=True)
class StoragePath:
    """Immutable (bucket, key, scheme) triple with a canonical string form.

    Attributes:
        bucket: Bucket name, rendered as the URI authority
        object_key: Object key; leading slashes are dropped when rendering
        scheme: URI scheme, e.g. "s3", "s3a" or "s3n"
    """

    bucket: str
    object_key: str
    scheme: str = DEFAULT_SCHEME

    @property
    def normalized_key(self) -> str:
        return self.object_key.lstrip("/")

    def __str__(self) -> str:
        return f"{self.scheme}://{self.bucket}/{self.normalized_key}"

    def to_uri(self) -> StorageURI:
        """Validate the rendered path and return it as URI components.

        Returns:
            The URI; ``geturl()`` gives back ``str(self)`` with the scheme
            exactly as given

        Raises:
            MalformedPathError: If the rendered string is not a valid URI
        """
        rendered = str(self)

        if not _SCHEME_RE.match(self.scheme):
            raise MalformedPathError(f"Invalid URI scheme {self.scheme!r}: {rendered}")
        if not _AUTHORITY_RE.match(self.bucket):
            raise MalformedPathError(
                f"Bucket {self.bucket!r} is not a valid URI authority: {rendered}"
            )
        if not _PATH_RE.match(self.normalized_key):
            raise MalformedPathError(
                f"Object key {self.object_key!r} is not a valid URI path: {rendered}"
            )

        return StorageURI(self.scheme, self.bucket, "/" + self.normalized_key, "", "")

    @classmethod
    def parse(cls, uri: str) -> "StoragePath":
        """Build a StoragePath from a rendered ``scheme://bucket/key`` string.

        Raises:
            MalformedPathError: If the scheme or bucket is missing
        """
        try:
            parsed = urlsplit(uri)
        except ValueError as e:
            raise MalformedPathError(f"Failed to parse storage path '{uri}': {e}") from e

        if not parsed.scheme:
            raise MalformedPathError(f"Storage path is missing a scheme: {uri}")
        if not parsed.netloc:
            raise MalformedPathError(f"Storage path is missing a bucket: {uri}")

        return cls(
            bucket=parsed.netloc,
            object_key=parsed.path.lstrip("/"),
            scheme=parsed.scheme,
        )


def format_path(bucket: str, object_key: str, scheme: str = DEFAULT_SCHEME) -> str:
    """Render ``scheme://bucket/key`` with all leading slashes removed from the key."""
    return str(StoragePath(bucket, object_key, scheme))


def to_uri(bucket: str, object_key: str, scheme: str = DEFAULT_SCHEME) -> StorageURI:
    """Render and validate a storage path, see StoragePath.to_uri."""
    return StoragePath(bucket, object_key, scheme).to_uri()
