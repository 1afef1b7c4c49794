"""Exception hierarchy for s3-extension."""


class S3ExtensionError(Exception):
    """Base exception for all s3-extension errors."""

    pass


class ValidationError(S3ExtensionError):
    """Raised when validation fails."""

    pass


class MalformedPathError(ValidationError):
    """Raised when a storage path does not render to a valid URI."""

    pass


class PathNotFoundError(S3ExtensionError):
    """Raised when a local path is not found."""

    pass


class StorageError(S3ExtensionError):
    """Base class for failures reported by the storage service."""

    pass


class StorageListError(StorageError):
    """Raised when fetching a listing page fails."""

    pass


class StorageReadError(StorageError):
    """Raised when reading an object or its tags fails."""

    pass


class StorageWriteError(StorageError):
    """Raised when a put, delete or tag write fails."""

    pass
