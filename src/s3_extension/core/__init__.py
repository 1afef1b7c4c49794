"""Core utilities and shared components for s3-extension."""

from .config import settings
from .exceptions import S3ExtensionError, ValidationError
from .observability import get_logger, get_tracer

__all__ = ["settings", "S3ExtensionError", "ValidationError", "get_logger", "get_tracer"]
