"""Configuration management for s3-extension."""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "INFO"
    log_format: str = "json"
    otel_enabled: bool = False
    otel_service_name: str = "s3-extension"

    # Worker pool size for multi-prefix key collection; None uses the
    # ThreadPoolExecutor default.
    max_workers: Optional[int] = None
    default_scheme: str = "s3"

    model_config = {
        "env_prefix": "S3_EXTENSION_",
        "case_sensitive": False,
    }


settings = Settings()
