"""S3 client configuration and management.

The S3ClientManager builds the boto3 client that every s3-extension component
talks to. Connection handling, retries, credential and region resolution all
stay inside boto3; this module only decides which credential source to hand it.

Authentication Methods Supported:
    1. AWS CLI profiles (aws_profile)
    2. Explicit credentials (access_key_id, secret_access_key, session_token)
    3. The default credential and region chain (environment, config files,
       instance roles) when nothing explicit is configured

S3-Compatible Services:
    MinIO, LocalStack and similar services are reached through endpoint_url.
"""

from typing import Any, Dict, Optional

import boto3
from pydantic import BaseModel, ConfigDict, Field

from s3_extension.core import get_logger

logger = get_logger(__name__)


class S3ClientConfig(BaseModel):
    """Configuration for S3 client connections.

    Authentication Priority:
        1. If aws_profile is provided, use profile-based authentication
        2. If explicit credentials are provided, use them
        3. Otherwise, fall back to the default AWS credential chain

    Example:
        # MinIO endpoint
        config = S3ClientConfig(
            endpoint_url="http://localhost:9000",
            access_key_id="minioadmin",
            secret_access_key="minioadmin"
        )
    """

    model_config = ConfigDict(extra="forbid")

    access_key_id: Optional[str] = Field(None, description="AWS access key ID")
    secret_access_key: Optional[str] = Field(None, description="AWS secret access key")
    session_token: Optional[str] = Field(
        None, description="AWS session token for temporary credentials"
    )
    region_name: Optional[str] = Field(
        "us-east-1",
        description="AWS region name; None defers to the default region chain",
    )
    endpoint_url: Optional[str] = Field(
        None, description="Custom S3 endpoint URL for S3-compatible services"
    )
    aws_profile: Optional[str] = Field(
        None, description="AWS CLI profile name to use for credentials"
    )

    @classmethod
    def default_chain(cls) -> "S3ClientConfig":
        """Config that leaves credentials and region to boto3's default chains."""
        return cls(region_name=None)


class S3ClientManager:
    """Owns the lazily created boto3 S3 client for one configuration."""

    def __init__(self, config: S3ClientConfig):
        """Initialize S3 client manager.

        Args:
            config: S3 client configuration
        """
        self.config = config
        self._client = None
        logger.debug("S3 client manager initialized", region=config.region_name)

    @property
    def client(self):
        """Get or create S3 client instance."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self):
        """Create boto3 S3 client with the configured settings."""
        kwargs: Dict[str, Any] = {}

        if self.config.region_name:
            kwargs["region_name"] = self.config.region_name

        if self.config.endpoint_url:
            kwargs["endpoint_url"] = self.config.endpoint_url

        if self.config.aws_profile:
            session = boto3.Session(profile_name=self.config.aws_profile)
            client = session.client("s3", **kwargs)  # type: ignore
            logger.info(
                "S3 client created with profile", profile=self.config.aws_profile
            )
        else:
            if self.config.access_key_id and self.config.secret_access_key:
                kwargs.update(
                    {
                        "aws_access_key_id": self.config.access_key_id,
                        "aws_secret_access_key": self.config.secret_access_key,
                    }
                )
                if self.config.session_token:
                    kwargs["aws_session_token"] = self.config.session_token
                logger.info("S3 client created with explicit credentials")
            else:
                logger.info("S3 client created with default credential chain")

            client = boto3.client("s3", **kwargs)  # type: ignore

        return client
