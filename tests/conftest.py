"""Test configuration and fixtures for s3-extension."""

import boto3
import pytest
from moto import mock_aws

from s3_extension import S3Client

BUCKET = "test-bucket"
REGION = "us-east-1"


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so no test can reach a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "test_key")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "test_secret")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "test_token")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)


@pytest.fixture
def s3_boto(aws_credentials):
    """A moto-backed boto3 client with an empty test bucket."""
    with mock_aws():
        client = boto3.client("s3", region_name=REGION)
        client.create_bucket(Bucket=BUCKET)
        yield client


@pytest.fixture
def s3(s3_boto):
    """S3Client over the moto-backed boto3 client."""
    return S3Client(s3_boto, max_workers=4)


@pytest.fixture
def put_objects(s3_boto):
    """Create objects in the test bucket from a key -> body mapping."""

    def _put(objects):
        for key, body in objects.items():
            s3_boto.put_object(Bucket=BUCKET, Key=key, Body=body)

    return _put


@pytest.fixture
def sample_file(tmp_path):
    """A small local file for upload tests."""
    path = tmp_path / "upload.txt"
    path.write_text("file contents")
    return path
