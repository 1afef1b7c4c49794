"""Tests for canonical storage path rendering."""

import pytest

from s3_extension import MalformedPathError, StoragePath, format_path, to_uri


class TestFormatPath:
    """Test string rendering of bucket/key pairs."""

    def test_bucket_and_key(self):
        assert format_path("foo", "bar") == "s3://foo/bar"

    def test_single_leading_slash_stripped(self):
        assert format_path("foo", "/bar") == "s3://foo/bar"

    def test_all_leading_slashes_stripped(self):
        assert format_path("b", "///k") == "s3://b/k"

    def test_inner_and_trailing_slashes_kept(self):
        assert format_path("b", "/data//2024/") == "s3://b/data//2024/"

    def test_custom_scheme(self):
        assert format_path("foo", "/bar", scheme="s3n") == "s3n://foo/bar"

    def test_empty_key(self):
        assert format_path("foo", "") == "s3://foo/"

    def test_storage_path_is_a_value(self):
        assert StoragePath("foo", "bar") == StoragePath("foo", "bar", "s3")
        assert str(StoragePath("foo", "//bar")) == str(StoragePath("foo", "bar"))
        with pytest.raises(AttributeError):
            StoragePath("foo", "bar").bucket = "other"  # type: ignore[misc]


class TestToUri:
    """Test URI conversion of storage paths."""

    def test_uri_components(self):
        uri = to_uri("foo", "/bar")
        assert uri.scheme == "s3"
        assert uri.netloc == "foo"
        assert uri.path == "/bar"

    def test_custom_scheme_in_uri(self):
        uri = StoragePath("foo", "/bar", scheme="s3n").to_uri()
        assert uri.scheme == "s3n"
        assert uri.geturl() == "s3n://foo/bar"

    def test_scheme_case_kept(self):
        uri = to_uri("b", "k", scheme="S3A")
        assert uri.scheme == "S3A"
        assert uri.geturl() == "S3A://b/k"
        assert uri.geturl() == format_path("b", "k", "S3A")

    @pytest.mark.parametrize(
        "bucket,key",
        [
            ("foo", "bar"),
            ("my-bucket.logs", "/year=2024/month=01/part-0000.snappy.parquet"),
            ("b", "a%20b/c~d_e-f"),
            ("b", ""),
            ("", "key"),
            ("host:9000", "key"),
        ],
    )
    def test_round_trip(self, bucket, key):
        assert to_uri(bucket, key).geturl() == format_path(bucket, key)

    def test_authority_with_port(self):
        uri = to_uri("host:9000", "k")
        assert uri.netloc == "host:9000"
        assert uri.path == "/k"

    def test_empty_authority(self):
        uri = to_uri("", "k")
        assert uri.netloc == ""
        assert uri.geturl() == "s3:///k"

    @pytest.mark.parametrize(
        "bucket,key",
        [
            ("bad bucket", "key"),
            ("bucket[1]", "key"),
            ("host:port", "key"),
            ("bucket", "key with spaces"),
            ("bucket", "what?"),
            ("bucket", "a#b"),
            ("bucket", "100%"),
        ],
    )
    def test_malformed(self, bucket, key):
        with pytest.raises(MalformedPathError):
            to_uri(bucket, key)

    def test_invalid_scheme(self):
        with pytest.raises(MalformedPathError, match="scheme"):
            StoragePath("foo", "bar", scheme="3s").to_uri()

    def test_format_never_validates(self):
        assert format_path("bad bucket", "key") == "s3://bad bucket/key"


class TestParse:
    """Test parsing rendered paths back into StoragePath."""

    def test_parse(self):
        path = StoragePath.parse("s3a://foo/data/part-0.avro")
        assert path == StoragePath("foo", "data/part-0.avro", "s3a")

    def test_parse_round_trip(self):
        rendered = format_path("foo", "///bar/baz")
        assert str(StoragePath.parse(rendered)) == rendered

    @pytest.mark.parametrize("value", ["foo/bar", "s3:///bar"])
    def test_parse_rejects_incomplete(self, value):
        with pytest.raises(MalformedPathError):
            StoragePath.parse(value)

    def test_parse_error_chains_cause(self):
        with pytest.raises(MalformedPathError) as exc_info:
            StoragePath.parse("s3://[bucket/key")
        assert isinstance(exc_info.value.__cause__, ValueError)
