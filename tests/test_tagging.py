"""Tests for prefix-wide tag add and remove."""

from unittest.mock import MagicMock, Mock

import pytest
from botocore.exceptions import ClientError

from s3_extension import StorageReadError, StorageWriteError, Tag
from s3_extension.objectstorage.tagging import S3TagMutator

BUCKET = "test-bucket"
KEY = "object-key"


def _client_error(operation):
    return ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, operation)


class FakeTaggingClient:
    """Keeps tag sets per key without the service's duplicate-key check."""

    def __init__(self, tags=None):
        self.tags = {key: list(tag_set) for key, tag_set in (tags or {}).items()}
        self.writes = []

    def get_object_tagging(self, Bucket, Key):
        return {"TagSet": list(self.tags.get(Key, []))}

    def put_object_tagging(self, Bucket, Key, Tagging):
        self.writes.append(Key)
        self.tags[Key] = list(Tagging["TagSet"])
        return {}


def _mutator(client, keys):
    collector = Mock()
    collector.get_keys.return_value = list(keys)
    return S3TagMutator(client, collector)


class TestTaggingWithMoto:
    """Test tag updates against moto."""

    def test_add_tag(self, s3, s3_boto):
        s3_boto.put_object(Bucket=BUCKET, Key=KEY, Body=b"content")
        tag = Tag("key", "value")

        updated = s3.add_tag_for_prefixes(BUCKET, [KEY], tag)

        assert updated == 1
        assert s3.get_object_tags(BUCKET, KEY) == [tag]

    def test_add_tag_keeps_existing_tags(self, s3, s3_boto):
        s3_boto.put_object(Bucket=BUCKET, Key=KEY, Body=b"content")
        s3_boto.put_object_tagging(
            Bucket=BUCKET, Key=KEY, Tagging={"TagSet": [{"Key": "a", "Value": "1"}]}
        )

        s3.add_tag_for_prefixes(BUCKET, [KEY], Tag("b", "2"))

        assert sorted(s3.get_object_tags(BUCKET, KEY), key=lambda t: t.key) == [
            Tag("a", "1"),
            Tag("b", "2"),
        ]

    def test_delete_tag(self, s3, s3_boto):
        s3_boto.put_object(Bucket=BUCKET, Key=KEY, Body=b"content")
        s3_boto.put_object_tagging(
            Bucket=BUCKET,
            Key=KEY,
            Tagging={
                "TagSet": [{"Key": "key", "Value": "value"}, {"Key": "key2", "Value": "value2"}]
            },
        )

        s3.delete_tag_for_prefixes(BUCKET, [KEY], "key")

        assert s3.get_object_tags(BUCKET, KEY) == [Tag("key2", "value2")]

    def test_tags_every_object_under_prefixes(self, s3, put_objects):
        put_objects({f"{KEY}/a": b"a", f"{KEY}/b": b"b", "other/c": b"c"})

        updated = s3.add_tag_for_prefixes(BUCKET, [KEY], Tag("tier", "cold"))

        assert updated == 2
        assert s3.get_object_tags(BUCKET, f"{KEY}/a") == [Tag("tier", "cold")]
        assert s3.get_object_tags(BUCKET, f"{KEY}/b") == [Tag("tier", "cold")]
        assert s3.get_object_tags(BUCKET, "other/c") == []

    def test_missing_object(self, s3):
        with pytest.raises(StorageReadError):
            s3.get_object_tags(BUCKET, "missing")


class TestTagMutation:
    """Test read-modify-write behaviour with a fake collaborator."""

    def test_add_appends_duplicate_tag_key(self):
        client = FakeTaggingClient({"k": [{"Key": "env", "Value": "dev"}]})

        _mutator(client, ["k"]).add_tag_for_prefixes(BUCKET, ["p"], Tag("env", "prod"))

        assert client.tags["k"] == [
            {"Key": "env", "Value": "dev"},
            {"Key": "env", "Value": "prod"},
        ]

    def test_delete_removes_every_matching_key_only(self):
        client = FakeTaggingClient(
            {
                "k": [
                    {"Key": "env", "Value": "dev"},
                    {"Key": "owner", "Value": "team"},
                    {"Key": "env", "Value": "prod"},
                ]
            }
        )

        _mutator(client, ["k"]).delete_tag_for_prefixes(BUCKET, ["p"], "env")

        assert client.tags["k"] == [{"Key": "owner", "Value": "team"}]

    def test_delete_last_tag_writes_empty_set(self):
        client = FakeTaggingClient({"k": [{"Key": "env", "Value": "dev"}]})

        _mutator(client, ["k"]).delete_tag_for_prefixes(BUCKET, ["p"], "env")

        assert client.writes == ["k"]
        assert client.tags["k"] == []

    def test_delete_unknown_tag_rewrites_unchanged_set(self):
        client = FakeTaggingClient({"k": [{"Key": "env", "Value": "dev"}]})

        _mutator(client, ["k"]).delete_tag_for_prefixes(BUCKET, ["p"], "missing")

        assert client.tags["k"] == [{"Key": "env", "Value": "dev"}]

    def test_keys_resolved_through_collector(self):
        client = FakeTaggingClient()
        mutator = _mutator(client, ["a", "b"])

        mutator.add_tag_for_prefixes(BUCKET, ["p1", "p2"], Tag("t", "v"))

        mutator.key_collector.get_keys.assert_called_once_with(BUCKET, ["p1", "p2"])
        assert client.writes == ["a", "b"]

    def test_write_failure_stops_sequence(self):
        client = MagicMock()
        client.get_object_tagging.return_value = {"TagSet": []}
        client.put_object_tagging.side_effect = [
            {},
            _client_error("PutObjectTagging"),
            {},
        ]

        with pytest.raises(StorageWriteError, match="s3://test-bucket/b"):
            _mutator(client, ["a", "b", "c"]).add_tag_for_prefixes(
                BUCKET, ["p"], Tag("t", "v")
            )

        # "a" stays tagged, "c" is never touched
        assert client.put_object_tagging.call_count == 2
        assert client.get_object_tagging.call_count == 2

    def test_read_failure(self):
        client = MagicMock()
        client.get_object_tagging.side_effect = _client_error("GetObjectTagging")

        with pytest.raises(StorageReadError):
            _mutator(client, ["a"]).delete_tag_for_prefixes(BUCKET, ["p"], "t")

        client.put_object_tagging.assert_not_called()
