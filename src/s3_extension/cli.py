"""Command-line interface for s3-extension.

Commands:
    - path: Render a canonical storage path
    - keys: Collect object keys under one or more prefixes
    - summaries: List objects (key and size) under a prefix
    - upload: Upload a local file
    - delete: Delete every object under one or more prefixes
    - tag add / tag remove: Add or remove a tag on every object under prefixes

Connection options are shared by every command that talks to S3. Without any
of them the default AWS credential and region chains are used.
"""

from typing import Annotated, Optional

import typer

from . import __version__
from .core import settings
from .core.exceptions import MalformedPathError
from .objectstorage import S3Client, StoragePath, Tag, create_s3_client

app = typer.Typer(
    name="s3-extension",
    help="Convenience helpers for S3 listing, tagging, upload and delete.",
    no_args_is_help=True,
)
tag_app = typer.Typer(help="Add or remove object tags by prefix.", no_args_is_help=True)
app.add_typer(tag_app, name="tag")


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"s3-extension {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    s3-extension: paginated listing, bulk keys, tagging, upload and delete for S3.
    """
    pass


BucketArgument = Annotated[str, typer.Argument(help="S3 bucket name")]
PrefixesArgument = Annotated[list[str], typer.Argument(help="One or more key prefixes")]
AccessKeyOption = Annotated[
    Optional[str], typer.Option("--access-key-id", help="AWS access key ID")
]
SecretKeyOption = Annotated[
    Optional[str], typer.Option("--secret-access-key", help="AWS secret access key")
]
SessionTokenOption = Annotated[
    Optional[str], typer.Option("--session-token", help="AWS session token")
]
RegionOption = Annotated[
    Optional[str],
    typer.Option("--region", help="AWS region name (default chain if omitted)"),
]
EndpointOption = Annotated[
    Optional[str], typer.Option("--endpoint-url", help="Custom S3 endpoint URL")
]
ProfileOption = Annotated[
    Optional[str], typer.Option("--aws-profile", help="AWS CLI profile name")
]


def _client(
    access_key_id: Optional[str],
    secret_access_key: Optional[str],
    session_token: Optional[str],
    region_name: Optional[str],
    endpoint_url: Optional[str],
    aws_profile: Optional[str],
) -> S3Client:
    """Build the S3 client for one command invocation."""
    return create_s3_client(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=session_token,
        region_name=region_name,
        endpoint_url=endpoint_url,
        aws_profile=aws_profile,
    )


@app.command("path")
def path_cmd(
    bucket: BucketArgument,
    key: Annotated[str, typer.Argument(help="Object key")],
    scheme: Annotated[
        Optional[str], typer.Option("--scheme", help="URI scheme, e.g. s3, s3a, s3n")
    ] = None,
    validate: Annotated[
        bool, typer.Option("--validate", help="Fail if the path is not a valid URI")
    ] = False,
) -> None:
    """
    Print the canonical scheme://bucket/key form of a path.

    Example:
        s3-extension path my-bucket /data/part-0.avro --scheme s3a
    """
    storage_path = StoragePath(bucket, key, scheme or settings.default_scheme)
    try:
        if validate:
            storage_path.to_uri()
    except MalformedPathError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(str(storage_path))


@app.command("keys")
def keys_cmd(
    bucket: BucketArgument,
    prefixes: PrefixesArgument,
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    region_name: RegionOption = None,
    endpoint_url: EndpointOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    Print every object key under the given prefixes, one per line.

    Example:
        s3-extension keys my-bucket data/2023/ data/2024/ --aws-profile myprofile
    """
    try:
        s3 = _client(
            access_key_id,
            secret_access_key,
            session_token,
            region_name,
            endpoint_url,
            aws_profile,
        )
        for key in s3.get_keys(bucket, prefixes):
            typer.echo(key)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("summaries")
def summaries_cmd(
    bucket: BucketArgument,
    prefix: Annotated[str, typer.Argument(help="Key prefix")] = "",
    suffix: Annotated[
        Optional[str],
        typer.Option("--suffix", help="Only keys ending with this string, e.g. .avro"),
    ] = None,
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    region_name: RegionOption = None,
    endpoint_url: EndpointOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    List objects under a prefix with their sizes.
    """
    try:
        s3 = _client(
            access_key_id,
            secret_access_key,
            session_token,
            region_name,
            endpoint_url,
            aws_profile,
        )
        summaries = s3.get_object_summaries(bucket, prefix, suffix_filter=suffix)

        if summaries:
            for summary in summaries:
                typer.echo(f"{summary.size:>12,}  {StoragePath(bucket, summary.key)}")
            typer.echo(f"Found {len(summaries)} objects.")
        else:
            typer.echo("No objects found.")

    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("upload")
def upload_cmd(
    file_path: Annotated[str, typer.Argument(help="Local file to upload")],
    bucket: BucketArgument,
    key: Annotated[str, typer.Argument(help="Destination object key")],
    encrypted: Annotated[
        bool,
        typer.Option(
            "--encrypted/--no-encrypted",
            help="Request AES256 server-side encryption",
        ),
    ] = True,
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    region_name: RegionOption = None,
    endpoint_url: EndpointOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    Upload a file with bucket-owner-full-control and optional encryption.
    """
    try:
        s3 = _client(
            access_key_id,
            secret_access_key,
            session_token,
            region_name,
            endpoint_url,
            aws_profile,
        )
        result = s3.upload_file(file_path, bucket, key, encrypted=encrypted)

        typer.echo(f"Uploaded {file_path} to {StoragePath(bucket, key)}")
        typer.echo(f"Encryption: {result.server_side_encryption or 'none'}")

    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("delete")
def delete_cmd(
    bucket: BucketArgument,
    prefixes: PrefixesArgument,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Delete without asking for confirmation")
    ] = False,
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    region_name: RegionOption = None,
    endpoint_url: EndpointOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    Delete every object under the given prefixes in one request.
    """
    try:
        s3 = _client(
            access_key_id,
            secret_access_key,
            session_token,
            region_name,
            endpoint_url,
            aws_profile,
        )
        keys = s3.get_keys(bucket, prefixes)
        if not keys:
            typer.echo("No objects found.")
            return

        if not yes:
            typer.confirm(f"Delete {len(keys)} objects from {bucket}?", abort=True)

        deleted = s3.delete_objects(bucket, keys)
        typer.echo(f"Deleted {deleted} of {len(keys)} objects.")

    except typer.Abort:
        raise
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@tag_app.command("add")
def tag_add_cmd(
    bucket: BucketArgument,
    prefixes: PrefixesArgument,
    key: Annotated[str, typer.Option("--key", help="Tag key")],
    value: Annotated[str, typer.Option("--value", help="Tag value")],
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    region_name: RegionOption = None,
    endpoint_url: EndpointOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    Append a tag to every object under the given prefixes.
    """
    try:
        s3 = _client(
            access_key_id,
            secret_access_key,
            session_token,
            region_name,
            endpoint_url,
            aws_profile,
        )
        updated = s3.add_tag_for_prefixes(bucket, prefixes, Tag(key, value))
        typer.echo(f"Tagged {updated} objects with {key}={value}.")
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@tag_app.command("remove")
def tag_remove_cmd(
    bucket: BucketArgument,
    prefixes: PrefixesArgument,
    key: Annotated[str, typer.Option("--key", help="Tag key to remove")],
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    region_name: RegionOption = None,
    endpoint_url: EndpointOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    Remove a tag key from every object under the given prefixes.
    """
    try:
        s3 = _client(
            access_key_id,
            secret_access_key,
            session_token,
            region_name,
            endpoint_url,
            aws_profile,
        )
        updated = s3.delete_tag_for_prefixes(bucket, prefixes, key)
        typer.echo(f"Removed tag {key} from {updated} objects.")
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
