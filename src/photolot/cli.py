import json
from pathlib import Path
from typing import List, Optional

import typer

from .config import Settings
from .files import list_photos, read_image_as_data_uri
from .grouping import (
    DecodeError,
    group_photos_by_item,
    group_photos_by_item_average,
    hash_file,
)
from .logging import get_logger
from .storage import (
    CredentialError,
    FileCredentialProvider,
    SigningError,
    generate_download_url,
    generate_upload_url,
)

app = typer.Typer(help="photolot: group photos by item and sign storage URLs", no_args_is_help=True)

CREDENTIALS_HELP = "Service-account JSON file (defaults to $PHOTOLOT_CREDENTIALS)"


@app.command("hash")
def hash_command(
    photo: Path = typer.Argument(..., help="Photo to fingerprint"),
    hex_output: bool = typer.Option(False, "--hex", help="Print the fingerprint as hex instead of decimal"),
) -> None:
    """Print the perceptual fingerprint of a photo."""
    logger = get_logger(__name__)

    try:
        fingerprint = hash_file(photo)
    except DecodeError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=1) from exc

    typer.echo(fingerprint.hex if hex_output else str(fingerprint))


@app.command("group")
def group_command(
    photos: List[Path] = typer.Argument(..., help="Photos to group, in upload order"),
    threshold: float = typer.Option(
        Settings().similarity_threshold, min=0.0, max=1.0, help="Minimum similarity to join a group"
    ),
    average: bool = typer.Option(False, "--average", help="Use average linkage instead of seed-only linkage"),
    as_json: bool = typer.Option(False, "--json", help="Print groups as JSON"),
) -> None:
    """
    Group photos that show the same item.

    Every photo must decode; one unreadable photo fails the whole run.
    """
    logger = get_logger(__name__)

    try:
        if average:
            groups = group_photos_by_item_average(photos, threshold)
        else:
            groups = group_photos_by_item(photos, threshold)
    except DecodeError as exc:
        logger.error(f"Grouping aborted: {exc}")
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(json.dumps([group.to_dict() for group in groups], indent=2))
        return

    for group in groups:
        typer.echo(f"{group.group_id} ({len(group)} photos, confidence {group.confidence:.2f})")
        for photo in group.photos:
            marker = "*" if photo == group.primary_photo else " "
            typer.echo(f"  {marker} {photo}")


def _settings_for(credentials: Optional[Path]) -> Settings:
    settings = Settings()
    if credentials is not None:
        settings.credentials_path = credentials
    return settings


def _emit_signed_url(kind: str, bucket: str, object_name: str, credentials: Optional[Path]) -> None:
    logger = get_logger(__name__)
    settings = _settings_for(credentials)
    provider = FileCredentialProvider(settings.credentials_path)
    generate = generate_upload_url if kind == "upload" else generate_download_url

    try:
        url = generate(bucket, object_name, provider=provider, settings=settings)
    except CredentialError as exc:
        logger.error(f"Credential problem: {exc}")
        raise typer.Exit(code=1) from exc
    except SigningError as exc:
        logger.error(f"Signing failed: {exc}")
        raise typer.Exit(code=1) from exc

    typer.echo(url)


@app.command("upload-url")
def upload_url_command(
    bucket: str = typer.Argument(..., help="Bucket name"),
    object_name: str = typer.Argument(..., help="Object name inside the bucket"),
    credentials: Optional[Path] = typer.Option(None, "--credentials", "-c", help=CREDENTIALS_HELP),
) -> None:
    """Print a signed PUT URL for uploading a JPEG."""
    _emit_signed_url("upload", bucket, object_name, credentials)


@app.command("download-url")
def download_url_command(
    bucket: str = typer.Argument(..., help="Bucket name"),
    object_name: str = typer.Argument(..., help="Object name inside the bucket"),
    credentials: Optional[Path] = typer.Option(None, "--credentials", "-c", help=CREDENTIALS_HELP),
) -> None:
    """Print a signed GET URL for downloading an object."""
    _emit_signed_url("download", bucket, object_name, credentials)


@app.command("data-uri")
def data_uri_command(
    photo: Path = typer.Argument(..., help="File to encode"),
) -> None:
    """Print a file as a base64 data URI."""
    logger = get_logger(__name__)

    try:
        typer.echo(read_image_as_data_uri(photo))
    except OSError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=1) from exc


@app.command("list")
def list_command(
    directory: Path = typer.Argument(..., exists=True, file_okay=False, help="Directory to scan"),
) -> None:
    """List the photos in a directory."""
    for photo in list_photos(directory):
        typer.echo(str(photo))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
