"""File helpers for handing photos to a front end."""

from __future__ import annotations

import base64
from pathlib import Path
from typing import Iterable, List

PHOTO_EXTENSIONS = frozenset({
    ".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp", ".tif", ".tiff", ".heic", ".heif",
})


def mime_type_for(path: Path | str) -> str:
    """Guess a photo MIME type from its extension, defaulting to JPEG."""
    suffix = Path(path).suffix.lower()
    if suffix == ".png":
        return "image/png"
    if suffix == ".gif":
        return "image/gif"
    return "image/jpeg"


def read_image_as_data_uri(path: Path | str) -> str:
    """Read a file and return it as a base64 ``data:`` URI."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise OSError(f"Failed to read file {path}: {exc}") from exc

    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type_for(path)};base64,{encoded}"


def list_photos(directory: Path | str, extensions: Iterable[str] = PHOTO_EXTENSIONS) -> List[Path]:
    """List photo files directly inside ``directory``, sorted by name."""
    wanted = {ext.lower() for ext in extensions}
    return sorted(
        entry for entry in Path(directory).iterdir()
        if entry.is_file() and entry.suffix.lower() in wanted
    )
