"""Group photos of the same item and sign storage URLs for them."""

from .grouping import (
    DecodeError,
    Fingerprint,
    PhotoGroup,
    generate_perceptual_hash,
    group_photos_by_item,
)
from .storage import (
    CredentialError,
    SigningError,
    generate_download_url,
    generate_upload_url,
)

__all__ = [
    "DecodeError",
    "Fingerprint",
    "PhotoGroup",
    "generate_perceptual_hash",
    "group_photos_by_item",
    "CredentialError",
    "SigningError",
    "generate_download_url",
    "generate_upload_url",
]
