"""Signed object-storage URLs for photo upload and download."""

from .credentials import (
    CredentialError,
    CredentialProvider,
    FileCredentialProvider,
    ServiceCredential,
    StaticCredentialProvider,
)
from .signing import (
    Operation,
    SigningError,
    SigningRequest,
    generate_download_url,
    generate_upload_url,
    sign_url,
)

__all__ = [
    "CredentialError",
    "CredentialProvider",
    "FileCredentialProvider",
    "ServiceCredential",
    "StaticCredentialProvider",
    "Operation",
    "SigningError",
    "SigningRequest",
    "generate_download_url",
    "generate_upload_url",
    "sign_url",
]
