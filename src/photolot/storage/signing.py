"""
Signed URLs for uploading and downloading photos from object storage.

A canonical request string is signed with the service account's RSA key
(PKCS#1 v1.5, SHA-256) and the signature is carried in the URL query. The
canonical layout is fixed by the storage service and must match byte for byte.
"""

from __future__ import annotations

import base64
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional
from urllib.parse import quote

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ..config import Settings
from ..logging import get_logger
from .credentials import (
    CredentialError,
    CredentialProvider,
    FileCredentialProvider,
    ServiceCredential,
)

logger = get_logger(__name__)

UPLOAD_CONTENT_TYPE = "image/jpeg"


class SigningError(Exception):
    """Raised when the canonical request cannot be signed."""


class Operation(Enum):
    """Storage operations a URL can grant, as (verb, content type, lifetime in seconds)."""
    WRITE = ("PUT", UPLOAD_CONTENT_TYPE, 900)
    READ = ("GET", "", 600)

    def __init__(self, verb: str, content_type: str, expiry_seconds: int) -> None:
        self.verb = verb
        self.content_type = content_type
        self.expiry_seconds = expiry_seconds


@dataclass(frozen=True)
class SigningRequest:
    operation: Operation
    bucket: str
    object_name: str
    expires: int

    @property
    def resource(self) -> str:
        return f"/{self.bucket}/{self.object_name}"

    def canonical_string(self) -> str:
        # verb, content MD5 (always empty), content type, expiry, resource
        return "\n".join([
            self.operation.verb,
            "",
            self.operation.content_type,
            str(self.expires),
            self.resource,
        ])


def load_private_key(credential: ServiceCredential) -> rsa.RSAPrivateKey:
    """Parse the credential's PEM key; only unencrypted RSA keys are accepted."""
    try:
        key = serialization.load_pem_private_key(credential.private_key.encode("utf-8"), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise CredentialError(f"Invalid private key for {credential.client_email}: {exc}") from exc

    if not isinstance(key, rsa.RSAPrivateKey):
        raise CredentialError(f"Private key for {credential.client_email} is not an RSA key")
    return key


def sign_string(credential: ServiceCredential, payload: str) -> str:
    """Sign ``payload`` with RSA PKCS#1 v1.5 / SHA-256 and return the base64 signature."""
    key = load_private_key(credential)
    try:
        signature = key.sign(payload.encode("utf-8"), padding.PKCS1v15(), hashes.SHA256())
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise SigningError(f"Failed to sign request for {credential.client_email}: {exc}") from exc
    return base64.b64encode(signature).decode("ascii")


def build_signed_url(
    request: SigningRequest,
    credential: ServiceCredential,
    storage_host: str = "https://storage.googleapis.com",
) -> str:
    signature = sign_string(credential, request.canonical_string())
    return (
        f"{storage_host}{request.resource}"
        f"?GoogleAccessId={quote(credential.client_email, safe='')}"
        f"&Expires={request.expires}"
        f"&Signature={quote(signature, safe='')}"
    )


def sign_url(
    operation: Operation,
    bucket: str,
    object_name: str,
    provider: CredentialProvider,
    clock: Callable[[], float] = time.time,
    expiry_seconds: Optional[int] = None,
    storage_host: str = "https://storage.googleapis.com",
) -> str:
    """
    Create a signed URL granting ``operation`` on ``bucket/object_name``.

    The credential is loaded from ``provider`` on every call.

    Raises:
        CredentialError: If the credential cannot be loaded or its key is invalid
        SigningError: If the signature cannot be computed
    """
    credential = provider.load()
    lifetime = operation.expiry_seconds if expiry_seconds is None else expiry_seconds
    request = SigningRequest(
        operation=operation,
        bucket=bucket,
        object_name=object_name,
        expires=int(clock()) + lifetime,
    )
    url = build_signed_url(request, credential, storage_host)
    logger.info(f"Signed {operation.verb} URL for {request.resource}, expires at {request.expires}")
    return url


def generate_upload_url(
    bucket: str,
    object_name: str,
    provider: Optional[CredentialProvider] = None,
    settings: Optional[Settings] = None,
) -> str:
    """Signed PUT URL for a JPEG upload, valid for 15 minutes by default."""
    settings = settings or Settings()
    return sign_url(
        Operation.WRITE,
        bucket,
        object_name,
        provider or FileCredentialProvider(settings.credentials_path),
        expiry_seconds=settings.upload_expiry_seconds,
        storage_host=settings.storage_host,
    )


def generate_download_url(
    bucket: str,
    object_name: str,
    provider: Optional[CredentialProvider] = None,
    settings: Optional[Settings] = None,
) -> str:
    """Signed GET URL, valid for 10 minutes by default."""
    settings = settings or Settings()
    return sign_url(
        Operation.READ,
        bucket,
        object_name,
        provider or FileCredentialProvider(settings.credentials_path),
        expiry_seconds=settings.download_expiry_seconds,
        storage_host=settings.storage_host,
    )
