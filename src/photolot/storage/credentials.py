"""Service-account credentials used to sign storage URLs."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol


class CredentialError(Exception):
    """Raised when a service credential cannot be loaded or is invalid."""


@dataclass(frozen=True)
class ServiceCredential:
    """A provisioned signing key and the identity it belongs to."""
    client_email: str
    private_key: str = field(repr=False)  # PEM, never logged


class CredentialProvider(Protocol):
    def load(self) -> ServiceCredential:
        """Return the current credential."""
        ...


class StaticCredentialProvider:
    """Serves a credential held in memory."""

    def __init__(self, credential: ServiceCredential) -> None:
        self._credential = credential

    def load(self) -> ServiceCredential:
        return self._credential


class FileCredentialProvider:
    """
    Reads a service-account JSON document on every ``load()``.

    The document must contain ``private_key`` and ``client_email``. Literal
    ``\\n`` sequences in the key are turned back into newlines, as they are
    when keys are pasted into environment files or single-line JSON.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> ServiceCredential:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CredentialError(f"Cannot read credential file {self._path}: {exc}") from exc

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CredentialError(f"Credential file {self._path} is not valid JSON: {exc}") from exc

        if not isinstance(document, dict):
            raise CredentialError(f"Credential file {self._path} must contain a JSON object")

        missing = [key for key in ("private_key", "client_email") if not isinstance(document.get(key), str)]
        if missing:
            raise CredentialError(f"Credential file {self._path} is missing {', '.join(missing)}")

        return ServiceCredential(
            client_email=document["client_email"],
            private_key=document["private_key"].replace("\\n", "\n"),
        )
