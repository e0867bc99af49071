import os
from dataclasses import dataclass, field
from pathlib import Path

CREDENTIALS_ENV = "PHOTOLOT_CREDENTIALS"


def _default_credentials_path() -> Path:
    return Path(os.getenv(CREDENTIALS_ENV, "service-account.json"))


@dataclass
class Settings:
    credentials_path: Path = field(default_factory=_default_credentials_path)
    similarity_threshold: float = 0.75
    upload_expiry_seconds: int = 900
    download_expiry_seconds: int = 600
    storage_host: str = "https://storage.googleapis.com"
