"""Test configuration for pytest."""

import logging
import os
from typing import Sequence

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from photolot.storage import ServiceCredential
from tests.helpers.image_factory import make_grid_image

SIGNER_EMAIL = "signer@example-project.iam.gserviceaccount.com"


@pytest.fixture(autouse=True)
def configure_test_logging():
    """Configure logging for tests to be minimal."""
    os.environ['PHOTOLOT_LOG_LEVEL'] = 'WARNING'
    logging.getLogger().setLevel(logging.WARNING)


@pytest.fixture
def save_grid(tmp_path):
    """Save a 9x8 grid image under tmp_path and return its path."""
    def _save(name: str, rows: Sequence[Sequence[int]]):
        path = tmp_path / name
        make_grid_image(rows).save(path)
        return path
    return _save


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_key) -> str:
    return rsa_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture
def credential(private_key_pem) -> ServiceCredential:
    return ServiceCredential(client_email=SIGNER_EMAIL, private_key=private_key_pem)
