"""Difference-hash fingerprints for grouping photos of the same item."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import imagehash
import numpy as np
from PIL import Image

from ..logging import get_logger

logger = get_logger(__name__)

try:  # pragma: no cover - optional dependency
    from pillow_heif import register_heif_opener  # type: ignore

    register_heif_opener()
    HEIF_AVAILABLE = True
except ImportError:  # pragma: no cover - optional dependency
    HEIF_AVAILABLE = False

HASH_SIZE = 8
HASH_BITS = HASH_SIZE * HASH_SIZE
_BIT_WEIGHTS = np.left_shift(np.uint64(1), np.arange(HASH_BITS, dtype=np.uint64))


class DecodeError(Exception):
    """Raised when a photo cannot be read or decoded."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Failed to decode image {path}: {reason}")


@dataclass(frozen=True)
class Fingerprint:
    """
    64-bit dHash of a photo.

    Bit ``y * 8 + x`` is set when the pixel at column ``x`` of row ``y`` is
    strictly brighter than its right-hand neighbour in the 9x8 grayscale grid.
    """
    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value < 1 << HASH_BITS:
            raise ValueError(f"Fingerprint must fit in {HASH_BITS} bits: {self.value}")

    def __str__(self) -> str:
        return str(self.value)

    @property
    def bits(self) -> np.ndarray:
        """Row-major 8x8 boolean matrix of the fingerprint bits."""
        flat = (np.uint64(self.value) & _BIT_WEIGHTS) != 0
        return flat.reshape(HASH_SIZE, HASH_SIZE)

    def to_image_hash(self) -> imagehash.ImageHash:
        return imagehash.ImageHash(self.bits)

    @property
    def hex(self) -> str:
        return str(self.to_image_hash())

    @classmethod
    def from_image_hash(cls, image_hash: imagehash.ImageHash) -> Fingerprint:
        bits = np.asarray(image_hash.hash, dtype=bool).reshape(-1)
        if bits.size != HASH_BITS:
            raise ValueError(f"Expected a {HASH_BITS}-bit hash, got {bits.size} bits")
        return cls(int(np.sum(_BIT_WEIGHTS[bits], dtype=np.uint64)))

    @classmethod
    def from_hex(cls, hex_str: str) -> Fingerprint:
        return cls.from_image_hash(imagehash.hex_to_hash(hex_str))


def compute_fingerprint(image: Image.Image) -> Fingerprint:
    """
    Compute the difference hash of a decoded image.

    The image is reduced to a (HASH_SIZE + 1) x HASH_SIZE luminance grid with
    Lanczos resampling and each pixel is compared with its right neighbour.
    No contrast or hue normalisation is applied.
    """
    grid = image.convert("L").resize((HASH_SIZE + 1, HASH_SIZE), Image.LANCZOS)
    pixels = np.asarray(grid, dtype=np.int16)
    diff = pixels[:, :-1] > pixels[:, 1:]
    value = int(np.sum(_BIT_WEIGHTS[diff.reshape(-1)], dtype=np.uint64))
    return Fingerprint(value)


def hash_file(image_path: Path | str) -> Fingerprint:
    """
    Open a photo from disk and compute its fingerprint.

    Raises:
        DecodeError: If the file is missing, unreadable or not a supported image
    """
    path = Path(image_path)
    try:
        with Image.open(path) as img:
            img.load()
            fingerprint = compute_fingerprint(img)
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeError(path, str(exc)) from exc

    logger.debug(f"Computed fingerprint for {path}: {fingerprint.hex}")
    return fingerprint
