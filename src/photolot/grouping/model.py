"""Public API for grouping photos by item."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from .hash import Fingerprint, hash_file
from .cluster import PhotoGroup, group_fingerprints, group_fingerprints_average
from ..logging import get_logger

logger = get_logger(__name__)


def generate_perceptual_hash(image_path: Path | str) -> str:
    """Return the fingerprint of a photo as a decimal string."""
    return str(hash_file(image_path))


def hash_photos(photos: Sequence[Tuple[str, Path | str]]) -> List[Tuple[str, Fingerprint]]:
    """
    Fingerprint every photo in order.

    The first photo that cannot be decoded aborts the whole batch with a
    DecodeError naming its path; no photo is skipped.
    """
    hashed = [(photo_id, hash_file(path)) for photo_id, path in photos]
    logger.info(f"Computed fingerprints for {len(hashed)} photos")
    return hashed


def group_photos(
    photos: Sequence[Tuple[str, Path | str]],
    threshold: float = 0.75,
) -> List[PhotoGroup]:
    """
    Group (identifier, path) pairs into items.

    Args:
        photos: Ordered (identifier, path) pairs
        threshold: Minimum similarity to the group's seed photo

    Returns:
        List of PhotoGroup objects in seed order

    Raises:
        DecodeError: If any photo cannot be decoded
        ValueError: If threshold is outside [0, 1]
    """
    if not photos:
        return []

    groups = group_fingerprints(hash_photos(photos), threshold)
    logger.info(f"Grouped {len(photos)} photos into {len(groups)} items")
    return groups


def group_photos_by_item(paths: Iterable[Path | str], threshold: float = 0.75) -> List[PhotoGroup]:
    """Group photo paths into items, using each path as its identifier."""
    return group_photos([(str(path), path) for path in paths], threshold)


def group_photos_by_item_average(paths: Iterable[Path | str], threshold: float = 0.70) -> List[PhotoGroup]:
    """Group photo paths using average linkage; see ``group_fingerprints_average``."""
    photos = [(str(path), path) for path in paths]
    if not photos:
        return []

    groups = group_fingerprints_average(hash_photos(photos), threshold)
    logger.info(f"Grouped {len(photos)} photos into {len(groups)} items (average linkage)")
    return groups
