"""Perceptual grouping of photos that show the same item."""

from .model import (
    generate_perceptual_hash,
    group_photos,
    group_photos_by_item,
    group_photos_by_item_average,
)
from .hash import DecodeError, Fingerprint, compute_fingerprint, hash_file
from .distance import hamming_distance, similarity
from .cluster import PhotoGroup, group_fingerprints, group_fingerprints_average
from .adjust import merge_groups, split_photo

__all__ = [
    "generate_perceptual_hash",
    "group_photos",
    "group_photos_by_item",
    "group_photos_by_item_average",
    "DecodeError",
    "Fingerprint",
    "compute_fingerprint",
    "hash_file",
    "hamming_distance",
    "similarity",
    "PhotoGroup",
    "group_fingerprints",
    "group_fingerprints_average",
    "merge_groups",
    "split_photo",
]
