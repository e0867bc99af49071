"""Distance metrics for fingerprint comparison."""

from .hash import Fingerprint, HASH_BITS


def hamming_distance(a: Fingerprint, b: Fingerprint) -> int:
    """
    Calculate Hamming distance between two fingerprints.

    Args:
        a: First fingerprint
        b: Second fingerprint

    Returns:
        Number of differing bits (0 = identical, 64 = every bit differs)
    """
    return (a.value ^ b.value).bit_count()


def similarity(a: Fingerprint, b: Fingerprint) -> float:
    """Similarity in [0, 1]: 1.0 for identical fingerprints, 0.0 when every bit differs."""
    return 1.0 - hamming_distance(a, b) / HASH_BITS
