"""Clustering logic for grouping photos of the same item."""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Sequence, Tuple

from .hash import Fingerprint
from .distance import similarity
from ..logging import get_logger

logger = get_logger(__name__)

MULTI_PHOTO_CONFIDENCE = 0.85
SINGLE_PHOTO_CONFIDENCE = 0.5


@dataclass(frozen=True)
class PhotoGroup:
    """Photos believed to show one item; the seed photo is first and primary."""
    group_id: str
    photos: Tuple[str, ...]
    primary_photo: str
    confidence: float

    def __len__(self) -> int:
        return len(self.photos)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = asdict(self)
        result["photos"] = list(self.photos)
        return result


def _check_threshold(threshold: float) -> None:
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(f"Similarity threshold must be between 0 and 1, got {threshold}")


def _make_group(index: int, members: List[str], confidence: float) -> PhotoGroup:
    group_id = f"item-{index}"
    logger.info(f"Created group {group_id} with {len(members)} photos, primary: {members[0]}")
    return PhotoGroup(
        group_id=group_id,
        photos=tuple(members),
        primary_photo=members[0],
        confidence=confidence,
    )


def group_fingerprints(
    items: Sequence[Tuple[str, Fingerprint]],
    threshold: float = 0.75,
) -> List[PhotoGroup]:
    """
    Partition photos into groups with greedy seed-only single linkage.

    Photos are scanned in input order. Each unassigned photo seeds a new
    group and pulls in every later unassigned photo whose similarity to the
    seed is at least ``threshold``. Candidates are compared with the seed
    only, never with members added after it, so grouping is not transitive.

    Args:
        items: Ordered (identifier, fingerprint) pairs
        threshold: Minimum similarity (0-1) to join a seed's group

    Returns:
        Groups in seed order, members in scan order
    """
    _check_threshold(threshold)

    groups: List[PhotoGroup] = []
    assigned = set()

    for i, (seed_id, seed_hash) in enumerate(items):
        if i in assigned:
            continue

        members = [seed_id]
        assigned.add(i)

        for j in range(i + 1, len(items)):
            if j in assigned:
                continue

            candidate_id, candidate_hash = items[j]
            score = similarity(seed_hash, candidate_hash)
            if score >= threshold:
                members.append(candidate_id)
                assigned.add(j)
                logger.debug(f"Grouped {candidate_id} with seed {seed_id} (similarity: {score:.3f})")

        confidence = MULTI_PHOTO_CONFIDENCE if len(members) > 1 else SINGLE_PHOTO_CONFIDENCE
        groups.append(_make_group(len(groups) + 1, members, confidence))

    return groups


def group_fingerprints_average(
    items: Sequence[Tuple[str, Fingerprint]],
    threshold: float = 0.70,
) -> List[PhotoGroup]:
    """
    Partition photos using average linkage against every current member.

    Slower than ``group_fingerprints`` but less sensitive to a poor seed.
    Confidence is the mean pairwise similarity within the group.
    """
    _check_threshold(threshold)

    n = len(items)
    matrix = [[1.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            score = similarity(items[i][1], items[j][1])
            matrix[i][j] = matrix[j][i] = score

    groups: List[PhotoGroup] = []
    assigned = set()

    for i in range(n):
        if i in assigned:
            continue

        indices = [i]
        assigned.add(i)

        for j in range(i + 1, n):
            if j in assigned:
                continue

            average = sum(matrix[k][j] for k in indices) / len(indices)
            if average >= threshold:
                indices.append(j)
                assigned.add(j)

        members = [items[k][0] for k in indices]
        groups.append(_make_group(len(groups) + 1, members, _pairwise_confidence(indices, matrix)))

    return groups


def _pairwise_confidence(indices: List[int], matrix: List[List[float]]) -> float:
    if len(indices) == 1:
        return SINGLE_PHOTO_CONFIDENCE

    scores = [
        matrix[a][b]
        for pos, a in enumerate(indices)
        for b in indices[pos + 1:]
    ]
    return sum(scores) / len(scores)
