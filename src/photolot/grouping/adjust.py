"""Manual adjustments to photo groups after automatic grouping."""

from typing import Tuple

from .cluster import PhotoGroup, SINGLE_PHOTO_CONFIDENCE

# Confidence drops once a person overrides the automatic grouping.
MANUAL_ADJUSTMENT_PENALTY = 0.9


def merge_groups(first: PhotoGroup, second: PhotoGroup) -> PhotoGroup:
    """Merge ``second`` into ``first``, keeping the first group's id and primary photo."""
    return PhotoGroup(
        group_id=first.group_id,
        photos=first.photos + second.photos,
        primary_photo=first.primary_photo,
        confidence=min(first.confidence, second.confidence) * MANUAL_ADJUSTMENT_PENALTY,
    )


def split_photo(group: PhotoGroup, photo: str) -> Tuple[PhotoGroup, PhotoGroup]:
    """
    Move one photo out of a group into a new singleton group.

    Returns:
        (updated_group, new_group); the new group's id is "<group_id>-split"

    Raises:
        ValueError: If the photo is not a member of the group
    """
    if photo not in group.photos:
        raise ValueError(f"Photo {photo} is not in group {group.group_id}")

    remaining = tuple(p for p in group.photos if p != photo)
    updated = PhotoGroup(
        group_id=group.group_id,
        photos=remaining,
        primary_photo=remaining[0] if remaining else group.primary_photo,
        confidence=group.confidence * MANUAL_ADJUSTMENT_PENALTY,
    )
    new_group = PhotoGroup(
        group_id=f"{group.group_id}-split",
        photos=(photo,),
        primary_photo=photo,
        confidence=SINGLE_PHOTO_CONFIDENCE,
    )
    return updated, new_group
