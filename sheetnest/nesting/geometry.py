"""
Group geometry - union boxes and 90° rotations.
"""

from typing import Sequence

from sheetnest.core.dxf.entities import BoundingBox, EntityGroup
from sheetnest.core.exceptions import InvalidRotationError

ALLOWED_ROTATIONS = (0, 90, 180, 270)


def group_bounding_box(group: EntityGroup) -> BoundingBox:
    """Union of the parent box and every child box"""
    return BoundingBox.union(member.bounding_box for member in group.members)


def normalize_rotation(rotation) -> int:
    """
    Validate a rotation angle.

    Returns:
        Rotation as int in {0, 90, 180, 270}

    Raises:
        InvalidRotationError: for any other angle
    """
    try:
        value = int(rotation)
    except (TypeError, ValueError):
        raise InvalidRotationError(rotation, list(ALLOWED_ROTATIONS))

    if value != rotation or value not in ALLOWED_ROTATIONS:
        raise InvalidRotationError(rotation, list(ALLOWED_ROTATIONS))
    return value


def rotated_bounding_box(bbox: BoundingBox, rotation: int) -> BoundingBox:
    """
    Footprint of a box after rotation.

    0° and 180° keep the box; 90° and 270° swap width and height and
    re-anchor the box at (0, 0). Corner coordinates are not tracked.
    """
    rotation = normalize_rotation(rotation)
    if rotation in (90, 270):
        return BoundingBox(0.0, 0.0, bbox.height, bbox.width)
    return bbox


def validate_rotations(rotations: Sequence) -> list:
    """Validate a list of rotations, keeping order and dropping repeats"""
    result = []
    for rotation in rotations:
        value = normalize_rotation(rotation)
        if value not in result:
            result.append(value)
    return result
