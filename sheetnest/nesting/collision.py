"""
Collision test between placed groups.

Footprints are axis-aligned rectangles anchored at each group's (x, y).
Two footprints are apart when, on at least one axis, the far edge of one
plus the spacing does not pass the near edge of the other. Footprints
exactly `spacing` apart are allowed.
"""

from typing import Iterable

from .models import PlacedGroup


def rectangles_collide(
    ax: float, ay: float, aw: float, ah: float,
    bx: float, by: float, bw: float, bh: float,
    spacing: float
) -> bool:
    """Separating-axis overlap test of two spacing-inflated rectangles"""
    separated = (
        ax + aw + spacing <= bx or
        bx + bw + spacing <= ax or
        ay + ah + spacing <= by or
        by + bh + spacing <= ay
    )
    return not separated


def groups_collide(a: PlacedGroup, b: PlacedGroup, spacing: float) -> bool:
    """
    Check whether two placed groups violate the minimum clearance.

    Args:
        a, b: Placed groups
        spacing: Minimum clearance (mm)

    Returns:
        True if the footprints overlap or are closer than spacing
    """
    return rectangles_collide(
        a.x, a.y, a.width, a.height,
        b.x, b.y, b.width, b.height,
        spacing
    )


def collides_with_any(x: float, y: float, width: float, height: float,
                      placed: Iterable[PlacedGroup], spacing: float) -> bool:
    """Check a footprint at (x, y) against every placed group"""
    return any(
        rectangles_collide(p.x, p.y, p.width, p.height, x, y, width, height, spacing)
        for p in placed
    )
