"""
Bounding boxes of single primitives.

Arcs use the extent of their full circle and splines the hull of their
control points, so a box never under-covers the real curve.
"""

import math
import logging
from typing import Iterator, Optional

from .entities import (
    Primitive, Line, Polyline, Circle, Arc, Spline, Ellipse,
    BoundingBox, Point,
)

logger = logging.getLogger(__name__)


def _circle_extent(center: Point, radius: float) -> Iterator[Point]:
    cx, cy = center
    r = abs(radius)
    yield (cx - r, cy - r)
    yield (cx + r, cy + r)


def _primitive_points(primitive: Primitive) -> Optional[Iterator[Point]]:
    if isinstance(primitive, Line):
        return iter((primitive.start, primitive.end))
    if isinstance(primitive, Polyline):
        return iter(primitive.vertices)
    if isinstance(primitive, (Circle, Arc)):
        return _circle_extent(primitive.center, primitive.radius)
    if isinstance(primitive, Spline):
        return iter(primitive.control_points)
    if isinstance(primitive, Ellipse):
        return _circle_extent(primitive.center, math.hypot(*primitive.major_axis))
    return None


def entity_bounding_box(primitive: Primitive) -> Optional[BoundingBox]:
    """
    Compute the axis-aligned bounding box of a primitive.

    Args:
        primitive: Any primitive

    Returns:
        BoundingBox, or None for unknown types and geometry without a
        finite point
    """
    points = _primitive_points(primitive)
    if points is None:
        logger.debug(f"No bounding box for {primitive.entity_type.value}")
        return None

    try:
        return BoundingBox.from_points(points)
    except (TypeError, ValueError) as e:
        logger.debug(f"Malformed {primitive.entity_type.value} geometry: {e}")
        return None
