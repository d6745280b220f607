"""
DXF Contours - Closed-contour classification
============================================
Decides which primitives are cuttable boundaries and answers
point-in-contour queries for the grouper.
"""

import math
import logging
from typing import Sequence

from .entities import (
    Primitive, Polyline, Circle, Ellipse, Spline, Line, Arc, Point,
)

logger = logging.getLogger(__name__)


def distance(p1: Point, p2: Point) -> float:
    """Distance between two points"""
    return math.sqrt((p2[0] - p1[0])**2 + (p2[1] - p1[1])**2)


def _ends_meet(points: Sequence[Point], tolerance: float) -> bool:
    if len(points) < 2:
        return False
    return distance(points[0], points[-1]) <= tolerance


def is_closed_contour(primitive: Primitive, tolerance: float = 1.0) -> bool:
    """
    Check whether a primitive is a closed contour.

    Rules:
    - CIRCLE, ELLIPSE: always closed
    - LINE, ARC: never closed
    - POLYLINE: closed flag, else first and last vertex within tolerance
    - SPLINE: closed flag, else first and last control point within tolerance
    - anything else, or malformed data: not closed

    Args:
        primitive: Primitive to classify
        tolerance: Maximum endpoint gap (mm)

    Returns:
        True for closed contours
    """
    try:
        if isinstance(primitive, (Circle, Ellipse)):
            return True
        if isinstance(primitive, (Line, Arc)):
            return False
        if isinstance(primitive, Polyline):
            if primitive.closed:
                return True
            return _ends_meet(primitive.vertices, tolerance)
        if isinstance(primitive, Spline):
            if primitive.closed:
                return True
            return _ends_meet(primitive.control_points, tolerance)
    except (TypeError, ValueError, IndexError) as e:
        logger.debug(f"Cannot classify {primitive.entity_type.value}: {e}")
        return False

    return False


def point_in_polygon(point: Point, vertices: Sequence[Point]) -> bool:
    """
    Ray-casting point-in-polygon test.

    Args:
        point: Tested point
        vertices: Polygon vertices (closing edge is implicit)

    Returns:
        True if the point lies inside; polygons with fewer than 3 vertices
        contain nothing
    """
    n = len(vertices)
    if n < 3:
        return False

    px, py = point
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = vertices[i]
        xj, yj = vertices[j]
        if (yi > py) != (yj > py):
            x_cross = (xj - xi) * (py - yi) / (yj - yi) + xi
            if px < x_cross:
                inside = not inside
        j = i

    return inside


def is_container(primitive: Primitive) -> bool:
    """Only polylines can own cutouts"""
    return isinstance(primitive, Polyline) and len(primitive.vertices) >= 3


def contains_point(primitive: Primitive, point: Point) -> bool:
    """Check whether a container primitive encloses a point"""
    if not is_container(primitive):
        return False
    try:
        return point_in_polygon(point, primitive.vertices)
    except (TypeError, ValueError) as e:
        logger.debug(f"Point test failed on {primitive.entity_type.value}: {e}")
        return False


__all__ = [
    'distance',
    'is_closed_contour',
    'point_in_polygon',
    'is_container',
    'contains_point',
]
